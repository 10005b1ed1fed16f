"""
Naming resolver.

Computes the Python names used by the emitter: the class name of each enum,
the member name of each value, the qualified default text of each value, and
the import of the configured construction function.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass

from .errors import ConfigurationError
from .ir import EnumModel, EnumValueModel

CONSTRUCTOR_SEPARATOR = ";"
CONSTRUCTOR_ALIAS = "_new_error"

# Attributes a member must not shadow on the generated class
RESERVED_MEMBER_NAMES = frozenset(
    {
        "error",
        "get_code",
        "get_status",
        "get_message",
        "join",
        "join_with_message",
        "name",
        "value",
        "mro",
    }
)

# Module-level names used by every generated file
RESERVED_CLASS_NAMES = frozenset({"enum", "annotations"})


@dataclass(frozen=True)
class ConstructorRef:
    """Import locator and identifier of the error construction function."""

    module: str
    name: str

    @property
    def import_line(self) -> str:
        return f"from {self.module} import {self.name} as {CONSTRUCTOR_ALIAS}"


@dataclass(frozen=True)
class ResolvedValue:
    """
    A declared value with its generated names.

    Attributes:
        model: The extracted value
        member: Python member name on the generated class
        qualified: Default textual representation, ``<Class>_<VALUE>``
        canonical: False when an earlier value already declared this number
    """

    model: EnumValueModel
    member: str
    qualified: str
    canonical: bool = True

    @property
    def text(self) -> str:
        """Reason when configured, else the qualified name."""
        return self.model.reason or self.qualified


@dataclass(frozen=True)
class ResolvedEnum:
    """An EnumModel together with every name the emitter needs."""

    model: EnumModel
    symbol: str
    class_name: str
    values: tuple[ResolvedValue, ...]
    constructor: ConstructorRef

    @property
    def unknown_text(self) -> str:
        return f"{self.symbol}:UNKNOWN_ERROR"

    @property
    def cases(self) -> tuple[ResolvedValue, ...]:
        """Values that get a branch, in declaration order."""
        return tuple(value for value in self.values if value.canonical)


def resolve_constructor(descriptor: str) -> ConstructorRef:
    """
    Split a construction function descriptor into module and identifier.

    Args:
        descriptor: ``<module>;<callable>``, e.g. ``errgen.runtime;new_error``

    Returns:
        ConstructorRef for the generated import

    Raises:
        ConfigurationError: If the descriptor does not have exactly two parts,
            or either part is not a valid Python name
    """
    parts = descriptor.split(CONSTRUCTOR_SEPARATOR)
    if len(parts) != 2:
        raise ConfigurationError(
            f"invalid new_errors_func {descriptor!r}, expected 'module{CONSTRUCTOR_SEPARATOR}callable'"
        )

    module, name = (part.strip() for part in parts)
    dotted = module.lstrip(".")
    if dotted:
        valid_module = all(
            segment.isidentifier() and not keyword.iskeyword(segment)
            for segment in dotted.split(".")
        )
    else:
        # "." names the enclosing package of the generated module
        valid_module = module.startswith(".")
    if not valid_module:
        raise ConfigurationError(f"invalid new_errors_func module {module!r}")
    if not name.isidentifier() or keyword.iskeyword(name):
        raise ConfigurationError(f"invalid new_errors_func callable {name!r}")

    return ConstructorRef(module=module, name=name)


def enum_symbol(model: EnumModel) -> str:
    """Enum name prefixed with its enclosing message names (``Outer_Inner``)."""
    return "_".join([*model.parents, model.name])


def class_name_for(model: EnumModel) -> str:
    """Python class name for an enum."""
    name = enum_symbol(model)
    if keyword.iskeyword(name) or name in RESERVED_CLASS_NAMES:
        return name + "_"
    return name


def member_name_for(symbol: str) -> str:
    """Python member name for a declared value symbol."""
    if symbol.startswith("_"):
        # Sunder, dunder and private names are not enum members
        return "V" + symbol
    if keyword.iskeyword(symbol) or symbol in RESERVED_MEMBER_NAMES:
        return symbol + "_"
    return symbol


def unique_name(name: str, taken: set[str]) -> str:
    """Append ``_`` until ``name`` is not in ``taken``, then claim it."""
    while name in taken:
        name += "_"
    taken.add(name)
    return name


def resolve_enum(
    model: EnumModel,
    constructor: ConstructorRef,
    taken_classes: set[str] | None = None,
) -> ResolvedEnum:
    """
    Attach generated names to every value of an enum.

    Args:
        model: Extracted enum
        constructor: Resolved construction function
        taken_classes: Class names already used in the same output file;
            updated with the name chosen for this enum

    Returns:
        ResolvedEnum whose class and member names are unique
    """
    symbol = enum_symbol(model)
    class_name = unique_name(
        class_name_for(model), taken_classes if taken_classes is not None else set()
    )

    # Declared symbols that need no escaping keep their name
    taken_members = {v.name for v in model.values if member_name_for(v.name) == v.name}
    seen: set[int] = set()
    values = []
    for value in model.values:
        member = member_name_for(value.name)
        if member != value.name:
            member = unique_name(member, taken_members)
        values.append(
            ResolvedValue(
                model=value,
                member=member,
                qualified=f"{symbol}_{value.name}",
                canonical=value.number not in seen,
            )
        )
        seen.add(value.number)

    return ResolvedEnum(
        model=model,
        symbol=symbol,
        class_name=class_name,
        values=tuple(values),
        constructor=constructor,
    )
