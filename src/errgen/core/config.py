"""
Generator configuration.

Parses the parameter string the compiler forwards to the plugin
(``--errors_opt=new_errors_func=myapp.errors;make_error,join_order=append``)
into a typed, read-only GeneratorConfig.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigurationError

DEFAULT_NEW_ERRORS_FUNC = "errgen.runtime;new_error"


class JoinOrder(str, Enum):
    """Position of the receiver among the errors combined by join()."""

    PREPEND = "prepend"
    APPEND = "append"


class GeneratorConfig(BaseModel):
    """
    Complete generator configuration.

    Attributes:
        new_errors_func: Construction function as ``<module>;<callable>``; the
            callable must accept ``(status, code, message, cause)``
        join_order: Whether join() puts the receiver before or after the
            supplied errors
        all_enums: Generate for every enum, not only enums carrying error options
    """

    new_errors_func: str = DEFAULT_NEW_ERRORS_FUNC
    join_order: JoinOrder = JoinOrder.PREPEND
    all_enums: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


def parse_parameter(parameter: str) -> GeneratorConfig:
    """
    Parse a comma-separated ``key=value`` parameter string.

    A key without ``=`` is read as ``true``. Later occurrences of a key
    override earlier ones.

    Args:
        parameter: Parameter string from the CodeGeneratorRequest

    Returns:
        GeneratorConfig with parsed values or defaults

    Raises:
        ConfigurationError: On unknown keys or invalid values
    """
    values: dict[str, str] = {}
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        if key not in GeneratorConfig.model_fields:
            raise ConfigurationError(f"unknown parameter {key!r}")
        values[key] = value.strip() if sep else "true"

    try:
        return GeneratorConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"invalid parameter: {problems}") from e
