"""
Python code emitter for error enums.

Renders ResolvedEnum objects as ``enum.IntEnum`` subclasses. Every accessor is
a ``match`` statement with one case per declared number, in declaration
order, and a single ``case _`` default for integers outside the declared set.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from textwrap import dedent, indent

from errgen.core.config import GeneratorConfig, JoinOrder
from errgen.core.naming import CONSTRUCTOR_ALIAS, ConstructorRef, ResolvedEnum, ResolvedValue

GENERATOR_NAME = "protoc-gen-errors"

INDENT = "    "


def py_str(value: str) -> str:
    """Double-quoted Python string literal."""
    # JSON string escapes are a subset of Python's
    return json.dumps(value, ensure_ascii=False)


class ErrorsEmitter:
    """
    Render error enums as Python source.

    Example:
        emitter = ErrorsEmitter(config, version="0.1.0")
        text = emitter.render_file("errors.proto", [resolved], constructor)
    """

    def __init__(self, config: GeneratorConfig, version: str):
        self.config = config
        self.version = version

    def render_file(
        self,
        source: str,
        enums: Sequence[ResolvedEnum],
        constructor: ConstructorRef,
        compiler_version: str | None = None,
    ) -> str:
        """
        Render one output unit.

        Args:
            source: Schema file the enums were declared in
            enums: Resolved enums in emission order
            constructor: Construction function to import
            compiler_version: Compiler version for the header, if known

        Returns:
            Complete module source
        """
        lines = [
            f"# Code generated by {GENERATOR_NAME}. DO NOT EDIT.",
            "# versions:",
            f"#   {GENERATOR_NAME} {self.version}",
        ]
        if compiler_version:
            lines.append(f"#   protoc            {compiler_version}")
        lines.extend(
            [
                f"# source: {source}",
                "",
                f'"""Error enums generated from {source}."""',
                "",
                "from __future__ import annotations",
                "",
                "import enum",
                "",
                "from errgen.runtime import join_errors as _join_errors",
                constructor.import_line,
                "",
                "__all__ = [",
                *(f"{INDENT}{py_str(enum.class_name)}," for enum in enums),
                "]",
            ]
        )

        header = "\n".join(lines) + "\n"
        return header + "".join("\n\n" + self.render_enum(enum) for enum in enums)

    def render_enum(self, enum: ResolvedEnum) -> str:
        """Render the class for one enum."""
        name = enum.class_name
        parts = [
            self._render_members(enum),
            dedent(f'''
                @classmethod
                def _missing_(cls, value: object) -> {name} | None:
                    # Undeclared integers become pseudo-members without a name
                    if not isinstance(value, int):
                        return None
                    member = int.__new__(cls, value)
                    member._name_ = None
                    member._value_ = value
                    return member

                def __str__(self) -> str:
                    return self.error()
            ''').strip("\n"),
            self._render_switch(
                enum, "error", "str", lambda v: py_str(v.text), py_str(enum.unknown_text)
            ),
            self._render_switch(enum, "get_code", "int", lambda v: str(v.model.number), "0"),
            self._render_switch(
                enum,
                "get_status",
                "int",
                lambda v: str(enum.model.resolve_status(v.model)),
                str(enum.model.default_status),
            ),
            self._render_switch(
                enum, "get_message", "str", lambda v: py_str(v.model.resolved_message), '""'
            ),
            self._render_join(),
        ]

        body = "\n\n".join(indent(part, INDENT) for part in parts)
        return f"class {name}(enum.IntEnum):\n{body}\n"

    def _render_members(self, enum: ResolvedEnum) -> str:
        lines = [f'"""Error codes of {enum.model.full_name}."""', ""]
        lines.extend(f"{value.member} = {value.model.number}" for value in enum.values)
        return "\n".join(lines)

    def _render_switch(
        self,
        enum: ResolvedEnum,
        method: str,
        return_type: str,
        branch: Callable[[ResolvedValue], str],
        default: str,
    ) -> str:
        lines = [f"def {method}(self) -> {return_type}:", f"{INDENT}match self:"]
        case = INDENT * 2
        for value in enum.cases:
            lines.append(f"{case}case {enum.class_name}.{value.member}:")
            lines.append(f"{case}{INDENT}return {branch(value)}")
        lines.append(f"{case}case _:")
        lines.append(f"{case}{INDENT}return {default}")
        return "\n".join(lines)

    def _render_join(self) -> str:
        if self.config.join_order is JoinOrder.APPEND:
            cause = "_join_errors(*errors, self)"
        else:
            cause = "_join_errors(self, *errors)"

        return dedent(f"""
            def join(self, *errors: BaseException | None) -> BaseException:
                return self.join_with_message(self.get_message() or self.error(), *errors)

            def join_with_message(self, message: str, *errors: BaseException | None) -> BaseException:
                return {CONSTRUCTOR_ALIAS}(self.get_status(), self.get_code(), message, {cause})
        """).strip("\n")
