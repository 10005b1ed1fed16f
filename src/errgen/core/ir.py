"""
Intermediate representation of error enums.

An EnumModel is built once per enum by the option extractor, handed to the
naming resolver and the emitter, and then discarded.

Schema syntax:

    enum TestError {
      option (errgen.default_status) = 500;

      TEST_ERROR_UNSPECIFIED = 0;
      TEST_ERROR_INVALID_FIELD_TEST1 = 1000 [(errgen.options) = {
        status: 400, reason: "INVALID_ARGUMENT", message: "Invalid field_test1 value"
      }];
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_STATUS = 500


class EnumValueModel(BaseModel):
    """
    A single declared value of an error enum.

    Attributes:
        name: Declared value symbol (e.g. TEST_ERROR_INVALID_FIELD_TEST1)
        number: Literal numeric code
        status: Per-value status override, None when not declared
        reason: Reason overriding the textual representation, None when not declared
        message: Human message, None when not declared
    """

    name: str
    number: int
    status: int | None = None
    reason: str | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def resolved_message(self) -> str:
        """Configured message, or the empty string."""
        return self.message or ""


class EnumModel(BaseModel):
    """
    An error enum with its values in declaration order.

    Attributes:
        name: Enum name as declared
        full_name: Fully qualified schema name (package.Outer.Name)
        parents: Names of enclosing messages, outermost first
        values: Declared values, order-significant
        default_status: Status for values without an override
    """

    name: str
    full_name: str
    parents: list[str] = Field(default_factory=list)
    values: list[EnumValueModel] = Field(default_factory=list)
    default_status: int = DEFAULT_STATUS

    model_config = ConfigDict(frozen=True)

    def resolve_status(self, value: EnumValueModel) -> int:
        """Per-value override, else the enum default."""
        if value.status is not None:
            return value.status
        return self.default_status
