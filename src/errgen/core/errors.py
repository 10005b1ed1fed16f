"""
Error types for errgen configuration, descriptor decoding, and generation.
"""

from dataclasses import dataclass
from typing import Optional


class ErrgenError(Exception):
    """Base exception for all errgen errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ConfigurationError(ErrgenError):
    """
    Raised when the plugin parameters cannot be turned into a GeneratorConfig.

    Examples:
    - Construction function descriptor without exactly one ';'
    - Unknown parameter key
    - Invalid join order
    """

    pass


class DescriptorError(ErrgenError):
    """
    Raised when error metadata attached to a descriptor cannot be decoded.

    Examples:
    - default_status carried with a non-varint wire type
    - options extension that is not a valid ErrorOptions message
    """

    pass


class GenerationError(ErrgenError):
    """
    Raised when a file cannot be rendered.

    Examples:
    - Request names a file to generate that it does not describe
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the descriptor set.

    Attributes:
        file: Schema file name as given by the compiler
        enum: Optional enum full name
        value: Optional enum value name
    """

    file: str
    enum: str | None = None
    value: str | None = None

    def format(self) -> str:
        """
        Format the context as a human-readable string.

        Returns:
            Formatted string like: "errors.proto: enum TestError value TEST_ERROR_X"
        """
        location = self.file
        if self.enum:
            location += f": enum {self.enum}"
        if self.value:
            location += f" value {self.value}"
        return location


def make_descriptor_error(
    message: str,
    file: str,
    enum: str | None = None,
    value: str | None = None,
) -> DescriptorError:
    """
    Helper to create a DescriptorError with context.

    Args:
        message: Error description
        file: Schema file name
        enum: Optional enum full name
        value: Optional enum value name

    Returns:
        DescriptorError with context attached
    """
    return DescriptorError(message, ErrorContext(file=file, enum=enum, value=value))
