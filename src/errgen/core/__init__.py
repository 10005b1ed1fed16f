"""
errgen core: configuration, option extraction, intermediate model and naming.
"""

from .config import DEFAULT_NEW_ERRORS_FUNC, GeneratorConfig, JoinOrder, parse_parameter
from .errors import ConfigurationError, DescriptorError, ErrgenError, ErrorContext, GenerationError
from .extractor import extract_enum, has_error_options
from .ir import DEFAULT_STATUS, EnumModel, EnumValueModel
from .naming import ConstructorRef, ResolvedEnum, ResolvedValue, resolve_constructor, resolve_enum

__all__ = [
    # Config
    "DEFAULT_NEW_ERRORS_FUNC",
    "GeneratorConfig",
    "JoinOrder",
    "parse_parameter",
    # Errors
    "ErrgenError",
    "ConfigurationError",
    "DescriptorError",
    "GenerationError",
    "ErrorContext",
    # Extraction
    "extract_enum",
    "has_error_options",
    # IR
    "DEFAULT_STATUS",
    "EnumModel",
    "EnumValueModel",
    # Naming
    "ConstructorRef",
    "ResolvedEnum",
    "ResolvedValue",
    "resolve_constructor",
    "resolve_enum",
]
