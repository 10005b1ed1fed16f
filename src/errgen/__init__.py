"""
errgen - error enums from protobuf schemas.

A protoc plugin that turns enums annotated with ``errgen/options.proto``
metadata into Python error enums with status, code, message and join helpers.
"""

from __future__ import annotations

from ._version import get_version
from .core.config import GeneratorConfig, JoinOrder, parse_parameter
from .core.errors import ConfigurationError, DescriptorError, ErrgenError, GenerationError

__version__ = get_version()

__all__ = [
    "__version__",
    "GeneratorConfig",
    "JoinOrder",
    "parse_parameter",
    "ErrgenError",
    "ConfigurationError",
    "DescriptorError",
    "GenerationError",
]
