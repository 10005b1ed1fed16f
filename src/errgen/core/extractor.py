"""
Option extractor.

Turns one ``EnumDescriptorProto`` into an ``EnumModel``, reading the enum-level
``default_status`` option and the per-value ``options`` group. Each sub-field of
the per-value group defaults independently.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from .errors import make_descriptor_error
from .ir import DEFAULT_STATUS, EnumModel, EnumValueModel
from .options import read_default_status, read_error_options

logger = logging.getLogger(__name__)


def qualified_name(package: str, parents: Sequence[str], name: str) -> str:
    """Join package, enclosing message names and a name with dots."""
    return ".".join(part for part in (package, *parents, name) if part)


def has_error_options(
    enum: descriptor_pb2.EnumDescriptorProto,
    *,
    file: str = "",
    package: str = "",
    parents: Sequence[str] = (),
) -> bool:
    """Whether the enum, or any of its values, carries errgen metadata."""
    try:
        if read_default_status(enum.options) is not None:
            return True
        return any(read_error_options(value.options) is not None for value in enum.value)
    except DecodeError as e:
        raise make_descriptor_error(
            f"cannot decode error options: {e}", file, qualified_name(package, parents, enum.name)
        ) from e


def extract_enum(
    enum: descriptor_pb2.EnumDescriptorProto,
    *,
    file: str,
    package: str = "",
    parents: Sequence[str] = (),
) -> EnumModel:
    """
    Build the intermediate model for one enum.

    Args:
        enum: Enum descriptor as delivered by the compiler
        file: Name of the schema file declaring the enum
        package: Schema package of that file
        parents: Enclosing message names, outermost first

    Returns:
        EnumModel with values in declaration order

    Raises:
        DescriptorError: If the options of the enum or a value cannot be decoded
    """
    full_name = qualified_name(package, parents, enum.name)

    try:
        default_status = read_default_status(enum.options)
    except DecodeError as e:
        raise make_descriptor_error(f"cannot decode default_status: {e}", file, full_name) from e

    values = [_extract_value(value, file=file, enum_name=full_name) for value in enum.value]

    model = EnumModel(
        name=enum.name,
        full_name=full_name,
        parents=list(parents),
        values=values,
        default_status=DEFAULT_STATUS if default_status is None else default_status,
    )
    logger.debug(
        "Extracted enum %s: %d values, default status %d",
        full_name,
        len(values),
        model.default_status,
    )
    return model


def _extract_value(
    value: descriptor_pb2.EnumValueDescriptorProto,
    *,
    file: str,
    enum_name: str,
) -> EnumValueModel:
    try:
        options = read_error_options(value.options)
    except DecodeError as e:
        raise make_descriptor_error(
            f"cannot decode error options: {e}", file, enum_name, value.name
        ) from e

    if options is None:
        return EnumValueModel(name=value.name, number=value.number)

    return EnumValueModel(
        name=value.name,
        number=value.number,
        status=options.status if options.HasField("status") else None,
        # An empty reason falls back to the qualified name like an unset one
        reason=options.reason or None,
        message=options.message if options.HasField("message") else None,
    )
