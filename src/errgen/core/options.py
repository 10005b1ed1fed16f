"""
Access to the errgen schema options.

The extensions are declared in ``errgen/options.proto``. The compiler hands
them to plugins as extension fields of ``EnumOptions`` and ``EnumValueOptions``;
whether the protobuf runtime recognises them depends on what has been imported
into its default pool. To read them reliably the options message is re-decoded
through view messages that declare the same field numbers as ordinary fields.
The view messages live in a private descriptor pool.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

DEFAULT_STATUS_FIELD_NUMBER = 50501
OPTIONS_FIELD_NUMBER = 50502

OPTIONS_PROTO_PATH = Path(__file__).resolve().parent.parent / "options.proto"

_VIEW_PACKAGE = "errgen.view"

_FieldProto = descriptor_pb2.FieldDescriptorProto


def _add_field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    field_type: int,
    type_name: str | None = None,
) -> None:
    field = message.field.add(
        name=name,
        number=number,
        type=field_type,
        label=_FieldProto.LABEL_OPTIONAL,
    )
    if type_name:
        field.type_name = type_name


def _build_view_file() -> descriptor_pb2.FileDescriptorProto:
    """Describe the view messages (proto2, so every field tracks presence)."""
    file = descriptor_pb2.FileDescriptorProto(
        name="errgen/options_view.proto",
        package=_VIEW_PACKAGE,
        syntax="proto2",
    )

    error = file.message_type.add(name="ErrorOptions")
    _add_field(error, "status", 1, _FieldProto.TYPE_INT32)
    _add_field(error, "reason", 2, _FieldProto.TYPE_STRING)
    _add_field(error, "message", 3, _FieldProto.TYPE_STRING)

    enum_view = file.message_type.add(name="EnumOptionsView")
    _add_field(enum_view, "default_status", DEFAULT_STATUS_FIELD_NUMBER, _FieldProto.TYPE_INT32)

    value_view = file.message_type.add(name="EnumValueOptionsView")
    _add_field(
        value_view,
        "options",
        OPTIONS_FIELD_NUMBER,
        _FieldProto.TYPE_MESSAGE,
        type_name=f".{_VIEW_PACKAGE}.ErrorOptions",
    )
    return file


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_view_file().SerializeToString())


def _message_class(name: str) -> Any:
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{_VIEW_PACKAGE}.{name}"))


ErrorOptions = _message_class("ErrorOptions")
EnumOptionsView = _message_class("EnumOptionsView")
EnumValueOptionsView = _message_class("EnumValueOptionsView")


def _view(view_class: Any, options: Message) -> Any:
    """Re-decode an options message through a view class.

    Raises:
        DecodeError: If the serialized options cannot be decoded.
    """
    return view_class.FromString(options.SerializeToString())


def read_default_status(options: descriptor_pb2.EnumOptions) -> int | None:
    """Return the enum-level ``default_status`` option, or None when absent."""
    view = _view(EnumOptionsView, options)
    if view.HasField("default_status"):
        return view.default_status
    return None


def read_error_options(options: descriptor_pb2.EnumValueOptions) -> Any | None:
    """Return the per-value ``options`` group as an ErrorOptions view, or None when absent."""
    view = _view(EnumValueOptionsView, options)
    if view.HasField("options"):
        return view.options
    return None


def enum_options(default_status: int | None = None) -> descriptor_pb2.EnumOptions:
    """
    Build ``EnumOptions`` carrying the ``default_status`` extension.

    Args:
        default_status: Status to declare, or None to leave the option unset

    Returns:
        EnumOptions ready to be copied into an EnumDescriptorProto
    """
    view = EnumOptionsView()
    if default_status is not None:
        view.default_status = default_status
    options = descriptor_pb2.EnumOptions()
    options.MergeFromString(view.SerializeToString())
    return options


def enum_value_options(
    status: int | None = None,
    reason: str | None = None,
    message: str | None = None,
) -> descriptor_pb2.EnumValueOptions:
    """
    Build ``EnumValueOptions`` carrying the ``options`` extension.

    The extension is always present, even when every sub-field is left unset,
    matching ``[(errgen.options) = {}]`` in a schema.
    """
    view = EnumValueOptionsView()
    view.options.SetInParent()
    if status is not None:
        view.options.status = status
    if reason is not None:
        view.options.reason = reason
    if message is not None:
        view.options.message = message
    options = descriptor_pb2.EnumValueOptions()
    options.MergeFromString(view.SerializeToString())
    return options


__all__ = [
    "DEFAULT_STATUS_FIELD_NUMBER",
    "OPTIONS_FIELD_NUMBER",
    "OPTIONS_PROTO_PATH",
    "ErrorOptions",
    "enum_options",
    "enum_value_options",
    "read_default_status",
    "read_error_options",
]
