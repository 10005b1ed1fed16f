"""Shared pytest fixtures for errgen tests."""

from __future__ import annotations

import types
from collections.abc import Callable
from typing import Any

import pytest
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from errgen.core.options import enum_options, enum_value_options


def make_enum(
    name: str,
    values: list[tuple[str, int, dict[str, Any] | None]],
    default_status: int | None = None,
) -> descriptor_pb2.EnumDescriptorProto:
    """Build an enum descriptor; each value is (symbol, number, options or None)."""
    enum = descriptor_pb2.EnumDescriptorProto(name=name)
    if default_status is not None:
        enum.options.CopyFrom(enum_options(default_status=default_status))
    for symbol, number, options in values:
        value = enum.value.add(name=symbol, number=number)
        if options is not None:
            value.options.CopyFrom(enum_value_options(**options))
    return enum


def make_request(
    *files: descriptor_pb2.FileDescriptorProto,
    generate: list[str] | None = None,
    parameter: str = "",
) -> plugin_pb2.CodeGeneratorRequest:
    """Build a request; by default every file is marked for generation."""
    request = plugin_pb2.CodeGeneratorRequest(parameter=parameter)
    request.proto_file.extend(files)
    request.file_to_generate.extend(generate if generate is not None else [f.name for f in files])
    return request


@pytest.fixture
def test_error_enum() -> descriptor_pb2.EnumDescriptorProto:
    """Return the TestError enum used across the tests."""
    return make_enum(
        "TestError",
        [
            ("TEST_ERROR_UNSPECIFIED", 0, None),
            (
                "TEST_ERROR_INVALID_FIELD_TEST1",
                1000,
                {
                    "status": 400,
                    "reason": "INVALID_ARGUMENT",
                    "message": "Invalid field_test1 value",
                },
            ),
            ("TEST_ERROR_INVALID_PATH_TEST2", 1001, {"status": 400}),
            ("TEST_ERROR_NOT_FOUND", 1002, {"message": "Resource not found"}),
        ],
        default_status=500,
    )


@pytest.fixture
def errors_file(test_error_enum: descriptor_pb2.EnumDescriptorProto) -> descriptor_pb2.FileDescriptorProto:
    """Return a schema file with error enums, a plain enum and a nested error enum."""
    file = descriptor_pb2.FileDescriptorProto(
        name="test/errors.proto",
        package="errgen.test",
        syntax="proto3",
    )
    file.enum_type.append(test_error_enum)
    file.enum_type.append(make_enum("Color", [("COLOR_UNSPECIFIED", 0, None), ("COLOR_RED", 1, None)]))

    order = file.message_type.add(name="Order")
    order.enum_type.append(
        make_enum(
            "Failure",
            [
                ("FAILURE_UNSPECIFIED", 0, None),
                ("FAILURE_CONFLICT", 7, {"reason": "CONFLICT"}),
            ],
            default_status=409,
        )
    )
    return file


@pytest.fixture
def plain_file() -> descriptor_pb2.FileDescriptorProto:
    """Return a schema file without any error metadata."""
    file = descriptor_pb2.FileDescriptorProto(name="test/plain.proto", package="errgen.test")
    file.enum_type.append(make_enum("Shape", [("SHAPE_UNSPECIFIED", 0, None), ("SHAPE_ROUND", 1, None)]))
    file.message_type.add(name="Empty")
    return file


@pytest.fixture
def request_message(
    errors_file: descriptor_pb2.FileDescriptorProto,
    plain_file: descriptor_pb2.FileDescriptorProto,
) -> plugin_pb2.CodeGeneratorRequest:
    """Return a request generating both schema files."""
    return make_request(errors_file, plain_file)


@pytest.fixture
def load_generated() -> Callable[[str], types.ModuleType]:
    """Return a loader that executes generated source as a fresh module."""

    def _load(content: str, name: str = "generated_errors") -> types.ModuleType:
        module = types.ModuleType(name)
        exec(compile(content, f"<{name}>", "exec"), module.__dict__)
        return module

    return _load
