"""
protoc plugin protocol.

Reads a CodeGeneratorRequest, runs the walker, and answers with a
CodeGeneratorResponse. Generation errors are reported through the response's
``error`` field with no files attached.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from errgen.core.config import parse_parameter
from errgen.core.errors import DescriptorError, ErrgenError
from errgen.walker import DescriptorWalker

logger = logging.getLogger(__name__)

SUPPORTED_FEATURES = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL


def build_response(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    """
    Generate the response for one request.

    Either every eligible enum generates and all output units are attached,
    or the response carries a single error and no files.
    """
    response = plugin_pb2.CodeGeneratorResponse(supported_features=SUPPORTED_FEATURES)

    try:
        config = parse_parameter(request.parameter)
        result = DescriptorWalker(config).generate(request)
    except ErrgenError as e:
        logger.error("Generation failed: %s", e)
        response.error = str(e)
        return response

    for generated in result.files:
        response.file.add(name=generated.name, content=generated.content)
    return response


def read_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    """Decode a serialized CodeGeneratorRequest."""
    try:
        return plugin_pb2.CodeGeneratorRequest.FromString(data)
    except DecodeError as e:
        raise DescriptorError(f"cannot decode CodeGeneratorRequest: {e}") from e


def run(stdin: BinaryIO, stdout: BinaryIO) -> plugin_pb2.CodeGeneratorResponse:
    """Read a request from ``stdin`` and write the response to ``stdout``."""
    request = read_request(stdin.read())
    logger.debug(
        "Request: %d files to generate, parameter %r",
        len(request.file_to_generate),
        request.parameter,
    )
    response = build_response(request)
    stdout.write(response.SerializeToString())
    stdout.flush()
    return response
