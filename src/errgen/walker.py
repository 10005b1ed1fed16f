"""
Descriptor walker.

Selects the schema files the compiler asked for, finds their error enums, and
runs extractor, naming resolver and emitter for each. One output unit per file
that has at least one eligible enum.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from errgen._version import get_version
from errgen.core.config import GeneratorConfig
from errgen.core.errors import GenerationError
from errgen.core.extractor import extract_enum, has_error_options
from errgen.core.naming import ResolvedEnum, class_name_for, resolve_constructor, resolve_enum
from errgen.emitter import ErrorsEmitter

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = "_errors.py"


@dataclass(frozen=True)
class GeneratedFile:
    """One output unit handed back to the compiler."""

    name: str
    content: str


@dataclass
class GeneratorResult:
    """
    Result of a generation pass.

    Attributes:
        files: Output units in input order
        warnings: Conditions worth reporting that did not stop generation
    """

    files: list[GeneratedFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_file(self, file: GeneratedFile) -> None:
        """Record an output unit."""
        self.files.append(file)

    def add_warning(self, warning: str) -> None:
        """Record a warning."""
        self.warnings.append(warning)

    def merge(self, other: GeneratorResult) -> None:
        """Merge another result into this one."""
        self.files.extend(other.files)
        self.warnings.extend(other.warnings)


def output_name(proto_name: str) -> str:
    """``pkg/errors.proto`` -> ``pkg/errors_errors.py``."""
    path = PurePosixPath(proto_name)
    stem = path.name.removesuffix(".proto")
    return str(path.with_name(stem + OUTPUT_SUFFIX))


def compiler_version_of(request: plugin_pb2.CodeGeneratorRequest) -> str | None:
    """Compiler version as ``v<major>.<minor>.<patch>[-suffix]``, if supplied."""
    if not request.HasField("compiler_version"):
        return None
    version = request.compiler_version
    text = f"v{version.major}.{version.minor}.{version.patch}"
    if version.suffix:
        text += f"-{version.suffix}"
    return text


def iter_enums(
    file: descriptor_pb2.FileDescriptorProto,
) -> Iterator[tuple[tuple[str, ...], descriptor_pb2.EnumDescriptorProto]]:
    """
    Yield ``(parents, enum)`` for every enum in a file.

    Top-level enums come first in declaration order, then enums nested in
    messages, depth-first in message declaration order.
    """
    for enum in file.enum_type:
        yield (), enum
    for message in file.message_type:
        yield from _iter_nested(message, ())


def _iter_nested(
    message: descriptor_pb2.DescriptorProto,
    parents: tuple[str, ...],
) -> Iterator[tuple[tuple[str, ...], descriptor_pb2.EnumDescriptorProto]]:
    scope = (*parents, message.name)
    for enum in message.enum_type:
        yield scope, enum
    for nested in message.nested_type:
        yield from _iter_nested(nested, scope)


class DescriptorWalker:
    """
    Generates error modules for a CodeGeneratorRequest.

    The construction function descriptor is resolved when the walker is
    created, so a configuration error aborts before any file is walked.
    """

    def __init__(self, config: GeneratorConfig, version: str | None = None):
        self.config = config
        self.constructor = resolve_constructor(config.new_errors_func)
        self.emitter = ErrorsEmitter(config, version or get_version())

    def generate(self, request: plugin_pb2.CodeGeneratorRequest) -> GeneratorResult:
        """
        Generate output units for every file marked for generation.

        Raises:
            GenerationError: If a file to generate is not described by the request
            DescriptorError: If error options of any enum cannot be decoded
        """
        wanted = set(request.file_to_generate)
        described = {proto.name for proto in request.proto_file}
        missing = sorted(wanted - described)
        if missing:
            raise GenerationError(f"files to generate not described by the request: {', '.join(missing)}")

        compiler_version = compiler_version_of(request)
        result = GeneratorResult()
        for proto in request.proto_file:
            if proto.name not in wanted:
                continue
            result.merge(self.generate_file(proto, compiler_version))
        return result

    def generate_file(
        self,
        proto: descriptor_pb2.FileDescriptorProto,
        compiler_version: str | None = None,
    ) -> GeneratorResult:
        """Generate the output unit for one file, if it has eligible enums."""
        result = GeneratorResult()
        enums = self.resolve_file(proto, result)
        if not enums:
            logger.debug("No error enums in %s", proto.name)
            return result

        content = self.emitter.render_file(proto.name, enums, self.constructor, compiler_version)
        generated = GeneratedFile(name=output_name(proto.name), content=content)
        result.add_file(generated)
        logger.info("Generated %s from %s (%d enums)", generated.name, proto.name, len(enums))
        return result

    def resolve_file(
        self,
        proto: descriptor_pb2.FileDescriptorProto,
        result: GeneratorResult,
    ) -> list[ResolvedEnum]:
        """Extract and resolve every eligible enum of a file."""
        enums = []
        class_names: set[str] = set()
        for parents, enum in iter_enums(proto):
            eligible = self.config.all_enums or has_error_options(
                enum, file=proto.name, package=proto.package, parents=parents
            )
            if not eligible:
                continue
            model = extract_enum(enum, file=proto.name, package=proto.package, parents=parents)
            resolved = resolve_enum(model, self.constructor, class_names)
            if resolved.class_name != class_name_for(model):
                logger.info("Enum %s renamed to %s", model.full_name, resolved.class_name)
            for value in resolved.values:
                if not value.canonical:
                    warning = (
                        f"{model.full_name}.{value.model.name} aliases number "
                        f"{value.model.number}; it shares the earlier value's branch"
                    )
                    logger.warning(warning)
                    result.add_warning(warning)
            enums.append(resolved)
        return enums


def generate(
    request: plugin_pb2.CodeGeneratorRequest,
    config: GeneratorConfig,
) -> GeneratorResult:
    """Run one generation pass. Pure function of request and config."""
    return DescriptorWalker(config).generate(request)
