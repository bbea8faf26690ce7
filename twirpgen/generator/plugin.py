"""protoc plugin envelope: request parsing, generation and response writing."""

import logging
from dataclasses import dataclass
from typing import BinaryIO

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError, EncodeError

from twirpgen import __version__

from . import ruby
from .loader import load_files
from .registry import DuplicateDefinitionError, Registry
from .resolver import TypeResolver
from .selector import UnknownFileError, dependency_files, select_files

logger = logging.getLogger(__name__)


class GeneratorError(RuntimeError):
    """Base class for fatal generator errors."""


class InputError(GeneratorError):
    """Raised when the request cannot be read or is unusable."""


class OutputError(GeneratorError):
    """Raised when the response cannot be serialized or written."""


@dataclass
class GeneratorOptions:
    """Options passed by protoc as the plugin parameter string."""

    skip_empty: bool = False


_FLAGS = {"skip-empty": "skip_empty"}


def parse_parameters(parameter: str) -> GeneratorOptions:
    """Parse "key[=value],..." into options.

    Flags accept no value, or one of true/false.
    """
    options = GeneratorOptions()
    for chunk in parameter.split(","):
        key, _, value = chunk.partition("=")
        key = key.strip()
        if not key:
            continue
        if key not in _FLAGS:
            raise InputError(f"unknown parameter: {key}")
        value = value.strip().lower()
        if value not in ("", "true", "false"):
            raise InputError(f"invalid value for {key}: {value}")
        setattr(options, _FLAGS[key], value != "false")
    return options


def read_request(stream: BinaryIO) -> plugin_pb2.CodeGeneratorRequest:
    """Read and parse a CodeGeneratorRequest from a binary stream."""
    try:
        data = stream.read()
    except OSError as e:
        raise InputError(f"{e} reading input") from e

    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as e:
        raise InputError(f"{e} parsing input proto") from e

    if not request.file_to_generate:
        raise InputError("no files to generate")

    return request


def generate(
    request: plugin_pb2.CodeGeneratorRequest,
    options: GeneratorOptions | None = None,
    version: str = __version__,
) -> plugin_pb2.CodeGeneratorResponse:
    """Generate one Twirp file per requested proto file.

    Raises:
        InputError: if nothing is requested or a requested file is missing.
        UnresolvedTypeError: if a method refers to an unknown type. No
            response is produced in that case.
    """
    if options is None:
        options = parse_parameters(request.parameter)
    if not request.file_to_generate:
        raise InputError("no files to generate")

    files = load_files(request.proto_file)
    try:
        selected = select_files(files, request.file_to_generate)
    except UnknownFileError as e:
        raise InputError(str(e)) from e
    logger.debug(
        "generating %d files, %d dependency-only",
        len(selected),
        len(dependency_files(files, selected)),
    )

    try:
        resolver = TypeResolver(Registry(files, selected))
    except DuplicateDefinitionError as e:
        raise InputError(str(e)) from e

    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    for f in selected:
        if options.skip_empty and not f.services:
            logger.debug("skipping %s: no services", f.name)
            continue
        out = response.file.add()
        out.name = ruby.output_file_name(f.name)
        out.content = ruby.render(f, resolver, version)

    return response


def write_response(stream: BinaryIO, response: plugin_pb2.CodeGeneratorResponse) -> None:
    """Serialize a response and write it to a binary stream."""
    try:
        data = response.SerializeToString()
    except EncodeError as e:
        raise OutputError(f"{e} marshaling response") from e
    try:
        stream.write(data)
        stream.flush()
    except OSError as e:
        raise OutputError(f"{e} writing response") from e
