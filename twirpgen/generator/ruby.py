"""Ruby (Twirp) service code generator."""

import logging
import posixpath
from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin
from jinja2 import Environment, PackageLoader

from .namespace import close_namespaces, indent, namespace_segments, open_namespaces
from .resolver import TypeResolver
from .types import FileDescriptor, ServiceDefinition
from .util import to_camel_case, to_snake_case

logger = logging.getLogger(__name__)

SERVICE_SUFFIX = "_twirp.rb"
MESSAGE_SUFFIX = "_pb.rb"

env = Environment(
    loader=PackageLoader("twirpgen.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

header_template = env.get_template("twirp_header.rb.j2")
service_template = env.get_template("twirp_service.rb.j2")


@dataclass(frozen=True)
class RpcEntry(DataClassJsonMixin):
    """One rpc registration line of a service block."""

    name: str
    input_type: str
    output_type: str
    dispatch_key: str


def _no_extension(path: str) -> str:
    return posixpath.splitext(path)[0]


def output_file_name(path: str) -> str:
    """e.g. "hello_world/service.proto" => "hello_world/service_twirp.rb"."""
    return _no_extension(path) + SERVICE_SUFFIX


def companion_file_name(path: str) -> str:
    """e.g. "hello_world/service.proto" => "service_pb.rb"."""
    return _no_extension(posixpath.basename(path)) + MESSAGE_SUFFIX


def rpc_entries(service: ServiceDefinition, resolver: TypeResolver) -> list[RpcEntry]:
    """Resolve every method of a service, in declaration order."""
    return [
        RpcEntry(
            name=method.name,
            input_type=resolver.resolve(method.input_type),
            output_type=resolver.resolve(method.output_type),
            dispatch_key=to_snake_case(method.name),
        )
        for method in service.methods
    ]


def _indented(text: str, depth: int) -> list[str]:
    return [f"{indent(depth)}{line}" if line else "" for line in text.splitlines()]


def render(f: FileDescriptor, resolver: TypeResolver, version: str) -> str:
    """Render the Twirp service and client classes for one file.

    Raises:
        UnresolvedTypeError: if a method refers to an unknown type.
    """
    logger.debug("emitting %s (%d services)", f.name, len(f.services))

    out = header_template.render(
        version=version, companion=companion_file_name(f.name)
    ).splitlines()

    segments = namespace_segments(f)
    depth = open_namespaces(out, segments, 0)

    for i, service in enumerate(f.services):
        if i > 0:
            out.append("")
        block = service_template.render(
            class_name=to_camel_case(service.name),
            package=f.package,
            service_name=service.name,
            rpcs=rpc_entries(service, resolver),
        )
        out.extend(_indented(block, depth))

    close_namespaces(out, segments, depth)

    return "\n".join(out) + "\n"
