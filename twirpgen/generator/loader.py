"""Conversion of protobuf descriptors into the generator model."""

from collections.abc import Iterable

from google.protobuf.descriptor_pb2 import DescriptorProto, FileDescriptorProto

from .types import (
    DefinitionKind,
    FileDescriptor,
    MessageDefinition,
    MethodDefinition,
    ServiceDefinition,
)


def _walk_message(
    proto: DescriptorProto,
    scope: str,
    file_name: str,
    parent: str | None,
    out: list[MessageDefinition],
) -> None:
    full_name = f"{scope}.{proto.name}"
    out.append(MessageDefinition(proto.name, full_name, file_name, parent))
    for enum in proto.enum_type:
        out.append(
            MessageDefinition(
                enum.name, f"{full_name}.{enum.name}", file_name, full_name, DefinitionKind.ENUM
            )
        )
    for nested in proto.nested_type:
        _walk_message(nested, full_name, file_name, full_name, out)


def load_file(proto: FileDescriptorProto) -> FileDescriptor:
    """Build a FileDescriptor, flattening nested messages and enums."""
    scope = f".{proto.package}" if proto.package else ""

    definitions: list[MessageDefinition] = []
    for enum in proto.enum_type:
        definitions.append(
            MessageDefinition(
                enum.name, f"{scope}.{enum.name}", proto.name, None, DefinitionKind.ENUM
            )
        )
    for message in proto.message_type:
        _walk_message(message, scope, proto.name, None, definitions)

    services = [
        ServiceDefinition(
            name=service.name,
            methods=[
                MethodDefinition(method.name, method.input_type, method.output_type)
                for method in service.method
            ],
        )
        for service in proto.service
    ]

    override = None
    if proto.HasField("options") and proto.options.HasField("ruby_package"):
        override = proto.options.ruby_package

    return FileDescriptor(
        name=proto.name,
        package=proto.package,
        namespace_override=override,
        services=services,
        definitions=definitions,
    )


def load_files(protos: Iterable[FileDescriptorProto]) -> list[FileDescriptor]:
    return [load_file(proto) for proto in protos]
