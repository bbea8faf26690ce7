"""Unit tests configuration file."""

import pytest
from google.protobuf.compiler import plugin_pb2
from google.protobuf.descriptor_pb2 import FileDescriptorProto


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def make_proto_file(name, package="", messages=(), services=None, ruby_package=None):
    """Build a FileDescriptorProto.

    services maps a service name to a list of (method, input, output) tuples.
    """
    proto = FileDescriptorProto(name=name, package=package)
    for message in messages:
        proto.message_type.add(name=message)
    for service_name, methods in (services or {}).items():
        service = proto.service.add(name=service_name)
        for method, input_type, output_type in methods:
            service.method.add(name=method, input_type=input_type, output_type=output_type)
    if ruby_package is not None:
        proto.options.ruby_package = ruby_package
    return proto


@pytest.fixture
def proto_file():
    return make_proto_file


@pytest.fixture
def hello_proto():
    return make_proto_file(
        "hello_world/service.proto",
        package="hello.world",
        messages=["HelloRequest", "HelloResponse"],
        services={
            "Greeter": [
                ("SayHello", ".hello.world.HelloRequest", ".hello.world.HelloResponse"),
            ]
        },
    )


@pytest.fixture
def hello_request(hello_proto):
    request = plugin_pb2.CodeGeneratorRequest(file_to_generate=[hello_proto.name])
    request.proto_file.append(hello_proto)
    return request
