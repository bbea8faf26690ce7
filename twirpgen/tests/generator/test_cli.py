"""Tests for CLI interface."""

import json

from click.testing import CliRunner
from google.protobuf.compiler import plugin_pb2
from google.protobuf.descriptor_pb2 import FileDescriptorSet

from twirpgen import __version__
from twirpgen.generator.cli import cli, plugin


def _write_descriptor_set(path, *protos):
    descriptor_set = FileDescriptorSet()
    descriptor_set.file.extend(protos)
    path.write_bytes(descriptor_set.SerializeToString())
    return str(path)


def describe_plugin_command():
    def writes_response_to_stdout(expect, hello_request):
        runner = CliRunner()
        result = runner.invoke(plugin, [], input=hello_request.SerializeToString())
        expect(result.exit_code) == 0
        response = plugin_pb2.CodeGeneratorResponse.FromString(result.stdout_bytes)
        expect(response.file[0].name) == "hello_world/service_twirp.rb"
        expect(response.file[0].content).includes(f"protoc-gen-twirp_ruby {__version__}")
        expect(response.file[0].content).includes("class GreeterClient < Twirp::Client")

    def fails_without_files_to_generate(expect):
        runner = CliRunner()
        result = runner.invoke(plugin, [], input=b"")
        expect(result.exit_code) == 1
        expect(result.output).includes("error: no files to generate")
        expect(result.stdout_bytes) == b""

    def fails_on_unresolved_type(expect, proto_file):
        svc = proto_file("svc.proto", package="svc", services={"S": [("Go", ".svc.X", ".svc.X")]})
        request = plugin_pb2.CodeGeneratorRequest(file_to_generate=["svc.proto"])
        request.proto_file.append(svc)

        runner = CliRunner()
        result = runner.invoke(plugin, [], input=request.SerializeToString())
        expect(result.exit_code) == 1
        expect(result.output).includes("could not find message for .svc.X")
        expect(result.stdout_bytes) == b""

    def fails_on_unknown_parameter(expect, hello_request):
        hello_request.parameter = "bogus"
        runner = CliRunner()
        result = runner.invoke(plugin, [], input=hello_request.SerializeToString())
        expect(result.exit_code) == 1
        expect(result.output).includes("unknown parameter: bogus")

    def shows_version(expect):
        runner = CliRunner()
        result = runner.invoke(plugin, ["--version"])
        expect(result.exit_code) == 0
        expect(result.output).includes("protoc-gen-twirp_ruby")


def describe_gen_command():
    def writes_generated_files(expect, tmp_path, hello_proto):
        input_file = _write_descriptor_set(tmp_path / "set.pb", hello_proto)
        out_dir = tmp_path / "out"

        runner = CliRunner()
        result = runner.invoke(
            cli, ["gen", "-i", input_file, "-f", hello_proto.name, "-o", str(out_dir)]
        )
        expect(result.exit_code) == 0
        generated = out_dir / "hello_world" / "service_twirp.rb"
        expect(generated.exists()) == True
        expect(generated.read_text()).includes("class GreeterService < Twirp::Service")

    def skips_empty_files_when_asked(expect, tmp_path, proto_file):
        input_file = _write_descriptor_set(
            tmp_path / "set.pb", proto_file("m.proto", package="m", messages=["M"])
        )
        out_dir = tmp_path / "out"

        runner = CliRunner()
        result = runner.invoke(
            cli, ["gen", "-i", input_file, "-f", "m.proto", "-o", str(out_dir), "--skip-empty"]
        )
        expect(result.exit_code) == 0
        expect((out_dir / "m_twirp.rb").exists()) == False

    def fails_with_missing_input(expect, tmp_path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["gen", "-i", str(tmp_path / "missing.pb"), "-f", "a.proto", "-o", str(tmp_path)]
        )
        expect(result.exit_code) == 1
        expect(result.output).includes("reading descriptor set")

    def fails_when_output_is_a_file(expect, tmp_path, hello_proto):
        input_file = _write_descriptor_set(tmp_path / "set.pb", hello_proto)
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["gen", "-i", input_file, "-f", hello_proto.name, "-o", str(blocker)]
        )
        expect(result.exit_code) == 1
        expect(result.output).includes("error: ")
        expect(result.output).includes("writing output")
        expect(blocker.read_text()) == ""

    def removes_written_files_on_failure(expect, tmp_path, proto_file, hello_proto):
        other = proto_file("other.proto", package="other", services={"Other": []})
        input_file = _write_descriptor_set(tmp_path / "set.pb", other, hello_proto)
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        (out_dir / "hello_world").write_text("")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["gen", "-i", input_file, "-f", "other.proto", "-f", hello_proto.name, "-o", str(out_dir)],
        )
        expect(result.exit_code) == 1
        expect(result.output).includes("writing output")
        expect((out_dir / "other_twirp.rb").exists()) == False

    def fails_with_unknown_file(expect, tmp_path, hello_proto):
        input_file = _write_descriptor_set(tmp_path / "set.pb", hello_proto)
        runner = CliRunner()
        result = runner.invoke(cli, ["gen", "-i", input_file, "-f", "nope.proto"])
        expect(result.exit_code) == 1
        expect(result.output).includes("nope.proto")

    def requires_all_options(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["gen", "-i", "set.pb"])
        expect(result.exit_code) != 0
        expect("Missing option" in result.output) == True


def describe_info_command():
    def outputs_json(expect, tmp_path, hello_proto):
        input_file = _write_descriptor_set(tmp_path / "set.pb", hello_proto)
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-i", input_file, "-f", hello_proto.name, "--json"])
        expect(result.exit_code) == 0

        data = json.loads(result.output)
        info = data["hello_world/service.proto"]
        expect(info["output"]) == "hello_world/service_twirp.rb"
        expect(info["package"]) == "hello.world"
        expect(info["services"][0]["name"]) == "Greeter"
        expect(info["services"][0]["rpcs"]) == [
            {
                "name": "SayHello",
                "input_type": "HelloRequest",
                "output_type": "HelloResponse",
                "dispatch_key": "say_hello",
            }
        ]

    def outputs_table(expect, tmp_path, hello_proto):
        input_file = _write_descriptor_set(tmp_path / "set.pb", hello_proto)
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-i", input_file, "-f", hello_proto.name])
        expect(result.exit_code) == 0
        expect(result.output).includes("Greeter")
        expect(result.output).includes("say_hello")


def describe_main_group():
    def shows_help(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        expect(result.exit_code) == 0
        expect("gen" in result.output) == True
        expect("info" in result.output) == True
