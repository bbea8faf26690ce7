"""Command-line interface for twirpgen."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

import click
from google.protobuf.compiler import plugin_pb2
from google.protobuf.descriptor_pb2 import FileDescriptorSet
from google.protobuf.message import DecodeError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from twirpgen import __version__
from twirpgen.generator import ruby
from twirpgen.generator.loader import load_files
from twirpgen.generator.plugin import (
    GeneratorError,
    GeneratorOptions,
    InputError,
    OutputError,
    generate,
    read_request,
    write_response,
)
from twirpgen.generator.registry import DuplicateDefinitionError, Registry, UnresolvedTypeError
from twirpgen.generator.resolver import TypeResolver
from twirpgen.generator.selector import UnknownFileError, select_files

LOG_LEVEL_ENV = "TWIRPGEN_LOG_LEVEL"


def _setup_logging(level: str) -> None:
    """Send log records to stderr; stdout may carry the binary response."""
    level = level.upper()
    if level not in logging.getLevelNamesMapping():
        level = "WARNING"
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    Console(stderr=True).print(
        f"error: {message}", markup=False, highlight=False, soft_wrap=True
    )
    sys.exit(1)


def _read_descriptor_set(input_file: str) -> FileDescriptorSet:
    try:
        with open(input_file, "rb") as f:
            data = f.read()
    except OSError as e:
        raise InputError(f"{e} reading descriptor set") from e

    descriptor_set = FileDescriptorSet()
    try:
        descriptor_set.ParseFromString(data)
    except DecodeError as e:
        raise InputError(f"{e} parsing descriptor set") from e
    return descriptor_set


def _write_outputs(
    output_dir: Path, response: plugin_pb2.CodeGeneratorResponse
) -> list[Path]:
    """Write every generated file, removing the ones already written on failure."""
    written: list[Path] = []
    try:
        for generated in response.file:
            path = output_dir / generated.name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(generated.content, encoding="utf-8")
            written.append(path)
    except OSError as e:
        for path in written:
            path.unlink(missing_ok=True)
        raise OutputError(f"{e} writing output") from e
    return written


@click.command()
@click.version_option(__version__, prog_name="protoc-gen-twirp_ruby")
def plugin() -> None:
    """protoc plugin: reads a CodeGeneratorRequest on stdin, writes the response to stdout."""
    _setup_logging(os.environ.get(LOG_LEVEL_ENV, "WARNING"))
    try:
        request = read_request(click.get_binary_stream("stdin"))
        response = generate(request)
        write_response(click.get_binary_stream("stdout"), response)
    except (GeneratorError, UnresolvedTypeError) as e:
        _fail(str(e))


@click.group()
@click.version_option(__version__, prog_name="twirpgen")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Twirp service code generator for Ruby."""
    _setup_logging("DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING"))


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_file",
    required=True,
    help="Descriptor set (protoc --descriptor_set_out --include_imports)",
)
@click.option(
    "--file", "-f", "file_names", multiple=True, required=True, help="Proto file to generate"
)
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option(
    "--skip-empty", is_flag=True, default=False, help="Skip files that declare no services"
)
def gen(input_file: str, file_names: tuple[str, ...], output_path: str, skip_empty: bool) -> None:
    """Generate Twirp service code from a descriptor set."""
    try:
        descriptor_set = _read_descriptor_set(input_file)
        request = plugin_pb2.CodeGeneratorRequest(file_to_generate=file_names)
        request.proto_file.extend(descriptor_set.file)
        response = generate(request, GeneratorOptions(skip_empty=skip_empty))
    except (GeneratorError, UnresolvedTypeError) as e:
        _fail(str(e))

    try:
        written = _write_outputs(Path(output_path), response)
    except OutputError as e:
        _fail(str(e))

    for path in written:
        print(f"Generated {path}")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Descriptor set")
@click.option(
    "--file", "-f", "file_names", multiple=True, required=True, help="Proto file to describe"
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, file_names: tuple[str, ...], output_json: bool) -> None:
    """Display the services and resolved rpc signatures of proto files."""
    try:
        files = load_files(_read_descriptor_set(input_file).file)
        selected = select_files(files, file_names)
        resolver = TypeResolver(Registry(files, selected))
        described = [
            (f, [(service, ruby.rpc_entries(service, resolver)) for service in f.services])
            for f in selected
        ]
    except (
        GeneratorError, DuplicateDefinitionError, UnknownFileError, UnresolvedTypeError
    ) as e:
        _fail(str(e))

    if output_json:
        data = {
            f.name: {
                "output": ruby.output_file_name(f.name),
                "package": f.package,
                "services": [
                    {**service.to_dict(), "rpcs": [rpc.to_dict() for rpc in rpcs]}
                    for service, rpcs in services
                ],
            }
            for f, services in described
        }
        print(json.dumps(data, indent=2))
        return

    console = Console()
    for f, services in described:
        console.print(f"[bold cyan]{f.name}[/bold cyan] -> {ruby.output_file_name(f.name)}")

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Service", style="white")
        table.add_column("Method", style="white")
        table.add_column("Input", style="yellow")
        table.add_column("Output", style="yellow")
        table.add_column("Ruby method", style="green")

        for service, rpcs in services:
            for rpc in rpcs:
                table.add_row(
                    service.name, rpc.name, rpc.input_type, rpc.output_type, rpc.dispatch_key
                )

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
