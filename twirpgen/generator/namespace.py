"""Enclosing Ruby module computation and emission."""

from .types import FileDescriptor
from .util import to_camel_case

NAMESPACE_SEPARATOR = "::"
PACKAGE_SEPARATOR = "."
INDENT = "  "


def indent(depth: int) -> str:
    return INDENT * depth


def split_package(package: str) -> list[str]:
    """Turn a dotted package into module names.

    e.g. split_package("my.cool.package") => ["My", "Cool", "Package"]
    """
    if not package:
        return []
    return [to_camel_case(part) for part in package.split(PACKAGE_SEPARATOR)]


def namespace_segments(f: FileDescriptor) -> list[str]:
    """Module names enclosing the declarations of a file.

    An explicit override (ruby_package) wins over the package name.
    """
    if f.namespace_override:
        return [to_camel_case(part) for part in f.namespace_override.split(NAMESPACE_SEPARATOR)]
    return split_package(f.package)


def namespace_prefix(segments: list[str]) -> str:
    """Qualifier for referencing a constant inside the given modules."""
    if not segments:
        return ""
    return NAMESPACE_SEPARATOR.join(segments) + NAMESPACE_SEPARATOR


def open_namespaces(out: list[str], segments: list[str], depth: int) -> int:
    """Append one module line per segment and return the new depth."""
    for segment in segments:
        out.append(f"{indent(depth)}module {segment}")
        depth += 1
    return depth


def close_namespaces(out: list[str], segments: list[str], depth: int) -> int:
    """Append one end line per segment, innermost first, and return the new depth."""
    for _ in reversed(segments):
        depth -= 1
        out.append(f"{indent(depth)}end")
    return depth
