"""Split the descriptor set into files to generate and dependency-only files."""

from collections.abc import Iterable, Sequence

from .types import FileDescriptor


class UnknownFileError(LookupError):
    """Raised when a file requested for generation is not in the descriptor set."""


def select_files(files: Sequence[FileDescriptor], names: Iterable[str]) -> list[FileDescriptor]:
    """Return the files named in the request, in request order, without duplicates.

    Every file not returned is dependency-only.
    """
    by_name = {f.name: f for f in files}
    selected: list[FileDescriptor] = []
    seen: set[str] = set()
    for name in names:
        if name not in by_name:
            raise UnknownFileError(f"file to generate not found in request: {name}")
        if name in seen:
            continue
        seen.add(name)
        selected.append(by_name[name])
    return selected


def dependency_files(
    files: Sequence[FileDescriptor], selected: Sequence[FileDescriptor]
) -> list[FileDescriptor]:
    """Return the files that are only present to resolve types, in input order."""
    selected_names = {f.name for f in selected}
    return [f for f in files if f.name not in selected_names]
