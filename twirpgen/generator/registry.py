"""Index of every type definition across the full descriptor set."""

import logging
from collections.abc import Iterable

from .types import FileDescriptor, GenerationRole, MessageDefinition

logger = logging.getLogger(__name__)


class UnresolvedTypeError(LookupError):
    """Raised when a type reference has no definition in the descriptor set."""


class DuplicateDefinitionError(ValueError):
    """Raised when two definitions share a fully-qualified name."""


class Registry:
    """Lookup tables built once from all files, read-only afterwards.

    Files are keyed by their path and definitions by their fully-qualified
    name. Files missing from the generated set are dependency-only.
    """

    def __init__(
        self,
        files: Iterable[FileDescriptor],
        generate: Iterable[FileDescriptor] = (),
    ):
        self.files: dict[str, FileDescriptor] = {}
        self.definitions: dict[str, MessageDefinition] = {}

        for f in files:
            self.files[f.name] = f
            for definition in f.definitions:
                existing = self.definitions.get(definition.full_name)
                if existing is not None:
                    raise DuplicateDefinitionError(
                        f"{definition.full_name} defined in both {existing.file_name}"
                        f" and {definition.file_name}"
                    )
                self.definitions[definition.full_name] = definition

        generated = {f.name for f in generate}
        self.roles: dict[str, GenerationRole] = {
            name: GenerationRole.GENERATE if name in generated else GenerationRole.DEPENDENCY_ONLY
            for name in self.files
        }
        logger.debug(
            "registered %d definitions from %d files", len(self.definitions), len(self.files)
        )

    def lookup(self, type_ref: str) -> MessageDefinition:
        """Return the definition for an exact fully-qualified name."""
        try:
            return self.definitions[type_ref]
        except KeyError:
            raise UnresolvedTypeError(f"could not find message for {type_ref}") from None

    def lineage(self, definition: MessageDefinition) -> list[MessageDefinition]:
        """Return the enclosing definitions, outermost first, ending with definition."""
        chain = [definition]
        seen = {definition.full_name}
        current = definition
        while current.parent is not None:
            current = self.lookup(current.parent)
            if current.full_name in seen:
                raise UnresolvedTypeError(f"cyclic nesting at {current.full_name}")
            seen.add(current.full_name)
            chain.append(current)
        chain.reverse()
        return chain

    def owning_file(self, definition: MessageDefinition) -> FileDescriptor:
        try:
            return self.files[definition.file_name]
        except KeyError:
            raise UnresolvedTypeError(
                f"{definition.full_name} belongs to unknown file {definition.file_name}"
            ) from None

    def generation_role(self, f: FileDescriptor) -> GenerationRole:
        return self.roles.get(f.name, GenerationRole.DEPENDENCY_ONLY)
