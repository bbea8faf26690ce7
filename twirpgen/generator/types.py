"""Descriptor model consumed by the code generator."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

from dataclasses_json import DataClassJsonMixin


class DefinitionKind(StrEnum):
    """What a registered type definition declares."""

    MESSAGE = auto()
    ENUM = auto()


class GenerationRole(StrEnum):
    """Whether a file is emitted or only consulted for type resolution."""

    GENERATE = auto()
    DEPENDENCY_ONLY = auto()


@dataclass
class MessageDefinition(DataClassJsonMixin):
    """A message or enum definition.

    full_name is the fully-qualified reference form, e.g. ".foo.Outer.Inner".
    parent holds the full_name of the enclosing message for nested definitions
    and file_name is the path of the owning file; both are keys into the
    registry rather than object references.
    """

    name: str
    full_name: str
    file_name: str
    parent: str | None = None
    kind: DefinitionKind = DefinitionKind.MESSAGE


@dataclass
class MethodDefinition(DataClassJsonMixin):
    """An RPC method. Input and output are fully-qualified type references."""

    name: str
    input_type: str
    output_type: str


@dataclass
class ServiceDefinition(DataClassJsonMixin):
    """A service with its methods in declaration order."""

    name: str
    methods: list[MethodDefinition] = field(default_factory=list)


@dataclass
class FileDescriptor(DataClassJsonMixin):
    """A schema file.

    namespace_override is the explicit target namespace (ruby_package), already
    written with the target namespace separator.
    """

    name: str
    package: str = ""
    namespace_override: str | None = None
    services: list[ServiceDefinition] = field(default_factory=list)
    definitions: list[MessageDefinition] = field(default_factory=list)
