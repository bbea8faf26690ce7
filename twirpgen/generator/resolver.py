"""Map protobuf type references to Ruby constants."""

from .namespace import NAMESPACE_SEPARATOR, namespace_prefix, namespace_segments
from .registry import Registry
from .types import GenerationRole
from .util import to_camel_case


class TypeResolver:
    """Resolve fully-qualified type references against a registry."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def resolve(self, type_ref: str) -> str:
        """Convert a protobuf type reference to a Ruby constant.

        Types from files generated in this run are left unqualified, since the
        generated files are loaded together; everything else is addressed by
        its full module path.

        e.g. ".foo.my_message" generated in this run => "MyMessage"
        e.g. ".foo.Outer.Inner" generated in this run => "Outer::Inner"
        e.g. ".google.protobuf.Empty" from an import => "Google::Protobuf::Empty"

        Raises:
            UnresolvedTypeError: if the reference has no definition.
        """
        definition = self.registry.lookup(type_ref)
        owner = self.registry.owning_file(definition)

        prefix = ""
        if self.registry.generation_role(owner) != GenerationRole.GENERATE:
            prefix = namespace_prefix(namespace_segments(owner))

        names = [to_camel_case(d.name) for d in self.registry.lineage(definition)]
        return prefix + NAMESPACE_SEPARATOR.join(names)
