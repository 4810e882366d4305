"""The GraphQL type system: named types, wrapping types and their definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from gqlcore.errors import Location, QueryError
from gqlcore.values import DirectiveList, Ident, Value

_UNRESOLVED = "TypeName needs to be resolved to actual type"


@dataclass(frozen=True)
class TypeName(Ident):
    """A reference to a named type that has not been resolved yet."""

    def kind(self) -> str:
        raise RuntimeError(_UNRESOLVED)

    def __str__(self) -> str:
        raise RuntimeError(_UNRESOLVED)


class _Named:
    """Shared behaviour of named types."""

    name: str
    desc: str

    @property
    def type_name(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        return self.desc


@dataclass(eq=False)
class ListType:
    """A list of some inner type, written ``[T]``."""

    of_type: GraphQLType

    def kind(self) -> str:
        return "LIST"

    def __str__(self) -> str:
        return f"[{self.of_type}]"


@dataclass(eq=False)
class NonNull:
    """A non-null wrapper of some inner type, written ``T!``."""

    of_type: GraphQLType

    def kind(self) -> str:
        return "NON_NULL"

    def __str__(self) -> str:
        return f"{self.of_type}!"


@dataclass(eq=False)
class InputValueDefinition:
    """An argument or input field definition."""

    name: Ident
    type: GraphQLType
    default: Optional[Value] = None
    desc: str = ""
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()
    type_loc: Location = Location()


class ArgumentsDefinition(list):
    """A list of input value definitions."""

    def get(self, name: str) -> Optional[InputValueDefinition]:
        """Return the named definition, or None if it is absent."""
        return next((v for v in self if v.name.name == name), None)


@dataclass(eq=False)
class DirectiveDefinition:
    """A directive declared by a schema."""

    name: str
    desc: str = ""
    locations: list[str] = field(default_factory=list)
    arguments: ArgumentsDefinition = field(default_factory=ArgumentsDefinition)
    loc: Location = Location()


@dataclass(eq=False)
class EnumValueDefinition:
    """One value of an enum type."""

    enum_value: str
    directives: DirectiveList = field(default_factory=DirectiveList)
    desc: str = ""
    loc: Location = Location()


@dataclass(eq=False)
class EnumTypeDefinition(_Named):
    """An enum type: a leaf type with a fixed set of values."""

    name: str
    enum_values: list[EnumValueDefinition] = field(default_factory=list)
    desc: str = ""
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()

    def kind(self) -> str:
        return "ENUM"

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class FieldDefinition:
    """A field of an object or interface type."""

    name: str
    arguments: ArgumentsDefinition = field(default_factory=ArgumentsDefinition)
    type: Optional[GraphQLType] = None
    directives: DirectiveList = field(default_factory=DirectiveList)
    desc: str = ""
    loc: Location = Location()


class FieldsDefinition(list):
    """The fields of an object or interface type."""

    def get(self, name: str) -> Optional[FieldDefinition]:
        """Return the named field, or None if it is absent."""
        return next((f for f in self if f.name == name), None)

    def names(self) -> list[str]:
        """Return the field names in order."""
        return [f.name for f in self]


@dataclass(eq=False)
class InputObject(_Named):
    """An input object type."""

    name: str
    desc: str = ""
    values: ArgumentsDefinition = field(default_factory=ArgumentsDefinition)
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()

    def kind(self) -> str:
        return "INPUT_OBJECT"

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class InterfaceTypeDefinition(_Named):
    """An interface type and the object types implementing it."""

    name: str
    possible_types: list = field(default_factory=list)
    fields: FieldsDefinition = field(default_factory=FieldsDefinition)
    desc: str = ""
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()

    def kind(self) -> str:
        return "INTERFACE"

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class ObjectTypeDefinition(_Named):
    """An object type."""

    name: str
    interfaces: list[InterfaceTypeDefinition] = field(default_factory=list)
    fields: FieldsDefinition = field(default_factory=FieldsDefinition)
    desc: str = ""
    directives: DirectiveList = field(default_factory=DirectiveList)
    interface_names: list[str] = field(default_factory=list)
    loc: Location = Location()

    def kind(self) -> str:
        return "OBJECT"

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class ScalarTypeDefinition(_Named):
    """A scalar leaf type."""

    name: str
    desc: str = ""
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()

    def kind(self) -> str:
        return "SCALAR"

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Union(_Named):
    """A union of object types."""

    name: str
    member_types: list[ObjectTypeDefinition] = field(default_factory=list)
    desc: str = ""
    directives: DirectiveList = field(default_factory=DirectiveList)
    type_names: list[str] = field(default_factory=list)
    loc: Location = Location()

    def kind(self) -> str:
        return "UNION"

    def __str__(self) -> str:
        return self.name


NamedType = (
    ScalarTypeDefinition
    | ObjectTypeDefinition
    | InterfaceTypeDefinition
    | Union
    | EnumTypeDefinition
    | InputObject
)
GraphQLType = NamedType | ListType | NonNull | TypeName


@dataclass(eq=False)
class Extension:
    """An extension of a named type."""

    type: NamedType
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()


def resolve_type(
    t: GraphQLType, resolver: Callable[[str], Optional[GraphQLType]]
) -> GraphQLType:
    """Replace every type-name reference in ``t`` by the type ``resolver`` gives.

    Raises QueryError if a name cannot be resolved.
    """
    if isinstance(t, NonNull):
        return NonNull(resolve_type(t.of_type, resolver))
    if isinstance(t, ListType):
        return ListType(resolve_type(t.of_type, resolver))
    if isinstance(t, TypeName):
        resolved = resolver(t.name)
        if resolved is None:
            raise QueryError(
                f'Unknown type "{t.name}".', [t.loc], rule="KnownTypeNames"
            )
        return resolved
    return t