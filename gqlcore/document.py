"""Executable documents (operations, fragments, selections) and schemas."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from gqlcore.errors import Location
from gqlcore.types import (
    ArgumentsDefinition,
    DirectiveDefinition,
    EnumTypeDefinition,
    Extension,
    GraphQLType,
    NamedType,
    ObjectTypeDefinition,
    TypeName,
    Union,
)
from gqlcore.values import ArgumentList, DirectiveList, Ident


@dataclass(eq=False)
class Fragment:
    """The type condition and selections shared by fragments."""

    on: TypeName = TypeName("")
    selections: list = field(default_factory=list)


@dataclass(eq=False, kw_only=True)
class InlineFragment(Fragment):
    """A fragment written in place inside a selection set."""

    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()


@dataclass(eq=False, kw_only=True)
class FragmentDefinition(Fragment):
    """A named fragment declared at the top level of a document."""

    name: Ident
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()


@dataclass(eq=False)
class FragmentSpread:
    """A use of a named fragment inside a selection set."""

    name: Ident
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()


class FragmentList(list):
    """The fragment definitions of a document."""

    def get(self, name: str) -> Optional[FragmentDefinition]:
        """Return the named fragment, or None if it is absent."""
        return next((f for f in self if f.name.name == name), None)


class OperationType(str, enum.Enum):
    """The kind of an operation; the value is its directive location."""

    QUERY = "QUERY"
    MUTATION = "MUTATION"
    SUBSCRIPTION = "SUBSCRIPTION"


@dataclass(eq=False)
class Field:
    """A field requested in a selection set."""

    alias: Ident
    name: Ident
    arguments: ArgumentList = field(default_factory=ArgumentList)
    directives: DirectiveList = field(default_factory=DirectiveList)
    selection_set: Optional[list] = None
    selection_set_loc: Location = Location()


Selection = Field | InlineFragment | FragmentSpread


@dataclass(eq=False)
class OperationDefinition:
    """A query, mutation or subscription operation."""

    type: OperationType
    name: Ident = Ident("")
    vars: ArgumentsDefinition = field(default_factory=ArgumentsDefinition)
    selections: list = field(default_factory=list)
    directives: DirectiveList = field(default_factory=DirectiveList)
    loc: Location = Location()


class OperationList(list):
    """The operations of a document."""

    def get(self, name: str) -> Optional[OperationDefinition]:
        """Return the named operation, or None if it is absent."""
        return next((op for op in self if op.name.name == name), None)


@dataclass(eq=False)
class ExecutableDefinition:
    """A parsed document: its operations and fragments."""

    operations: OperationList = field(default_factory=OperationList)
    fragments: FragmentList = field(default_factory=FragmentList)


@dataclass(eq=False)
class Schema:
    """A schema: its types, directives and root operation types."""

    entry_points: dict[str, NamedType] = field(default_factory=dict)
    types: dict[str, NamedType] = field(default_factory=dict)
    directives: dict[str, DirectiveDefinition] = field(default_factory=dict)
    use_field_resolvers: bool = False
    entry_point_names: dict[str, str] = field(default_factory=dict)
    objects: list[ObjectTypeDefinition] = field(default_factory=list)
    unions: list[Union] = field(default_factory=list)
    enums: list[EnumTypeDefinition] = field(default_factory=list)
    extensions: list[Extension] = field(default_factory=list)

    def resolve(self, name: str) -> Optional[GraphQLType]:
        """Return the named type, or None if the schema has no such type."""
        return self.types.get(name)