"""Read-only views of a schema in the shape the introspection types expose."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gqlcore.document import Schema
from gqlcore.types import (
    DirectiveDefinition,
    EnumTypeDefinition,
    FieldDefinition,
    GraphQLType,
    InputObject,
    InputValueDefinition,
    InterfaceTypeDefinition,
    ListType,
    NamedType,
    NonNull,
    ObjectTypeDefinition,
    Union,
    EnumValueDefinition,
)
from gqlcore.values import DirectiveList


def _non_empty(text: str) -> Optional[str]:
    return text or None


def _deprecation_reason(directives: DirectiveList) -> Optional[str]:
    d = directives.get("deprecated")
    if d is None:
        return None
    return d.arguments.must_get("reason").deserialize(None)


def _root_type(schema: Schema, kind: str) -> Optional[NamedType]:
    """Return the root type of the ``kind`` operation, if the schema has one."""
    roots = vars(schema).get("entry_points") or {}
    return roots.get(kind)


@dataclass(frozen=True)
class TypeInfo:
    """Introspection view of a type."""

    typ: GraphQLType

    def kind(self) -> str:
        return self.typ.kind()

    def name(self) -> Optional[str]:
        if isinstance(self.typ, NamedType):
            return self.typ.type_name
        return None

    def description(self) -> Optional[str]:
        if isinstance(self.typ, NamedType):
            return _non_empty(self.typ.description)
        return None

    def fields(self, include_deprecated: bool = False) -> Optional[list[FieldInfo]]:
        if not isinstance(self.typ, (ObjectTypeDefinition, InterfaceTypeDefinition)):
            return None
        return [
            FieldInfo(f)
            for f in self.typ.fields
            if include_deprecated or f.directives.get("deprecated") is None
        ]

    def interfaces(self) -> Optional[list[TypeInfo]]:
        if not isinstance(self.typ, ObjectTypeDefinition):
            return None
        return [TypeInfo(i) for i in self.typ.interfaces]

    def possible_types(self) -> Optional[list[TypeInfo]]:
        if isinstance(self.typ, InterfaceTypeDefinition):
            members = self.typ.possible_types
        elif isinstance(self.typ, Union):
            members = self.typ.member_types
        else:
            return None
        return [TypeInfo(t) for t in members]

    def enum_values(
        self, include_deprecated: bool = False
    ) -> Optional[list[EnumValueInfo]]:
        if not isinstance(self.typ, EnumTypeDefinition):
            return None
        return [
            EnumValueInfo(v)
            for v in self.typ.enum_values
            if include_deprecated or v.directives.get("deprecated") is None
        ]

    def input_fields(self) -> Optional[list[InputValueInfo]]:
        if not isinstance(self.typ, InputObject):
            return None
        return [InputValueInfo(v) for v in self.typ.values]

    def of_type(self) -> Optional[TypeInfo]:
        if isinstance(self.typ, (ListType, NonNull)):
            return TypeInfo(self.typ.of_type)
        return None


@dataclass(frozen=True)
class FieldInfo:
    """Introspection view of a field definition."""

    field: FieldDefinition

    def name(self) -> str:
        return self.field.name

    def description(self) -> Optional[str]:
        return _non_empty(self.field.desc)

    def args(self) -> list[InputValueInfo]:
        return [InputValueInfo(v) for v in self.field.arguments]

    def type(self) -> TypeInfo:
        return TypeInfo(self.field.type)

    def is_deprecated(self) -> bool:
        return self.field.directives.get("deprecated") is not None

    def deprecation_reason(self) -> Optional[str]:
        return _deprecation_reason(self.field.directives)


@dataclass(frozen=True)
class InputValueInfo:
    """Introspection view of an argument or input field."""

    value: InputValueDefinition

    def name(self) -> str:
        return self.value.name.name

    def description(self) -> Optional[str]:
        return _non_empty(self.value.desc)

    def type(self) -> TypeInfo:
        return TypeInfo(self.value.type)

    def default_value(self) -> Optional[str]:
        if self.value.default is None:
            return None
        return str(self.value.default)


@dataclass(frozen=True)
class EnumValueInfo:
    """Introspection view of an enum value."""

    value: EnumValueDefinition

    def name(self) -> str:
        return self.value.enum_value

    def description(self) -> Optional[str]:
        return _non_empty(self.value.desc)

    def is_deprecated(self) -> bool:
        return self.value.directives.get("deprecated") is not None

    def deprecation_reason(self) -> Optional[str]:
        return _deprecation_reason(self.value.directives)


@dataclass(frozen=True)
class DirectiveInfo:
    """Introspection view of a directive definition."""

    directive: DirectiveDefinition

    def name(self) -> str:
        return self.directive.name

    def description(self) -> Optional[str]:
        return _non_empty(self.directive.desc)

    def locations(self) -> list[str]:
        return self.directive.locations

    def args(self) -> list[InputValueInfo]:
        return [InputValueInfo(v) for v in self.directive.arguments]


@dataclass(frozen=True)
class SchemaInfo:
    """Introspection view of a whole schema."""

    schema: Schema

    def types(self) -> list[TypeInfo]:
        return [TypeInfo(self.schema.types[name]) for name in sorted(self.schema.types)]

    def directives(self) -> list[DirectiveInfo]:
        return [
            DirectiveInfo(self.schema.directives[name])
            for name in sorted(self.schema.directives)
        ]

    def _entry_point(self, kind: str) -> Optional[TypeInfo]:
        t = _root_type(self.schema, kind)
        return None if t is None else TypeInfo(t)

    def query_type(self) -> Optional[TypeInfo]:
        return self._entry_point("query")

    def mutation_type(self) -> Optional[TypeInfo]:
        return self._entry_point("mutation")

    def subscription_type(self) -> Optional[TypeInfo]:
        return self._entry_point("subscription")


def wrap_schema(schema: Schema) -> SchemaInfo:
    """Return the introspection view of ``schema``."""
    return SchemaInfo(schema)


def wrap_type(typ: GraphQLType) -> TypeInfo:
    """Return the introspection view of ``typ``."""
    return TypeInfo(typ)