"""Validation state and the checks shared by every validation rule."""

from __future__ import annotations

import json
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from gqlcore.document import ExecutableDefinition, OperationDefinition, Schema
from gqlcore.errors import Location, QueryError
from gqlcore.types import (
    ArgumentsDefinition,
    EnumTypeDefinition,
    FieldsDefinition,
    GraphQLType,
    InputObject,
    InputValueDefinition,
    InterfaceTypeDefinition,
    ListType,
    NamedType,
    NonNull,
    ObjectTypeDefinition,
    ScalarTypeDefinition,
    Union,
    resolve_type,
)
from gqlcore.values import (
    ArgumentList,
    DirectiveList,
    Ident,
    ListValue,
    NullValue,
    ObjectValue,
    PrimitiveValue,
    TokenKind,
    Value,
    Variable,
)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _q(value: Any) -> str:
    """Quote a value the way error messages show names and types."""
    if value is None:
        return "%!q(<nil>)"
    return json.dumps(str(value), ensure_ascii=False)


def _show(value: Any) -> str:
    """Render an arbitrary input value for an error message."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(eq=False)
class ValidationContext:
    """State collected while validating one document against a schema."""

    schema: Schema
    doc: ExecutableDefinition
    max_depth: int = 0
    errs: list[QueryError] = field(default_factory=list)
    op_errs: defaultdict = field(default_factory=lambda: defaultdict(list))
    used_vars: defaultdict = field(default_factory=lambda: defaultdict(set))
    field_map: dict = field(default_factory=dict)
    overlap_validated: set = field(default_factory=set)

    def add_err(self, loc: Location, rule: str, message: str) -> None:
        """Record an error at one location."""
        self.add_err_multi_loc([loc], rule, message)

    def add_err_multi_loc(
        self, locs: Iterable[Location], rule: str, message: str
    ) -> None:
        """Record an error that points at several locations."""
        self.errs.append(QueryError(message, list(locs), rule=rule))


@dataclass(eq=False)
class OperationContext:
    """A validation context narrowed to the operations a selection belongs to."""

    ctx: ValidationContext
    ops: list[OperationDefinition] = field(default_factory=list)


def validate_value(
    c: OperationContext,
    definition: InputValueDefinition,
    value: Any,
    typ: Optional[GraphQLType],
) -> None:
    """Check a runtime variable value against the variable's type."""
    name = definition.name.name
    if isinstance(typ, NonNull):
        if value is None:
            c.ctx.add_err(
                definition.loc,
                "VariablesOfCorrectType",
                f'Variable "{name}" has invalid value null.\n'
                f'Expected type "{typ}", found null.',
            )
            return
        validate_value(c, definition, value, typ.of_type)
    elif isinstance(typ, ListType):
        if value is None:
            return
        if not isinstance(value, (list, tuple)):
            # Input coercion accepts a single item in place of a list.
            validate_value(c, definition, value, typ.of_type)
            return
        for elem in value:
            validate_value(c, definition, elem, typ.of_type)
    elif isinstance(typ, EnumTypeDefinition):
        if value is None:
            return
        if not isinstance(value, str):
            c.ctx.add_err(
                definition.loc,
                "VariablesOfCorrectType",
                f'Variable "{name}" has invalid type {type(value).__name__}.\n'
                f'Expected type "{typ}", found {_show(value)}.',
            )
            return
        if any(option.enum_value == value for option in typ.enum_values):
            return
        c.ctx.add_err(
            definition.loc,
            "VariablesOfCorrectType",
            f'Variable "{name}" has invalid value {value}.\n'
            f'Expected type "{typ}", found {value}.',
        )
    elif isinstance(typ, InputObject):
        if value is None:
            return
        if not isinstance(value, Mapping):
            c.ctx.add_err(
                definition.loc,
                "VariablesOfCorrectType",
                f'Variable "{name}" has invalid type {type(value).__name__}.\n'
                f'Expected type "{typ}", found {_show(value)}.',
            )
            return
        for f in typ.values:
            validate_value(c, f, value.get(f.name.name), f.type)


def validate_value_type(
    c: OperationContext, value: Value, typ: Optional[GraphQLType]
) -> tuple[bool, str]:
    """Check a literal against a type; return whether it fits and why not."""
    if isinstance(value, Variable):
        for op in c.ops:
            v2 = op.vars.get(value.name)
            if v2 is None:
                continue
            try:
                t2 = resolve_type(v2.type, c.ctx.schema.resolve)
                failed = False
            except QueryError:
                t2, failed = None, True
            if not isinstance(t2, NonNull) and v2.default is not None:
                t2 = NonNull(t2)
            if not failed and not type_can_be_used_as(t2, typ):
                c.ctx.add_err_multi_loc(
                    [v2.loc, value.loc],
                    "VariablesInAllowedPosition",
                    f"Variable {_q('$' + value.name)} of type {_q(t2)} "
                    f"used in position expecting type {_q(typ)}.",
                )
        return True, ""

    if isinstance(typ, NonNull):
        if _is_null(value):
            return False, f"Expected {_q(typ)}, found null."
        typ = typ.of_type
    if _is_null(value):
        return True, ""

    if isinstance(typ, (ScalarTypeDefinition, EnumTypeDefinition)):
        if isinstance(value, PrimitiveValue):
            if validate_basic_literal(value, typ):
                return True, ""
            return False, f"Expected type {_q(typ)}, found {value}."
        return True, ""

    if isinstance(typ, ListType):
        if not isinstance(value, ListValue):
            return validate_value_type(c, value, typ.of_type)
        for i, entry in enumerate(value.values):
            ok, reason = validate_value_type(c, entry, typ.of_type)
            if not ok:
                return False, f"In element #{i}: {reason}"
        return True, ""

    if isinstance(typ, InputObject):
        if not isinstance(value, ObjectValue):
            return False, f"Expected {_q(typ)}, found not an object."
        for f in value.fields:
            name = f.name.name
            iv = typ.values.get(name)
            if iv is None:
                return False, f"In field {_q(name)}: Unknown field."
            ok, reason = validate_value_type(c, f.value, iv.type)
            if not ok:
                return False, f"In field {_q(name)}: {reason}"
        given = {f.name.name for f in value.fields}
        for iv in typ.values:
            if (
                iv.name.name not in given
                and isinstance(iv.type, NonNull)
                and iv.default is None
            ):
                return (
                    False,
                    f"In field {_q(iv.name.name)}: Expected {_q(iv.type)}, found null.",
                )
        return True, ""

    return False, f"Expected type {_q(typ)}, found {value}."


def validate_basic_literal(value: PrimitiveValue, typ: Optional[GraphQLType]) -> bool:
    """Return whether a primitive literal is a valid value of a leaf type."""
    if isinstance(typ, ScalarTypeDefinition):
        if typ.name == "Int":
            if value.type is not TokenKind.INT:
                return False
            number = float(value.text)
            return _INT32_MIN <= number <= _INT32_MAX
        if typ.name == "Float":
            return value.type in (TokenKind.INT, TokenKind.FLOAT)
        if typ.name == "String":
            return value.type is TokenKind.STRING
        if typ.name == "Boolean":
            return value.type is TokenKind.IDENT and value.text in ("true", "false")
        if typ.name == "ID":
            return value.type in (TokenKind.INT, TokenKind.STRING)
        return True
    if isinstance(typ, EnumTypeDefinition):
        if value.type is not TokenKind.IDENT:
            return False
        return any(option.enum_value == value.text for option in typ.enum_values)
    return False


def validate_literal(c: OperationContext, value: Value) -> None:
    """Check a literal for duplicate fields and undefined variables."""
    if isinstance(value, ObjectValue):
        seen: dict[str, Location] = {}
        for f in value.fields:
            validate_name(c.ctx, seen, f.name, "UniqueInputFieldNames", "input field")
            validate_literal(c, f.value)
    elif isinstance(value, ListValue):
        for entry in value.values:
            validate_literal(c, entry)
    elif isinstance(value, Variable):
        for op in c.ops:
            definition = op.vars.get(value.name)
            if definition is None:
                by_op = f" by operation {_q(op.name.name)}" if op.name.name else ""
                c.ctx.op_errs[op].append(
                    QueryError(
                        f"Variable {_q('$' + value.name)} is not defined{by_op}.",
                        [value.loc, op.loc],
                        rule="NoUndefinedVariables",
                    )
                )
                continue
            validate_value_type(c, value, resolve_checked(c.ctx, definition.type))
            c.ctx.used_vars[op].add(definition)


def validate_directives(
    c: OperationContext, location: str, directives: DirectiveList
) -> None:
    """Check the directives applied at one location."""
    seen: dict[str, Location] = {}
    for d in directives:
        name = d.name.name
        _validate_name_custom(
            c.ctx,
            seen,
            d.name,
            "UniqueDirectivesPerLocation",
            lambda name=name: f"The directive {_q(name)} can only be used once at this location.",
        )
        validate_argument_literals(c, d.arguments)

        definition = c.ctx.schema.directives.get(name)
        if definition is None:
            c.ctx.add_err(d.name.loc, "KnownDirectives", f"Unknown directive {_q(name)}.")
            continue
        if location not in definition.locations:
            c.ctx.add_err(
                d.name.loc,
                "KnownDirectives",
                f"Directive {_q(name)} may not be used on {location}.",
            )
        validate_argument_types(
            c,
            d.arguments,
            definition.arguments,
            d.name.loc,
            lambda name=name: f"directive {_q('@' + name)}",
            lambda name=name: f"Directive {_q('@' + name)}",
        )


def validate_name(
    ctx: ValidationContext,
    seen: dict[str, Location],
    name: Ident,
    rule: str,
    kind: str,
) -> None:
    """Record ``name`` in ``seen``, reporting it if it was already there."""
    _validate_name_custom(
        ctx, seen, name, rule, lambda: f"There can be only one {kind} named {_q(name.name)}."
    )


def _validate_name_custom(
    ctx: ValidationContext,
    seen: dict[str, Location],
    name: Ident,
    rule: str,
    message: Callable[[], str],
) -> None:
    if name.name in seen:
        ctx.add_err_multi_loc([seen[name.name], name.loc], rule, message())
        return
    seen[name.name] = name.loc


def validate_argument_types(
    c: OperationContext,
    args: ArgumentList,
    arg_defs: ArgumentsDefinition,
    loc: Location,
    owner: Callable[[], str],
    owner_title: Callable[[], str],
) -> None:
    """Check given arguments against their declarations and required ones."""
    for given in args:
        decl = arg_defs.get(given.name.name)
        if decl is None:
            c.ctx.add_err(
                given.name.loc,
                "KnownArgumentNames",
                f"Unknown argument {_q(given.name.name)} on {owner()}.",
            )
            continue
        ok, reason = validate_value_type(c, given.value, decl.type)
        if not ok:
            c.ctx.add_err(
                given.value.loc,
                "ArgumentsOfCorrectType",
                f"Argument {_q(decl.name.name)} has invalid value {given.value}.\n{reason}",
            )
    given_names = {a.name.name for a in args}
    for decl in arg_defs:
        if isinstance(decl.type, NonNull) and decl.name.name not in given_names:
            c.ctx.add_err(
                loc,
                "ProvidedNonNullArguments",
                f"{owner_title()} argument {_q(decl.name.name)} of type "
                f"{_q(decl.type)} is required but not provided.",
            )


def validate_argument_literals(c: OperationContext, args: ArgumentList) -> None:
    """Check argument names for duplicates and their literals."""
    seen: dict[str, Location] = {}
    for arg in args:
        validate_name(c.ctx, seen, arg.name, "UniqueArgumentNames", "argument")
        validate_literal(c, arg.value)


def resolve_checked(
    ctx: ValidationContext, typ: Optional[GraphQLType]
) -> Optional[GraphQLType]:
    """Resolve type names in ``typ``; record a failure and return None."""
    try:
        return resolve_type(typ, ctx.schema.resolve)
    except QueryError as err:
        ctx.errs.append(err)
        return None


def unwrap_type(typ: Optional[GraphQLType]) -> Optional[NamedType]:
    """Strip list and non-null wrappers, returning the named type inside."""
    while typ is not None:
        if isinstance(typ, NamedType):
            return typ
        if isinstance(typ, (ListType, NonNull)):
            typ = typ.of_type
            continue
        raise TypeError(f"cannot unwrap {type(typ).__name__}")
    return None


def fields_of(typ: Optional[GraphQLType]) -> FieldsDefinition:
    """Return the fields of an object or interface type, otherwise none."""
    if isinstance(typ, (ObjectTypeDefinition, InterfaceTypeDefinition)):
        return typ.fields
    return FieldsDefinition()


def possible_types(typ: Optional[GraphQLType]) -> list[ObjectTypeDefinition]:
    """Return the object types a value of ``typ`` can have."""
    if isinstance(typ, ObjectTypeDefinition):
        return [typ]
    if isinstance(typ, InterfaceTypeDefinition):
        return list(typ.possible_types)
    if isinstance(typ, Union):
        return list(typ.member_types)
    return []


def compatible(a: Optional[GraphQLType], b: Optional[GraphQLType]) -> bool:
    """Return whether some object type is possible for both types."""
    return any(pa is pb for pa in possible_types(a) for pb in possible_types(b))


def can_be_fragment(typ: Optional[GraphQLType]) -> bool:
    """Return whether a fragment may be conditioned on ``typ``."""
    return isinstance(typ, (ObjectTypeDefinition, InterfaceTypeDefinition, Union))


def can_be_input(typ: Optional[GraphQLType]) -> bool:
    """Return whether ``typ`` may be the type of a variable."""
    if isinstance(typ, (InputObject, ScalarTypeDefinition, EnumTypeDefinition)):
        return True
    if isinstance(typ, (ListType, NonNull)):
        return can_be_input(typ.of_type)
    return False


def has_subfields(typ: Optional[GraphQLType]) -> bool:
    """Return whether a field of ``typ`` needs a selection set."""
    if isinstance(typ, (ObjectTypeDefinition, InterfaceTypeDefinition, Union)):
        return True
    if isinstance(typ, (ListType, NonNull)):
        return has_subfields(typ.of_type)
    return False


def is_leaf(typ: Optional[GraphQLType]) -> bool:
    """Return whether ``typ`` is a scalar or enum."""
    return isinstance(typ, (ScalarTypeDefinition, EnumTypeDefinition))


def _is_null(value: Any) -> bool:
    return isinstance(value, NullValue)


def types_compatible(a: Optional[GraphQLType], b: Optional[GraphQLType]) -> bool:
    """Return whether two field types can be merged into one response."""
    a_list, b_list = isinstance(a, ListType), isinstance(b, ListType)
    if a_list or b_list:
        return a_list and b_list and types_compatible(a.of_type, b.of_type)
    a_nn, b_nn = isinstance(a, NonNull), isinstance(b, NonNull)
    if a_nn or b_nn:
        return a_nn and b_nn and types_compatible(a.of_type, b.of_type)
    if is_leaf(a) or is_leaf(b):
        return a is b
    return True


def type_can_be_used_as(
    typ: Optional[GraphQLType], target: Optional[GraphQLType]
) -> bool:
    """Return whether a variable of ``typ`` may stand where ``target`` is expected."""
    typ_nn = isinstance(typ, NonNull)
    if typ_nn:
        typ = typ.of_type
    if isinstance(target, NonNull):
        target = target.of_type
        if not typ_nn:
            return False
    if typ is target:
        return True
    if isinstance(typ, ListType) and isinstance(target, ListType):
        return type_can_be_used_as(typ.of_type, target.of_type)
    return False