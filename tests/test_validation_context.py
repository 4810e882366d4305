import pytest

from gqlcore.document import (
    ExecutableDefinition,
    OperationDefinition,
    OperationType,
    Schema,
)
from gqlcore.errors import Location
from gqlcore.types import (
    ArgumentsDefinition,
    DirectiveDefinition,
    EnumTypeDefinition,
    EnumValueDefinition,
    FieldDefinition,
    FieldsDefinition,
    InputObject,
    InputValueDefinition,
    InterfaceTypeDefinition,
    ListType,
    NonNull,
    ObjectTypeDefinition,
    ScalarTypeDefinition,
    TypeName,
    Union,
)
from gqlcore.validation_context import (
    OperationContext,
    ValidationContext,
    can_be_fragment,
    can_be_input,
    compatible,
    fields_of,
    has_subfields,
    is_leaf,
    possible_types,
    resolve_checked,
    type_can_be_used_as,
    types_compatible,
    unwrap_type,
    validate_argument_literals,
    validate_argument_types,
    validate_basic_literal,
    validate_directives,
    validate_literal,
    validate_name,
    validate_value,
    validate_value_type,
)
from gqlcore.values import (
    Argument,
    ArgumentList,
    Directive,
    DirectiveList,
    Ident,
    ListValue,
    NullValue,
    ObjectField,
    ObjectValue,
    PrimitiveValue,
    TokenKind,
    Variable,
)

INT = ScalarTypeDefinition("Int")
FLOAT = ScalarTypeDefinition("Float")
STRING = ScalarTypeDefinition("String")
BOOLEAN = ScalarTypeDefinition("Boolean")
ID = ScalarTypeDefinition("ID")
EPISODE = EnumTypeDefinition(
    "Episode",
    enum_values=[EnumValueDefinition("NEWHOPE"), EnumValueDefinition("JEDI")],
)
REVIEW = InputObject(
    "ReviewInput",
    values=ArgumentsDefinition(
        [
            InputValueDefinition(Ident("stars"), NonNull(INT)),
            InputValueDefinition(Ident("note"), STRING),
        ]
    ),
)
HUMAN = ObjectTypeDefinition(
    "Human", fields=FieldsDefinition([FieldDefinition("name", type=STRING)])
)
DROID = ObjectTypeDefinition("Droid")
STARSHIP = ObjectTypeDefinition("Starship")
CHARACTER = InterfaceTypeDefinition("Character", possible_types=[HUMAN, DROID])
SEARCH = Union("Search", member_types=[HUMAN, STARSHIP])

SKIP = DirectiveDefinition(
    "skip",
    locations=["FIELD", "FRAGMENT_SPREAD", "INLINE_FRAGMENT"],
    arguments=ArgumentsDefinition(
        [InputValueDefinition(Ident("if"), NonNull(BOOLEAN))]
    ),
)


def make_schema():
    types = {
        t.name: t
        for t in (INT, FLOAT, STRING, BOOLEAN, ID, EPISODE, REVIEW, HUMAN, DROID,
                  STARSHIP, CHARACTER, SEARCH)
    }
    return Schema(types=types, directives={"skip": SKIP})


def make_op(*variables, name="Q"):
    return OperationDefinition(
        OperationType.QUERY,
        name=Ident(name),
        vars=ArgumentsDefinition(list(variables)),
        loc=Location(1, 1),
    )


def make_context(*ops):
    ctx = ValidationContext(make_schema(), ExecutableDefinition())
    return OperationContext(ctx, list(ops))


def prim(kind, text):
    return PrimitiveValue(kind, text)


def rules(c):
    return [e.rule for e in c.ctx.errs]


# --- basic literals -----------------------------------------------------


@pytest.mark.parametrize(
    "value, typ, expected",
    [
        (prim(TokenKind.INT, "12"), INT, True),
        (prim(TokenKind.INT, "2147483647"), INT, True),
        (prim(TokenKind.INT, "2147483648"), INT, False),
        (prim(TokenKind.FLOAT, "1.5"), INT, False),
        (prim(TokenKind.INT, "3"), FLOAT, True),
        (prim(TokenKind.FLOAT, "3.5"), FLOAT, True),
        (prim(TokenKind.STRING, '"a"'), STRING, True),
        (prim(TokenKind.INT, "1"), STRING, False),
        (prim(TokenKind.IDENT, "true"), BOOLEAN, True),
        (prim(TokenKind.IDENT, "yes"), BOOLEAN, False),
        (prim(TokenKind.INT, "7"), ID, True),
        (prim(TokenKind.STRING, '"7"'), ID, True),
        (prim(TokenKind.FLOAT, "7.0"), ID, False),
        (prim(TokenKind.IDENT, "JEDI"), EPISODE, True),
        (prim(TokenKind.IDENT, "SITH"), EPISODE, False),
        (prim(TokenKind.STRING, '"JEDI"'), EPISODE, False),
        (prim(TokenKind.STRING, '"x"'), ScalarTypeDefinition("Time"), True),
        (prim(TokenKind.STRING, '"x"'), HUMAN, False),
    ],
)
def test_validate_basic_literal(value, typ, expected):
    assert validate_basic_literal(value, typ) is expected


# --- value types --------------------------------------------------------


def test_value_type_accepts_matching_scalar():
    c = make_context()
    assert validate_value_type(c, prim(TokenKind.INT, "5"), INT) == (True, "")


def test_value_type_rejects_wrong_scalar():
    c = make_context()
    ok, reason = validate_value_type(c, prim(TokenKind.STRING, '"x"'), INT)
    assert ok is False
    assert reason == 'Expected type "Int", found "x".'


def test_value_type_null_for_non_null():
    c = make_context()
    ok, reason = validate_value_type(c, NullValue(), NonNull(INT))
    assert ok is False
    assert reason == 'Expected "Int!", found null.'


def test_value_type_null_for_nullable():
    c = make_context()
    assert validate_value_type(c, NullValue(), INT) == (True, "")


def test_value_type_list_element_error_names_index():
    c = make_context()
    value = ListValue([prim(TokenKind.INT, "1"), prim(TokenKind.STRING, '"a"')])
    ok, reason = validate_value_type(c, value, ListType(INT))
    assert ok is False
    assert reason.startswith("In element #1: ")


def test_value_type_single_value_for_list():
    c = make_context()
    assert validate_value_type(c, prim(TokenKind.INT, "1"), ListType(INT)) == (True, "")


def test_value_type_input_object_unknown_field():
    c = make_context()
    value = ObjectValue(
        [
            ObjectField(Ident("stars"), prim(TokenKind.INT, "5")),
            ObjectField(Ident("extra"), prim(TokenKind.INT, "1")),
        ]
    )
    ok, reason = validate_value_type(c, value, REVIEW)
    assert ok is False
    assert reason == 'In field "extra": Unknown field.'


def test_value_type_input_object_missing_required_field():
    c = make_context()
    value = ObjectValue([ObjectField(Ident("note"), prim(TokenKind.STRING, '"ok"'))])
    ok, reason = validate_value_type(c, value, REVIEW)
    assert ok is False
    assert reason == 'In field "stars": Expected "Int!", found null.'


def test_value_type_input_object_valid():
    c = make_context()
    value = ObjectValue([ObjectField(Ident("stars"), prim(TokenKind.INT, "4"))])
    assert validate_value_type(c, value, REVIEW) == (True, "")


def test_value_type_input_object_not_an_object():
    c = make_context()
    ok, reason = validate_value_type(c, prim(TokenKind.INT, "4"), REVIEW)
    assert ok is False
    assert reason == 'Expected "ReviewInput", found not an object.'


def test_value_type_output_type_is_rejected():
    c = make_context()
    ok, _ = validate_value_type(c, prim(TokenKind.STRING, '"x"'), HUMAN)
    assert ok is False


def test_variable_in_disallowed_position():
    flag = InputValueDefinition(Ident("flag"), TypeName("Boolean"))
    c = make_context(make_op(flag))
    result = validate_value_type(c, Variable("flag"), NonNull(BOOLEAN))
    assert result == (True, "")
    assert rules(c) == ["VariablesInAllowedPosition"]
    assert c.ctx.errs[0].message == (
        'Variable "$flag" of type "Boolean" used in position expecting type "Boolean!".'
    )


def test_variable_with_default_counts_as_non_null():
    flag = InputValueDefinition(
        Ident("flag"), TypeName("Boolean"), default=prim(TokenKind.IDENT, "true")
    )
    c = make_context(make_op(flag))
    assert validate_value_type(c, Variable("flag"), NonNull(BOOLEAN)) == (True, "")
    assert c.ctx.errs == []


# --- runtime variable values --------------------------------------------


def test_validate_value_null_for_non_null():
    c = make_context()
    definition = InputValueDefinition(Ident("count"), NonNull(INT))
    validate_value(c, definition, None, NonNull(INT))
    assert rules(c) == ["VariablesOfCorrectType"]
    assert c.ctx.errs[0].message == (
        'Variable "count" has invalid value null.\nExpected type "Int!", found null.'
    )


def test_validate_value_unknown_enum():
    c = make_context()
    definition = InputValueDefinition(Ident("ep"), EPISODE)
    validate_value(c, definition, "SITH", EPISODE)
    assert rules(c) == ["VariablesOfCorrectType"]
    assert "SITH" in c.ctx.errs[0].message


def test_validate_value_enum_list_and_single_item():
    c = make_context()
    definition = InputValueDefinition(Ident("eps"), ListType(EPISODE))
    validate_value(c, definition, ["JEDI", "NEWHOPE"], ListType(EPISODE))
    validate_value(c, definition, "JEDI", ListType(EPISODE))
    assert c.ctx.errs == []
    validate_value(c, definition, ["JEDI", "BAD"], ListType(EPISODE))
    assert rules(c) == ["VariablesOfCorrectType"]


def test_validate_value_enum_wrong_type():
    c = make_context()
    definition = InputValueDefinition(Ident("ep"), EPISODE)
    validate_value(c, definition, 3, EPISODE)
    assert rules(c) == ["VariablesOfCorrectType"]
    assert "invalid type" in c.ctx.errs[0].message


def test_validate_value_input_object_fields():
    c = make_context()
    definition = InputValueDefinition(Ident("review"), REVIEW)
    validate_value(c, definition, {"stars": 5}, REVIEW)
    assert c.ctx.errs == []
    validate_value(c, definition, {"note": "fine"}, REVIEW)
    assert rules(c) == ["VariablesOfCorrectType"]
    validate_value(c, definition, "text", REVIEW)
    assert rules(c) == ["VariablesOfCorrectType", "VariablesOfCorrectType"]


# --- literals and names -------------------------------------------------


def test_validate_literal_undefined_variable():
    op = make_op()
    c = make_context(op)
    validate_literal(c, Variable("foo", Location(2, 3)))
    errs = c.ctx.op_errs[op]
    assert [e.rule for e in errs] == ["NoUndefinedVariables"]
    assert errs[0].message == 'Variable "$foo" is not defined by operation "Q".'
    assert errs[0].locations == [Location(2, 3), Location(1, 1)]


def test_validate_literal_marks_variable_used():
    definition = InputValueDefinition(Ident("id"), TypeName("Int"))
    op = make_op(definition)
    c = make_context(op)
    validate_literal(c, ListValue([Variable("id")]))
    assert definition in c.ctx.used_vars[op]
    assert c.ctx.errs == []


def test_validate_literal_duplicate_object_field():
    c = make_context()
    value = ObjectValue(
        [
            ObjectField(Ident("a", Location(1, 2)), prim(TokenKind.INT, "1")),
            ObjectField(Ident("a", Location(1, 8)), prim(TokenKind.INT, "2")),
        ]
    )
    validate_literal(c, value)
    assert rules(c) == ["UniqueInputFieldNames"]
    assert c.ctx.errs[0].locations == [Location(1, 2), Location(1, 8)]


def test_validate_name_records_and_reports_duplicates():
    ctx = ValidationContext(make_schema(), ExecutableDefinition())
    seen = {}
    validate_name(ctx, seen, Ident("Q", Location(1, 1)), "UniqueOperationNames", "operation")
    assert seen == {"Q": Location(1, 1)}
    validate_name(ctx, seen, Ident("Q", Location(5, 1)), "UniqueOperationNames", "operation")
    assert len(ctx.errs) == 1
    assert ctx.errs[0].message == 'There can be only one operation named "Q".'


def test_argument_literals_duplicate_names():
    c = make_context()
    args = ArgumentList(
        [
            Argument(Ident("x"), prim(TokenKind.INT, "1")),
            Argument(Ident("x"), prim(TokenKind.INT, "2")),
        ]
    )
    validate_argument_literals(c, args)
    assert rules(c) == ["UniqueArgumentNames"]


# --- arguments and directives -------------------------------------------


def test_argument_types_unknown_and_missing():
    c = make_context()
    args = ArgumentList([Argument(Ident("other"), prim(TokenKind.INT, "1"))])
    validate_argument_types(
        c, args, SKIP.arguments, Location(3, 4),
        lambda: 'directive "@skip"', lambda: 'Directive "@skip"',
    )
    assert rules(c) == ["KnownArgumentNames", "ProvidedNonNullArguments"]
    assert c.ctx.errs[1].locations == [Location(3, 4)]


def test_argument_types_wrong_value():
    c = make_context()
    args = ArgumentList([Argument(Ident("if"), prim(TokenKind.INT, "1"))])
    validate_argument_types(c, args, SKIP.arguments, Location(), lambda: "x", lambda: "X")
    assert rules(c) == ["ArgumentsOfCorrectType"]


def test_directive_valid_use():
    c = make_context()
    directives = DirectiveList(
        [Directive(Ident("skip"), ArgumentList([Argument(Ident("if"), prim(TokenKind.IDENT, "true"))]))]
    )
    validate_directives(c, "FIELD", directives)
    assert c.ctx.errs == []


def test_directive_unknown():
    c = make_context()
    validate_directives(c, "FIELD", DirectiveList([Directive(Ident("foo"))]))
    assert rules(c) == ["KnownDirectives"]
    assert c.ctx.errs[0].message == 'Unknown directive "foo".'


def test_directive_wrong_location_and_duplicate():
    c = make_context()
    arg = ArgumentList([Argument(Ident("if"), prim(TokenKind.IDENT, "true"))])
    directives = DirectiveList(
        [Directive(Ident("skip"), arg), Directive(Ident("skip"), arg)]
    )
    validate_directives(c, "QUERY", directives)
    assert rules(c).count("KnownDirectives") == 2
    assert "UniqueDirectivesPerLocation" in rules(c)


# --- type helpers -------------------------------------------------------


def test_resolve_checked_success_and_failure():
    c = make_context()
    resolved = resolve_checked(c.ctx, NonNull(TypeName("Int")))
    assert isinstance(resolved, NonNull) and resolved.of_type is INT
    assert resolve_checked(c.ctx, TypeName("Nope")) is None
    assert rules(c) == ["KnownTypeNames"]


def test_unwrap_type():
    assert unwrap_type(NonNull(ListType(NonNull(HUMAN)))) is HUMAN
    assert unwrap_type(None) is None
    with pytest.raises(TypeError):
        unwrap_type(TypeName("Human"))


def test_fields_and_possible_types():
    assert fields_of(HUMAN).names() == ["name"]
    assert fields_of(INT) == []
    assert possible_types(HUMAN) == [HUMAN]
    assert possible_types(CHARACTER) == [HUMAN, DROID]
    assert possible_types(SEARCH) == [HUMAN, STARSHIP]
    assert possible_types(INT) == []


def test_compatible():
    assert compatible(CHARACTER, SEARCH) is True
    assert compatible(DROID, SEARCH) is False
    assert compatible(INT, INT) is False


def test_type_kind_predicates():
    assert can_be_fragment(SEARCH) and not can_be_fragment(INT)
    assert can_be_input(NonNull(ListType(REVIEW))) and not can_be_input(ListType(HUMAN))
    assert has_subfields(ListType(CHARACTER)) and not has_subfields(NonNull(EPISODE))
    assert is_leaf(EPISODE) and not is_leaf(HUMAN)


def test_types_compatible():
    assert types_compatible(ListType(INT), ListType(INT)) is True
    assert types_compatible(ListType(INT), INT) is False
    assert types_compatible(NonNull(INT), INT) is False
    assert types_compatible(INT, STRING) is False
    assert types_compatible(HUMAN, DROID) is True


def test_type_can_be_used_as():
    assert type_can_be_used_as(NonNull(INT), INT) is True
    assert type_can_be_used_as(INT, NonNull(INT)) is False
    assert type_can_be_used_as(ListType(NonNull(INT)), ListType(INT)) is True
    assert type_can_be_used_as(ListType(INT), ListType(STRING)) is False
    assert type_can_be_used_as(INT, STRING) is False