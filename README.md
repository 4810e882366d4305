# gqlcore

Building blocks for a GraphQL server, written in plain Python with no
third-party dependencies.

## What is in the package

- `gqlcore.errors`: `Location` (line and column, with `before()`) and
  `QueryError`, an exception carrying a message, locations and the name of the
  rule that produced it.
- `gqlcore.values`: input literals (`PrimitiveValue`, `ListValue`,
  `ObjectValue`, `NullValue`, `Variable`), each with `deserialize()` and a
  GraphQL-syntax `str()`; `ArgumentList` and `DirectiveList` with lookup by name.
- `gqlcore.types`: the type system: `ScalarTypeDefinition`,
  `ObjectTypeDefinition`, `InterfaceTypeDefinition`, `Union`,
  `EnumTypeDefinition`, `InputObject`, the `ListType` and `NonNull` wrappers,
  unresolved `TypeName` references, and `resolve_type()` to replace those
  references with real types.
- `gqlcore.document`: executable documents (`OperationDefinition`, `Field`,
  `InlineFragment`, `FragmentSpread`, `FragmentDefinition`,
  `ExecutableDefinition`) and `Schema`.
- `gqlcore.validation_context`: the state and checks used when validating a
  document: `ValidationContext`, `OperationContext`, and functions such as
  `validate_value()` (runtime variable values), `validate_value_type()` and
  `validate_basic_literal()` (literals against types), `validate_directives()`,
  `validate_argument_types()`, `validate_name()`, and type predicates like
  `can_be_input()`, `has_subfields()`, `types_compatible()` and
  `type_can_be_used_as()`. Problems are collected as `QueryError` values in
  `ValidationContext.errs`, each tagged with its rule.
- `gqlcore.suggestion`: `levenshtein_distance()` and `make_suggestion()` for
  "Did you mean ...?" hints.
- `gqlcore.introspection`: `wrap_schema()` and `wrap_type()` return read-only
  views (`SchemaInfo`, `TypeInfo`, `FieldInfo`, `InputValueInfo`,
  `EnumValueInfo`, `DirectiveInfo`) in the shape of the `__Schema`, `__Type`
  and related introspection types.
- `gqlcore.scalars`: a `Time` scalar (RFC 3339 string, `datetime` or Unix
  seconds in; RFC 3339 JSON string out via `to_json()`) and the nullable input
  wrappers `NullString`, `NullBool`, `NullInt`, `NullFloat` and `NullTime`,
  whose `set` flag tells an explicit `null` apart from an omitted value.
- `gqlcore.relay`: `marshal_id()`, `unmarshal_kind()` and `unmarshal_spec()`
  for opaque, URL-safe base64 global object identifiers.
- `gqlcore.tracing`: the `Tracer` and `ValidationTracer` interfaces, their
  no-op implementations, and `summarize_errors()`.

## Installation

```
pip install gqlcore
```

## Examples

```python
from gqlcore.relay import marshal_id, unmarshal_kind, unmarshal_spec

object_id = marshal_id("Human", 1000)
assert unmarshal_kind(object_id) == "Human"
assert unmarshal_spec(object_id) == 1000
```

```python
from gqlcore.scalars import NullInt, Time

value = NullInt()
value.unmarshal_graphql(None)
assert value.set and value.value is None

moment = Time()
moment.unmarshal_graphql("2021-04-20T12:03:23Z")
assert moment.to_json() == '"2021-04-20T12:03:23Z"'
```

```python
from gqlcore.types import NonNull, ScalarTypeDefinition
from gqlcore.values import PrimitiveValue, TokenKind
from gqlcore.validation_context import validate_basic_literal
from gqlcore.introspection import wrap_type

int_type = ScalarTypeDefinition("Int")
assert validate_basic_literal(PrimitiveValue(TokenKind.INT, "42"), int_type)
assert not validate_basic_literal(PrimitiveValue(TokenKind.STRING, '"42"'), int_type)

assert wrap_type(NonNull(int_type)).kind() == "NON_NULL"
assert wrap_type(NonNull(int_type)).of_type().name() == "Int"
```

```python
from gqlcore.suggestion import make_suggestion

assert make_suggestion("Did you mean", ["hero", "heroes"], "her") == ' Did you mean "hero"?'
```

## What the package does not do

- It does not parse GraphQL text. Schemas and documents are built from the
  classes in `gqlcore.types`, `gqlcore.values` and `gqlcore.document`.
- It has no single entry point that validates a whole document.
  `gqlcore.validation_context` supplies the individual checks and the context
  they record errors in; walking a document's operations and selection sets,
  detecting fragment cycles, overlapping fields and unused fragments or
  variables, and enforcing a maximum depth are left to the caller.
- It does not execute queries or subscriptions, serve HTTP, or log errors
  raised by resolvers. `gqlcore.tracing` only defines the tracing hooks.

## Running the tests

```
pip install -e ".[test]"
pytest
```