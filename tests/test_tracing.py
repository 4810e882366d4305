import pytest

from gqlcore.errors import Location, QueryError
from gqlcore.tracing import (
    NoopTracer,
    NoopValidationTracer,
    Tracer,
    ValidationTracer,
    summarize_errors,
)


def _errors(count):
    return [QueryError(f"problem {i}", [Location(1, i + 1)]) for i in range(count)]


def test_summarize_no_errors():
    assert summarize_errors([]) is None


def test_summarize_single_error_is_its_text():
    errs = _errors(1)
    assert summarize_errors(errs) == str(errs[0])


def test_summarize_counts_remaining_errors():
    errs = _errors(3)
    assert summarize_errors(errs) == str(errs[0]) + " (and 2 more errors)"


def test_summarize_accepts_generator():
    errs = _errors(2)
    summary = summarize_errors(e for e in errs)
    assert summary.startswith(str(errs[0]))
    assert summary.endswith("more errors)")


def test_noop_trace_query_keeps_context():
    ctx = object()
    out_ctx, finish = NoopTracer().trace_query(ctx, "{ a }", "", {"x": 1}, {})
    assert out_ctx is ctx
    assert finish(_errors(2)) is None


@pytest.mark.parametrize("trivial", [True, False])
def test_noop_trace_field_keeps_context(trivial):
    ctx = {"request": 1}
    out_ctx, finish = NoopTracer().trace_field(ctx, "Query.a", "Query", "a", trivial, {})
    assert out_ctx is ctx
    assert finish(None) is None
    assert finish(_errors(1)[0]) is None


def test_noop_validation_tracer():
    tracer = NoopValidationTracer()
    assert isinstance(tracer, ValidationTracer)
    assert tracer.trace_validation()(_errors(1)) is None
    assert tracer.trace_validation(object())([]) is None


def test_abstract_tracers_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Tracer()
    with pytest.raises(TypeError):
        ValidationTracer()