"""Hooks for tracing queries, fields and validation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, Optional

from gqlcore.errors import QueryError

TraceQueryFinish = Callable[[Sequence[QueryError]], None]
TraceFieldFinish = Callable[[Optional[QueryError]], None]
TraceValidationFinish = TraceQueryFinish


def summarize_errors(errors: Iterable[QueryError]) -> Optional[str]:
    """Describe a list of errors in one line, or return None if there are none."""
    errors = list(errors)
    if not errors:
        return None
    message = str(errors[0])
    if len(errors) > 1:
        message += f" (and {len(errors) - 1} more errors)"
    return message


class Tracer(ABC):
    """Traces whole queries and individual field resolutions."""

    @abstractmethod
    def trace_query(
        self,
        ctx: Any,
        query_string: str,
        operation_name: str,
        variables: Optional[Mapping[str, Any]],
        var_types: Optional[Mapping[str, Any]],
    ) -> tuple[Any, TraceQueryFinish]:
        """Start tracing a query; return the context to use and a finish callback."""

    @abstractmethod
    def trace_field(
        self,
        ctx: Any,
        label: str,
        type_name: str,
        field_name: str,
        trivial: bool,
        args: Optional[Mapping[str, Any]],
    ) -> tuple[Any, TraceFieldFinish]:
        """Start tracing a field; return the context to use and a finish callback."""


class ValidationTracer(ABC):
    """Traces query validation."""

    @abstractmethod
    def trace_validation(self, ctx: Any = None) -> TraceValidationFinish:
        """Start tracing validation; return a callback taking the errors found."""


def _ignore(_: Any) -> None:
    return None


class NoopTracer(Tracer):
    """A tracer that records nothing."""

    def trace_query(self, ctx, query_string, operation_name, variables, var_types):
        return ctx, _ignore

    def trace_field(self, ctx, label, type_name, field_name, trivial, args):
        return ctx, _ignore


class NoopValidationTracer(ValidationTracer):
    """A validation tracer that records nothing."""

    def trace_validation(self, ctx: Any = None) -> TraceValidationFinish:
        return _ignore