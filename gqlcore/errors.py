"""Source locations and the error type reported for queries and schemas."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A line and column inside a GraphQL document."""

    line: int = 0
    column: int = 0

    def before(self, other: Location) -> bool:
        """Return True if this location comes strictly before ``other``."""
        return (self.line, self.column) < (other.line, other.column)

    def __str__(self) -> str:
        return f"(line {self.line}, column {self.column})"


class QueryError(Exception):
    """An error found while parsing, validating or executing a query."""

    def __init__(
        self,
        message: str,
        locations: list[Location] | None = None,
        *,
        rule: str = "",
        path: list | None = None,
        resolver_error: BaseException | None = None,
        extensions: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.locations = list(locations) if locations else []
        self.rule = rule
        self.path = list(path) if path else []
        self.resolver_error = resolver_error
        self.extensions = dict(extensions) if extensions else {}

    def __str__(self) -> str:
        text = f"graphql: {self.message}"
        for loc in self.locations:
            text += f" {loc}"
        return text

    def __repr__(self) -> str:
        return (
            f"QueryError(message={self.message!r}, locations={self.locations!r}, "
            f"rule={self.rule!r})"
        )