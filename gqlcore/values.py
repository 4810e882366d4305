"""Literal input values, arguments and directives of GraphQL documents."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Mapping, Optional, Union

from gqlcore.errors import Location

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_WIDTH = {"x": 2, "u": 4, "U": 8}
_OCTAL_DIGITS = frozenset("01234567")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class Ident:
    """A name together with where it appears."""

    name: str
    loc: Location = Location()


class TokenKind(enum.Enum):
    """The lexical kind of a primitive literal."""

    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    IDENT = "Ident"


def _code_point(digits: str) -> str:
    value = int(digits, 16)
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        raise ValueError("invalid syntax")
    return chr(value)


def _unquote(text: str) -> str:
    """Decode a quoted string literal, raising ValueError on bad syntax."""
    if len(text) >= 2 and text[0] == text[-1] == "`":
        body = text[1:-1]
        if "`" in body:
            raise ValueError("invalid syntax")
        return body.replace("\r", "")
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        raise ValueError("invalid syntax")

    out: list[str] = []
    chars = iter(text[1:-1])
    for ch in chars:
        if ch in ('"', "\n"):
            raise ValueError("invalid syntax")
        if ch != "\\":
            out.append(ch)
            continue
        esc = next(chars, "")
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
        elif esc in _HEX_WIDTH:
            width = _HEX_WIDTH[esc]
            digits = "".join(islice(chars, width))
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                raise ValueError("invalid syntax")
            out.append(_code_point(digits))
        elif esc in _OCTAL_DIGITS:
            digits = esc + "".join(islice(chars, 2))
            if len(digits) != 3 or not set(digits) <= _OCTAL_DIGITS:
                raise ValueError("invalid syntax")
            value = int(digits, 8)
            if value > 255:
                raise ValueError("invalid syntax")
            out.append(chr(value))
        else:
            raise ValueError("invalid syntax")
    return "".join(out)


@dataclass(eq=False)
class PrimitiveValue:
    """An Int, Float, String, Boolean or enum literal, kept as its source text."""

    type: TokenKind
    text: str
    loc: Location = Location()

    def deserialize(self, variables: Optional[Mapping[str, Any]] = None) -> Any:
        if self.type is TokenKind.INT:
            if not _INT_PATTERN.fullmatch(self.text):
                raise ValueError(f"invalid integer literal {self.text!r}")
            value = int(self.text)
            if not _INT32_MIN <= value <= _INT32_MAX:
                raise ValueError(f"integer literal {self.text!r} out of 32-bit range")
            return value
        if self.type is TokenKind.FLOAT:
            return float(self.text)
        if self.type is TokenKind.STRING:
            return _unquote(self.text)
        if self.type is TokenKind.IDENT:
            if self.text == "true":
                return True
            if self.text == "false":
                return False
            return self.text
        raise ValueError("invalid literal value")

    def __str__(self) -> str:
        return self.text


@dataclass(eq=False)
class ListValue:
    """A literal list of values."""

    values: list = field(default_factory=list)
    loc: Location = Location()

    def deserialize(self, variables: Optional[Mapping[str, Any]] = None) -> list:
        return [entry.deserialize(variables) for entry in self.values]

    def __str__(self) -> str:
        return "[" + ", ".join(str(entry) for entry in self.values) + "]"


@dataclass(eq=False)
class ObjectField:
    """One name/value pair of a literal object."""

    name: Ident
    value: Value


@dataclass(eq=False)
class ObjectValue:
    """A literal input object."""

    fields: list[ObjectField] = field(default_factory=list)
    loc: Location = Location()

    def deserialize(self, variables: Optional[Mapping[str, Any]] = None) -> dict:
        return {f.name.name: f.value.deserialize(variables) for f in self.fields}

    def __str__(self) -> str:
        return "{" + ", ".join(f"{f.name.name}: {f.value}" for f in self.fields) + "}"


@dataclass(eq=False)
class NullValue:
    """The literal ``null``."""

    loc: Location = Location()

    def deserialize(self, variables: Optional[Mapping[str, Any]] = None) -> None:
        return None

    def __str__(self) -> str:
        return "null"


@dataclass(eq=False)
class Variable:
    """A reference to an operation variable."""

    name: str
    loc: Location = Location()

    def deserialize(self, variables: Optional[Mapping[str, Any]] = None) -> Any:
        if not variables:
            return None
        return variables.get(self.name)

    def __str__(self) -> str:
        return "$" + self.name


Value = Union[PrimitiveValue, ListValue, ObjectValue, NullValue, Variable]


@dataclass(eq=False)
class Argument:
    """An argument passed to a field or directive."""

    name: Ident
    value: Value


class ArgumentList(list):
    """The arguments given at one place in a document."""

    def get(self, name: str) -> Optional[Value]:
        """Return the value of the named argument, or None if it is absent."""
        return next((arg.value for arg in self if arg.name.name == name), None)

    def must_get(self, name: str) -> Value:
        """Return the value of the named argument, raising KeyError if absent."""
        value = self.get(name)
        if value is None:
            raise KeyError("argument not found")
        return value


@dataclass(eq=False)
class Directive:
    """A directive applied in a document."""

    name: Ident
    arguments: ArgumentList = field(default_factory=ArgumentList)


class DirectiveList(list):
    """The directives applied at one place in a document."""

    def get(self, name: str) -> Optional[Directive]:
        """Return the named directive, or None if it is absent."""
        return next((d for d in self if d.name.name == name), None)