"""Custom scalar types: an RFC 3339 ``Time`` and nullable input wrappers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

_RFC3339 = "2006-01-02T15:04:05Z07:00"
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _quote(text: str) -> str:
    parts = ['"']
    for ch in text:
        if ch in '"\\':
            parts.append("\\" + ch)
        elif ch.isprintable():
            parts.append(ch)
        else:
            parts.append(f"\\x{ord(ch):02x}" if ord(ch) < 0x100 else f"\\u{ord(ch):04x}")
    parts.append('"')
    return "".join(parts)


def _is_digit(text: str, index: int) -> bool:
    return index < len(text) and "0" <= text[index] <= "9"


def _getnum(text: str, fixed: bool) -> Optional[tuple[int, str]]:
    """Read one or two leading digits; None if the text does not start with one."""
    if not _is_digit(text, 0):
        return None
    if not _is_digit(text, 1):
        if fixed:
            return None
        return int(text[0]), text[1:]
    return int(text[:2]), text[2:]


def _days_in(month: int, year: int) -> int:
    if month == 2 and year % 4 == 0 and (year % 100 != 0 or year % 400 == 0):
        return 29
    return _DAYS_IN_MONTH[month - 1]


class _Rfc3339Parser:
    """Parses one RFC 3339 timestamp, reporting failures element by element."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.rest = text

    def _bad(self, elem: str, value: str) -> ValueError:
        return ValueError(
            f"parsing time {_quote(self.text)} as {_quote(_RFC3339)}: "
            f"cannot parse {_quote(value)} as {_quote(elem)}"
        )

    def _message(self, message: str) -> ValueError:
        return ValueError(f"parsing time {_quote(self.text)}{message}")

    def _out_of_range(self, what: str) -> ValueError:
        return self._message(f": {what} out of range")

    def _literal(self, char: str) -> None:
        if not self.rest.startswith(char):
            raise self._bad(char, self.rest)
        self.rest = self.rest[len(char):]

    def _number(self, elem: str, fixed: bool) -> int:
        hold = self.rest
        parsed = _getnum(self.rest, fixed)
        if parsed is None:
            raise self._bad(elem, hold)
        number, self.rest = parsed
        return number

    def _year(self) -> int:
        head = self.rest[:4]
        if len(head) < 4 or not all("0" <= ch <= "9" for ch in head):
            raise self._bad("2006", self.rest)
        self.rest = self.rest[4:]
        return int(head)

    def _fraction(self) -> int:
        rest = self.rest
        if len(rest) < 2 or rest[0] not in ".," or not _is_digit(rest, 1):
            return 0
        end = 2
        while _is_digit(rest, end):
            end += 1
        digits = rest[1:end]
        self.rest = rest[end:]
        return int(digits[:6].ljust(6, "0"))

    def _zone(self) -> int:
        hold = self.rest
        if self.rest.startswith("Z"):
            self.rest = self.rest[1:]
            return 0
        if len(self.rest) < 6 or self.rest[3] != ":":
            raise self._bad("Z07:00", hold)
        sign, hours, minutes = self.rest[0], self.rest[1:3], self.rest[4:6]
        self.rest = self.rest[6:]
        hour_part = _getnum(hours, True)
        minute_part = _getnum(minutes, True) if hour_part is not None else None
        hr = hour_part[0] if hour_part else 0
        mm = minute_part[0] if minute_part else 0
        if hr > 24:
            raise self._out_of_range("time zone offset hour")
        if mm > 60:
            raise self._out_of_range("time zone offset minute")
        if hour_part is None or minute_part is None or sign not in "+-":
            raise self._bad("Z07:00", hold)
        offset = (hr * 60 + mm) * 60
        return -offset if sign == "-" else offset

    def parse(self) -> datetime:
        year = self._year()
        self._literal("-")
        month = self._number("01", True)
        if not 1 <= month <= 12:
            raise self._out_of_range("month")
        self._literal("-")
        day = self._number("02", True)
        self._literal("T")
        hour = self._number("15", False)
        if hour >= 24:
            raise self._out_of_range("hour")
        self._literal(":")
        minute = self._number("04", True)
        if minute >= 60:
            raise self._out_of_range("minute")
        self._literal(":")
        second = self._number("05", True)
        if second >= 60:
            raise self._out_of_range("second")
        micro = self._fraction()
        offset = self._zone()
        if self.rest:
            raise self._message(f": extra text: {_quote(self.rest)}")
        if day < 1 or day > _days_in(month, year):
            raise self._out_of_range("day")
        try:
            tz = timezone.utc if offset == 0 else timezone(timedelta(seconds=offset))
            return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
        except ValueError as exc:
            raise self._message(f": {exc}") from exc


def _parse_rfc3339(text: str) -> datetime:
    return _Rfc3339Parser(text).parse()


def _from_unix(seconds: int) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"timestamp {seconds} out of range") from exc


def _format_rfc3339_nano(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = int(value.utcoffset().total_seconds())
    if offset == 0:
        return text + "Z"
    sign = "-" if offset < 0 else "+"
    minutes = abs(offset) // 60
    return text + f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass
class Time:
    """An instant in time, exchanged as an RFC 3339 string or a Unix timestamp."""

    value: datetime = _ZERO_TIME

    @classmethod
    def implements_graphql_type(cls, name: str) -> bool:
        return name == "Time"

    def unmarshal_graphql(self, value: Any) -> None:
        """Set the instant from an input value, raising on unusable input."""
        if isinstance(value, datetime):
            self.value = value
        elif isinstance(value, (str, bytes, bytearray)):
            text = value if isinstance(value, str) else bytes(value).decode("utf-8", "replace")
            try:
                self.value = _parse_rfc3339(text)
            except ValueError:
                self.value = _ZERO_TIME
                raise
        elif isinstance(value, bool):
            raise TypeError(f"wrong type for Time: {_type_name(value)}")
        elif isinstance(value, int):
            self.value = _from_unix(value)
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"timestamp {value} out of range")
            self.value = _from_unix(int(value))
        else:
            raise TypeError(f"wrong type for Time: {_type_name(value)}")

    def to_json(self) -> str:
        """Return the instant as a JSON string in RFC 3339 form."""
        return '"' + _format_rfc3339_nano(self.value) + '"'


@dataclass
class NullString:
    """A String input that tells an explicit null apart from an omitted value."""

    value: Optional[str] = None
    set: bool = False

    @classmethod
    def implements_graphql_type(cls, name: str) -> bool:
        return name == "String"

    def unmarshal_graphql(self, value: Any) -> None:
        self.set = True
        if value is None:
            return
        if not isinstance(value, str):
            raise TypeError(f"wrong type for String: {_type_name(value)}")
        self.value = value


@dataclass
class NullBool:
    """A Boolean input that tells an explicit null apart from an omitted value."""

    value: Optional[bool] = None
    set: bool = False

    @classmethod
    def implements_graphql_type(cls, name: str) -> bool:
        return name == "Boolean"

    def unmarshal_graphql(self, value: Any) -> None:
        self.set = True
        if value is None:
            return
        if not isinstance(value, bool):
            raise TypeError(f"wrong type for Boolean: {_type_name(value)}")
        self.value = value


@dataclass
class NullInt:
    """An Int input that tells an explicit null apart from an omitted value."""

    value: Optional[int] = None
    set: bool = False

    @classmethod
    def implements_graphql_type(cls, name: str) -> bool:
        return name == "Int"

    def unmarshal_graphql(self, value: Any) -> None:
        self.set = True
        if value is None:
            return
        if isinstance(value, bool):
            raise TypeError(f"wrong type for Int: {_type_name(value)}")
        if isinstance(value, int):
            if not _INT32_MIN <= value <= _INT32_MAX:
                raise ValueError("not a 32-bit integer")
            self.value = value
            return
        if isinstance(value, float):
            if (
                not value.is_integer()
                or value < _INT32_MIN
                or value > _INT32_MAX
            ):
                raise ValueError("not a 32-bit integer")
            self.value = int(value)
            return
        raise TypeError(f"wrong type for Int: {_type_name(value)}")


@dataclass
class NullFloat:
    """A Float input that tells an explicit null apart from an omitted value."""

    value: Optional[float] = None
    set: bool = False

    @classmethod
    def implements_graphql_type(cls, name: str) -> bool:
        return name == "Float"

    def unmarshal_graphql(self, value: Any) -> None:
        self.set = True
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"wrong type for Float: {_type_name(value)}")
        self.value = float(value)


@dataclass
class NullTime:
    """A Time input that tells an explicit null apart from an omitted value."""

    value: Optional[Time] = None
    set: bool = False

    @classmethod
    def implements_graphql_type(cls, name: str) -> bool:
        return name == "Time"

    def unmarshal_graphql(self, value: Any) -> None:
        self.set = True
        if value is None:
            return
        self.value = Time()
        self.value.unmarshal_graphql(value)