"""Opaque global object identifiers in the Relay style."""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any

_URLSAFE_B64 = re.compile(r"[A-Za-z0-9_-]*={0,2}")
_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _encode_json(spec: Any) -> str:
    try:
        text = json.dumps(spec, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"relay.marshal_id: {exc}") from exc
    for char, escape in _ESCAPES.items():
        text = text.replace(char, escape)
    return text


def _decode(id_: str) -> bytes:
    if len(id_) % 4 or not _URLSAFE_B64.fullmatch(id_):
        raise ValueError(f"illegal base64 data in {id_!r}")
    try:
        return base64.b64decode(id_, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise ValueError(str(exc)) from exc


def marshal_id(kind: str, spec: Any) -> str:
    """Encode a kind and a JSON-serialisable spec as an opaque ID."""
    raw = (kind + ":" + _encode_json(spec)).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def unmarshal_kind(id_: str) -> str:
    """Return the kind part of an ID, or "" if the ID is malformed."""
    try:
        raw = _decode(id_)
    except ValueError:
        return ""
    kind, sep, _ = raw.partition(b":")
    if not sep:
        return ""
    return kind.decode("utf-8", errors="replace")


def unmarshal_spec(id_: str) -> Any:
    """Return the decoded spec part of an ID, raising ValueError if malformed."""
    raw = _decode(id_)
    _, sep, spec = raw.partition(b":")
    if not sep:
        raise ValueError("invalid graphql.ID")
    return json.loads(spec)