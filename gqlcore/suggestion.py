"""Suggestions of similar names for misspelt identifiers."""

from __future__ import annotations

import json
from collections.abc import Iterable


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def make_suggestion(prefix: str, options: Iterable[str], text: str) -> str:
    """Return a hint such as ' Did you mean "a" or "b"?', or "" if nothing is close."""
    distances: dict[str, int] = {}
    selected: list[str] = []
    for opt in options:
        distance = levenshtein_distance(text, opt)
        threshold = max(len(text) // 2, len(opt) // 2, 1)
        if distance < threshold:
            selected.append(opt)
            distances[opt] = distance

    if not selected:
        return ""
    selected.sort(key=distances.__getitem__)

    parts = [_quote(opt) for opt in selected]
    if len(parts) > 1:
        parts[-1] = "or " + parts[-1]
    return f" {prefix} {', '.join(parts)}?"


def levenshtein_distance(s1: str, s2: str) -> int:
    """Return the edit distance between two strings."""
    column = list(range(len(s1) + 1))
    for x, rx in enumerate(s2):
        column[0] = x + 1
        last_diag = x
        for y, ry in enumerate(s1):
            old_diag = column[y + 1]
            if rx != ry:
                last_diag += 1
            column[y + 1] = min(column[y + 1] + 1, column[y] + 1, last_diag)
            last_diag = old_diag
    return column[len(s1)]