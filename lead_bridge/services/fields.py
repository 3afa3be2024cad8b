"""
Field resolution: "first non-empty candidate wins".

Payload fields live at several alternate paths; callers list the candidates in
precedence order and get back a string (never None).
"""

import json
from collections.abc import Mapping
from typing import Any


def resolve(*candidates: Any) -> str:
    """
    Return the first candidate that is present and not blank, as a string.

    None and whitespace-only values are skipped. Falsy-but-real values such as
    0 or False are kept. Returns "" when nothing qualifies.
    """
    for value in candidates:
        if value is None:
            continue
        text = as_text(value)
        if text.strip():
            return text
    return ""


def as_text(value: Any) -> str:
    """
    JSON value as the form platform displays it.

    Booleans are lowercase, integral floats drop ".0", lists join with ","
    (None items as ""), objects are compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(as_text(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def lookup(source: Any, *path: str) -> Any:
    """Walk nested mappings by key; None on any missing step."""
    current = source
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def as_mapping(value: Any) -> dict:
    """The value itself if it is a mapping, else an empty dict."""
    return dict(value) if isinstance(value, Mapping) else {}


def split_recipients(value: str | None) -> list[str]:
    """Split a comma/whitespace separated address list, dropping blanks."""
    return [part for part in (value or "").replace(",", " ").split() if part]
