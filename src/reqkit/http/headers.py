# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header utilities.

HTTP header field names are case-insensitive (RFC 9110). Callers hand us plain
dicts with arbitrary casing, so lookups and merges compare names lowercased
while outgoing headers keep the spelling the caller chose.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def _items(headers: Any) -> Iterable[tuple[object, object]]:
    """Yield (name, value) pairs from dicts, httpx.Headers or iterable-of-pairs."""
    if not headers:
        return ()
    items = getattr(headers, "items", None)
    if callable(items):
        return items()
    return headers


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    out: dict[str, str] = {}
    for key, value in _items(headers):
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    if name in headers:
        return headers[name]
    lower = name.lower()
    for key, value in headers.items():
        if str(key).lower() == lower:
            return value
    return default


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    if not headers:
        return False
    lower = name.lower()
    return any(str(key).lower() == lower for key in headers)


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """
    Merge header mappings; later layers win.

    A name set in a later layer replaces every earlier spelling of the same
    name, so ``content-type`` and ``Content-Type`` never both go out.
    """
    merged: dict[str, str] = {}
    spelling: dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            lower = key.lower()
            previous = spelling.get(lower)
            if previous is not None and previous != key:
                merged.pop(previous, None)
            spelling[lower] = key
            merged[key] = value
    return merged


__all__ = ["has_header", "header_value", "merge_headers", "normalize_headers"]
