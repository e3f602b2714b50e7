# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL assembly for client requests."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlencode, urlsplit, urlunsplit

from ..errors import SerializationError


def encode_query(params: Mapping[str, str]) -> str:
    """Encode query parameters individually, sorted by name."""
    return urlencode(sorted((str(key), str(value)) for key, value in params.items()))


def build_url(base_url: str, path: str, params: Mapping[str, str] | None = None) -> str:
    """
    Concatenate ``base_url`` and ``path`` and append ``params`` as the query string.

    A URL that already carries a query cannot also take ``params``; the
    combination raises :class:`SerializationError` instead of guessing whether
    to merge or replace.
    """
    url = f"{base_url or ''}{path or ''}"
    if not params:
        return url

    parts = urlsplit(url)
    if parts.query:
        raise SerializationError(f"query string given both in path and params: {url!r}")
    return urlunsplit((parts.scheme, parts.netloc, parts.path, encode_query(params), parts.fragment))


__all__ = ["build_url", "encode_query"]
