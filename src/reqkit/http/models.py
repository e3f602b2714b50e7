# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request descriptor, body variants and response wrapper."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .headers import header_value, normalize_headers

T = TypeVar("T")

Headers = dict[str, str]
StatusValidator = Callable[[int], bool]
FormValue = str | bytes | Sequence[str | bytes]


def _form_scalar(name: str, value: object) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8")
    raise TypeError(f"form field {name!r}: expected str or bytes, got {type(value).__name__}")


def default_validate_status(status_code: int) -> bool:
    """Accept any 2xx status."""
    return 200 <= status_code < 300


@dataclass(frozen=True)
class Form:
    """Key/value body sent as ``application/x-www-form-urlencoded``."""

    fields: Mapping[str, FormValue] = field(default_factory=dict)

    def items(self) -> list[tuple[str, str]]:
        """
        Flatten to (name, value) pairs, names sorted, repeated values kept in order.

        Values must be str, UTF-8 bytes, or a sequence of those; anything else
        raises TypeError (surfaced as SerializationError when encoding).
        """
        pairs: list[tuple[str, str]] = []
        for name in sorted(self.fields):
            value = self.fields[name]
            if isinstance(value, (str, bytes)):
                pairs.append((name, _form_scalar(name, value)))
            elif isinstance(value, Sequence):
                pairs.extend((name, _form_scalar(name, item)) for item in value)
            else:
                raise TypeError(f"form field {name!r}: expected str, bytes or a sequence of them, got {type(value).__name__}")
        return pairs


@dataclass(frozen=True)
class Json:
    """Arbitrary value serialized as the JSON request body."""

    value: Any


Body = Form | Json | None


@dataclass(frozen=True)
class RequestOptions:
    """
    Description of one HTTP call.

    ``path`` is appended to the client's base URL. A ``body`` that is not a
    :class:`Form` or :class:`Json` is wrapped in :class:`Json`. Instances are
    never mutated by the client.
    """

    path: str = ""
    headers: Mapping[str, str] | None = None
    body: Any = None
    params: Mapping[str, str] | None = None
    validate_status: StatusValidator | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.body is not None and not isinstance(self.body, (Form, Json)):
            object.__setattr__(self, "body", Json(self.body))


@dataclass(frozen=True)
class Response:
    """Fully-read HTTP response; ``status_code`` is 0 when no response arrived."""

    data: bytes = b""
    status_code: int = 0
    headers: Headers = field(default_factory=dict)
    url: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", normalize_headers(self.headers))

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    def __str__(self) -> str:
        return self.text

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    def json(self) -> Any:
        return json.loads(self.data)


@dataclass(frozen=True)
class JsonResponse(Response, Generic[T]):
    """Response carrying the body decoded into the caller's type."""

    value: T | None = None


__all__ = [
    "Body",
    "Form",
    "Headers",
    "Json",
    "JsonResponse",
    "RequestOptions",
    "Response",
    "StatusValidator",
    "default_validate_status",
]
