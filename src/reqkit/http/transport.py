# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction the client sends requests through."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class TransportRequest:
    """Fully-built request: absolute URL, final headers and encoded payload."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    timeout: float | None = None


class TransportResponse(Protocol):
    """Response whose body has not been read yet."""

    status_code: int
    headers: Mapping[str, str] | Any
    url: Any

    def iter_bytes(self) -> Iterator[bytes]: ...


class Transport(Protocol):
    """
    Minimal protocol for sending HTTP requests.

    Implementations must be safe for concurrent use and raise
    :class:`reqkit.errors.TransportError` for failures below HTTP, including
    while the body is being iterated.
    """

    def stream(self, request: TransportRequest) -> AbstractContextManager[TransportResponse]: ...

    def close(self) -> None:  # pragma: no cover - optional for test transports
        ...


__all__ = ["Transport", "TransportRequest", "TransportResponse"]
