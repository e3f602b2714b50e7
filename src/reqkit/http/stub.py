# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Deterministic, programmable Transport for tests."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace

from ..errors import ErrorCategory, TransportError
from .transport import Transport, TransportRequest


@dataclass
class StubResponse:
    status_code: int = 200
    content: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    url: str | None = None
    chunk_size: int = 0

    def iter_bytes(self) -> Iterator[bytes]:
        if not self.chunk_size:
            yield self.content
            return
        for offset in range(0, len(self.content), self.chunk_size):
            yield self.content[offset : offset + self.chunk_size]


Responder = Callable[[TransportRequest], StubResponse]


class StubTransport(Transport):
    """
    Replays registered responses keyed by ``(METHOD, url)`` or by url alone.

    A registered value may be a StubResponse, an exception to raise, or a
    callable building a response from the request. Every request is recorded
    in ``requests``.
    """

    def __init__(self, responses: dict[str, StubResponse | BaseException | Responder] | None = None):
        self._responses: dict[object, StubResponse | BaseException | Responder] = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[TransportRequest] = []

    def add(
        self,
        url: str,
        response: StubResponse | BaseException | Responder,
        *,
        method: str | None = None,
    ) -> None:
        key: object = (method.upper(), url) if method else url
        self._responses[key] = response

    def _lookup(self, request: TransportRequest) -> StubResponse | BaseException | Responder | None:
        found = self._responses.get((request.method, request.url))
        if found is None:
            found = self._responses.get(request.url)
        return found

    @contextmanager
    def stream(self, request: TransportRequest) -> Iterator[StubResponse]:
        with self._lock:
            self.requests.append(request)
        registered = self._lookup(request)
        if registered is None:
            raise TransportError(
                f"no stubbed response configured for {request.method} {request.url}",
                category=ErrorCategory.CONNECTION_ERROR,
            )
        if isinstance(registered, BaseException):
            raise registered
        response = registered if isinstance(registered, StubResponse) else registered(request)
        if response.url is None:
            response = replace(response, url=request.url)
        yield response

    def close(self) -> None:
        return None


__all__ = ["StubResponse", "StubTransport"]
