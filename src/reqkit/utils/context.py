# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-call ambient context.

A ContextVar-backed RequestContext carries the deadline and cancellation
signal for the calls made inside a ``request_context`` block. The client reads
it when a request does not set its own timeout, so a caller can bound a whole
sequence of requests from the top of the call stack.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RequestContext:
    deadline: float | None = None
    cancel_event: threading.Event | None = None

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


_current_request_context: ContextVar[RequestContext | None] = ContextVar("reqkit_request_context", default=None)


def get_request_context() -> RequestContext:
    """Return the current ambient request context."""
    return _current_request_context.get() or RequestContext()


@contextmanager
def request_context(
    *,
    timeout: float | None = None,
    cancel_event: threading.Event | None = None,
) -> Iterator[RequestContext]:
    """
    Layer a deadline and/or cancellation signal onto the ambient context.

    A nested ``timeout`` can only shorten an outer deadline. None-valued
    arguments keep the outer values.
    """
    current = get_request_context()
    overrides: dict[str, object] = {}
    if timeout is not None:
        deadline = time.monotonic() + max(0.0, timeout)
        if current.deadline is not None:
            deadline = min(deadline, current.deadline)
        overrides["deadline"] = deadline
    if cancel_event is not None:
        overrides["cancel_event"] = cancel_event
    new_context = replace(current, **overrides) if overrides else current
    token = _current_request_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_request_context.reset(token)


__all__ = ["RequestContext", "get_request_context", "request_context"]
