# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError, categorize_exception
from .headers import has_header
from .transport import Transport, TransportRequest

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Synchronous httpx client wrapper; one instance is shared across threads."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    @contextmanager
    def stream(self, request: TransportRequest) -> Iterator[httpx.Response]:
        headers = dict(request.headers)
        if not has_header(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.content,
                timeout=timeout,
            ) as resp:
                yield resp
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            category = categorize_exception(exc)
            logger.debug("%s %s failed (%s): %s", request.method, request.url, category.value, exc)
            raise TransportError(f"{type(exc).__name__}: {exc}", category=category) from exc

    def close(self) -> None:
        self._client.close()


def create_default_transport(settings: HttpSettings | None = None) -> HttpxTransport:
    """Factory for the default httpx-backed transport."""
    return HttpxTransport(settings or load_http_settings())


__all__ = ["HttpxTransport", "create_default_transport"]
