# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Every failure raised by a client call derives from :class:`RequestError`.
Errors raised after a response arrived carry the fully-read
:class:`~reqkit.http.models.Response` so callers can inspect the body.
"""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .http.models import Response


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_URL = "INVALID_URL"
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RequestError(Exception):
    """Base class for all reqkit request failures."""

    def __init__(self, message: str, *, response: Response | None = None):
        super().__init__(message)
        self.response = response


class SerializationError(RequestError):
    """The request could not be built; nothing was sent."""


class TransportError(RequestError):
    """The exchange failed below HTTP (DNS, connection, timeout, cancellation)."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        response: Response | None = None,
    ):
        if response is None:
            from .http.models import Response

            response = Response()
        super().__init__(message, response=response)
        self.category = category

    @property
    def cancelled(self) -> bool:
        return self.category == ErrorCategory.CANCELLED


class StatusError(RequestError):
    """A response arrived but its status code failed validation."""

    def __init__(self, response: Response):
        super().__init__(f"invalid status code: {response.status_code}", response=response)
        self.status_code = response.status_code


class DecodeError(RequestError):
    """A successful response body could not be decoded into the requested shape."""

    def __init__(self, message: str, *, response: Response | None = None):
        super().__init__(message, response=response)
        self.status_code = response.status_code if response is not None else 0


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorCategory.INVALID_URL

    # httpx wraps the socket-level error; inspect the cause chain before the generic branch.
    cause = exc.__cause__ or exc.__context__
    if cause is not None and cause is not exc and not isinstance(cause, httpx.HTTPError):
        nested = categorize_exception(cause)
        if nested != ErrorCategory.UNKNOWN_ERROR:
            return nested

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "DecodeError",
    "ErrorCategory",
    "RequestError",
    "SerializationError",
    "StatusError",
    "TransportError",
    "categorize_exception",
]
