# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client bound to a base URL and default request options."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, TypeVar

from .config import HttpSettings, load_http_settings
from .errors import DecodeError, ErrorCategory, StatusError, TransportError, categorize_exception
from .http.decoding import decode_json
from .http.encoding import JSON_CONTENT_TYPE, encode_body
from .http.headers import has_header, merge_headers
from .http.httpx_transport import create_default_transport
from .http.models import JsonResponse, RequestOptions, Response, default_validate_status
from .http.transport import Transport, TransportRequest, TransportResponse
from .http.url import build_url
from .utils.context import RequestContext, get_request_context

T = TypeVar("T")

logger = logging.getLogger(__name__)

_shared_transport: Transport | None = None
_shared_transport_lock = threading.Lock()
_CANCEL_POLL_INTERVAL = 0.05


def get_shared_transport() -> Transport:
    """Return the process-wide httpx transport, creating it on first use."""
    global _shared_transport
    if _shared_transport is None:
        with _shared_transport_lock:
            if _shared_transport is None:
                _shared_transport = create_default_transport()
    return _shared_transport


def _check_context(context: RequestContext, method: str, url: str) -> None:
    if context.cancelled:
        raise TransportError(f"{method} {url}: request cancelled", category=ErrorCategory.CANCELLED)
    if context.expired:
        raise TransportError(f"{method} {url}: deadline exceeded", category=ErrorCategory.TIMEOUT)


def _effective_timeout(timeout: float | None, context: RequestContext) -> float | None:
    remaining = context.remaining()
    if timeout is None:
        return remaining
    if remaining is None:
        return timeout
    return min(timeout, remaining)


class Client:
    """
    Issues requests against ``base_url`` with ``default_options`` filling in
    whatever a call leaves unset.

    A Client holds no per-request state and may be shared across threads. The
    transport is borrowed, never closed by the client; when omitted the
    process-wide httpx transport is used.
    """

    def __init__(
        self,
        base_url: str = "",
        default_options: RequestOptions | None = None,
        transport: Transport | None = None,
        settings: HttpSettings | None = None,
    ):
        self.base_url = base_url
        self.default_options = default_options or RequestOptions()
        self.settings = settings or load_http_settings()
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport if self._transport is not None else get_shared_transport()

    def get(self, options: RequestOptions | None = None) -> Response:
        """Send a GET request."""
        return self.request("GET", options)

    def post(self, options: RequestOptions | None = None) -> Response:
        """Send a POST request."""
        return self.request("POST", options)

    def put(self, options: RequestOptions | None = None) -> Response:
        """Send a PUT request."""
        return self.request("PUT", options)

    def delete(self, options: RequestOptions | None = None) -> Response:
        """Send a DELETE request."""
        return self.request("DELETE", options)

    def _with_defaults(self, options: RequestOptions) -> RequestOptions:
        defaults = self.default_options
        params = {**(defaults.params or {}), **(options.params or {})}
        return replace(
            options,
            path=f"{defaults.path}{options.path}",
            headers=merge_headers(defaults.headers, options.headers),
            params=params or None,
            body=options.body if options.body is not None else defaults.body,
            validate_status=options.validate_status or defaults.validate_status,
            timeout=options.timeout if options.timeout is not None else defaults.timeout,
        )

    def _read_body(self, raw: TransportResponse, context: RequestContext, method: str, url: str) -> bytes:
        limit = self.settings.max_body_bytes
        content = bytearray()
        for chunk in raw.iter_bytes():
            _check_context(context, method, url)
            if not chunk:
                continue
            content.extend(chunk)
            if limit > 0 and len(content) > limit:
                raise TransportError(
                    f"{method} {url}: response body exceeds {limit} bytes",
                    category=ErrorCategory.BODY_TOO_LARGE,
                )
        return bytes(content)

    def _exchange(self, transport_request: TransportRequest, context: RequestContext) -> Response:
        method, url = transport_request.method, transport_request.url
        with self.transport.stream(transport_request) as raw:
            data = self._read_body(raw, context, method, url)
            return Response(
                data=data,
                status_code=raw.status_code,
                headers=raw.headers,
                url=str(raw.url) if raw.url else url,
            )

    def _exchange_cancellable(self, transport_request: TransportRequest, context: RequestContext) -> Response:
        """
        Run the exchange on a worker thread and return as soon as it finishes
        or the context is cancelled.

        On cancellation the worker is abandoned; it stops at the next body
        chunk or when the transport gives up, and its result is discarded.
        """
        done = threading.Event()
        outcome: dict[str, Any] = {}

        def work() -> None:
            try:
                outcome["response"] = self._exchange(transport_request, context)
            except BaseException as exc:  # noqa: BLE001 - re-raised on the calling thread
                outcome["error"] = exc
            finally:
                done.set()

        worker = threading.Thread(target=work, name="reqkit-exchange", daemon=True)
        worker.start()
        while not done.wait(_CANCEL_POLL_INTERVAL):
            if context.cancelled:
                logger.debug("%s %s abandoned after cancellation", transport_request.method, transport_request.url)
                _check_context(context, transport_request.method, transport_request.url)

        if "error" in outcome:
            raise outcome["error"]
        return outcome["response"]

    def request(self, method: str, options: RequestOptions | None = None) -> Response:
        """
        Send a request and return the fully-read response.

        Raises SerializationError before anything is sent when the body or
        URL cannot be built, TransportError when no response arrives, and
        StatusError (carrying the response) when the status fails validation.
        """
        method = (method or "").strip().upper()
        if not method:
            raise ValueError("HTTP method is required")

        opts = self._with_defaults(options or RequestOptions())
        payload, forced_headers = encode_body(opts.body)
        url = build_url(self.base_url, opts.path, opts.params)
        headers = merge_headers(opts.headers, forced_headers)

        context = get_request_context()
        _check_context(context, method, url)
        transport_request = TransportRequest(
            method=method,
            url=url,
            headers=headers,
            content=payload,
            timeout=_effective_timeout(opts.timeout, context),
        )

        logger.debug("%s %s (%d byte body)", method, url, len(payload))
        try:
            if context.cancel_event is None:
                response = self._exchange(transport_request, context)
            else:
                response = self._exchange_cancellable(transport_request, context)
        except OSError as exc:
            raise TransportError(f"{method} {url}: {exc}", category=categorize_exception(exc)) from exc

        validate = opts.validate_status or default_validate_status
        if not validate(response.status_code):
            logger.debug("%s %s -> %d rejected by status validator", method, url, response.status_code)
            raise StatusError(response)

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def request_json(
        self,
        method: str,
        options: RequestOptions | None = None,
        into: type[T] | Any = None,
    ) -> JsonResponse[T]:
        """
        Send a request with JSON ``Accept``/``Content-Type`` headers and decode
        the body into ``into``.

        Headers the caller (or the client defaults) already set are kept. When
        ``into`` is None the body is not decoded and ``value`` stays None.
        Decode failures raise DecodeError carrying the response.
        """
        options = options or RequestOptions()
        headers = dict(options.headers or {})
        for name in ("Accept", "Content-Type"):
            if not has_header(headers, name) and not has_header(self.default_options.headers, name):
                headers[name] = JSON_CONTENT_TYPE

        response = self.request(method, replace(options, headers=headers))

        value = None
        if into is not None:
            try:
                value = decode_json(response.data, into)
            except ValueError as exc:
                logger.debug("%s %s -> %d body did not decode: %s", method, response.url, response.status_code, exc)
                raise DecodeError(f"cannot decode response body: {exc}", response=response) from exc

        return JsonResponse(
            data=response.data,
            status_code=response.status_code,
            headers=response.headers,
            url=response.url,
            value=value,
        )

    def get_json(self, options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
        return self.request_json("GET", options, into)

    def post_json(self, options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
        return self.request_json("POST", options, into)

    def put_json(self, options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
        return self.request_json("PUT", options, into)

    def delete_json(self, options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
        return self.request_json("DELETE", options, into)


def create_client(
    base_url: str = "",
    default_options: RequestOptions | None = None,
    transport: Transport | None = None,
) -> Client:
    """Factory for a Client bound to ``base_url``."""
    return Client(base_url, default_options, transport=transport)


__all__ = ["Client", "create_client", "get_shared_transport"]
