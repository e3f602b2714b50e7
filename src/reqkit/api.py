# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Module-level request functions backed by one default Client.

``DEFAULT_CLIENT`` has an empty base URL and empty default options. It is
built once at import and never reconfigured; every function here forwards to
it unchanged. Build a :class:`~reqkit.client.Client` when a call needs a base
URL, default headers or a different transport.
"""

from __future__ import annotations

from typing import Any, TypeVar

from .client import Client
from .http.models import JsonResponse, RequestOptions, Response

T = TypeVar("T")

DEFAULT_CLIENT = Client("", RequestOptions())


def request(method: str, options: RequestOptions | None = None) -> Response:
    return DEFAULT_CLIENT.request(method, options)


def get(options: RequestOptions | None = None) -> Response:
    return DEFAULT_CLIENT.get(options)


def post(options: RequestOptions | None = None) -> Response:
    return DEFAULT_CLIENT.post(options)


def put(options: RequestOptions | None = None) -> Response:
    return DEFAULT_CLIENT.put(options)


def delete(options: RequestOptions | None = None) -> Response:
    return DEFAULT_CLIENT.delete(options)


def request_json(method: str, options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
    return DEFAULT_CLIENT.request_json(method, options, into)


def get_json(options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
    return DEFAULT_CLIENT.get_json(options, into)


def post_json(options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
    return DEFAULT_CLIENT.post_json(options, into)


def put_json(options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
    return DEFAULT_CLIENT.put_json(options, into)


def delete_json(options: RequestOptions | None = None, into: type[T] | Any = None) -> JsonResponse[T]:
    return DEFAULT_CLIENT.delete_json(options, into)


__all__ = [
    "DEFAULT_CLIENT",
    "delete",
    "delete_json",
    "get",
    "get_json",
    "post",
    "post_json",
    "put",
    "put_json",
    "request",
    "request_json",
]
