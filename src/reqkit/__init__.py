# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
reqkit package entrypoint.

A small HTTP request layer: describe a call with RequestOptions, send it
through a Client (or the module-level functions bound to the default client),
and get back a fully-read Response or a typed RequestError. The ``*_json``
variants add JSON headers and decode the body into a caller-chosen type.
"""

from .api import (
    DEFAULT_CLIENT,
    delete,
    delete_json,
    get,
    get_json,
    post,
    post_json,
    put,
    put_json,
    request,
    request_json,
)
from .client import Client, create_client
from .config import HttpSettings, load_http_settings
from .errors import (
    DecodeError,
    ErrorCategory,
    RequestError,
    SerializationError,
    StatusError,
    TransportError,
)
from .http import (
    Form,
    HttpxTransport,
    Json,
    JsonResponse,
    RequestOptions,
    Response,
    StubResponse,
    StubTransport,
    Transport,
    default_validate_status,
)
from .log import setup_logging
from .utils.context import request_context
from .version import __version__

__all__ = [
    "DEFAULT_CLIENT",
    "Client",
    "DecodeError",
    "ErrorCategory",
    "Form",
    "HttpSettings",
    "HttpxTransport",
    "Json",
    "JsonResponse",
    "RequestError",
    "RequestOptions",
    "Response",
    "SerializationError",
    "StatusError",
    "StubResponse",
    "StubTransport",
    "Transport",
    "TransportError",
    "create_client",
    "default_validate_status",
    "delete",
    "delete_json",
    "get",
    "get_json",
    "load_http_settings",
    "post",
    "post_json",
    "put",
    "put_json",
    "request",
    "request_context",
    "request_json",
    "setup_logging",
    "__version__",
]
