# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP building blocks: descriptors, encoding, decoding and transports."""

from .decoding import decode_json
from .encoding import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE, encode_body
from .headers import has_header, header_value, merge_headers, normalize_headers
from .httpx_transport import HttpxTransport, create_default_transport
from .models import Form, Json, JsonResponse, RequestOptions, Response, default_validate_status
from .stub import StubResponse, StubTransport
from .transport import Transport, TransportRequest, TransportResponse
from .url import build_url

__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "Form",
    "HttpxTransport",
    "Json",
    "JsonResponse",
    "RequestOptions",
    "Response",
    "StubResponse",
    "StubTransport",
    "Transport",
    "TransportRequest",
    "TransportResponse",
    "build_url",
    "create_default_transport",
    "decode_json",
    "default_validate_status",
    "encode_body",
    "has_header",
    "header_value",
    "merge_headers",
    "normalize_headers",
]
