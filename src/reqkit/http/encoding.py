# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request body encoding."""

from __future__ import annotations

import dataclasses
import json
from typing import Any
from urllib.parse import urlencode

from ..errors import SerializationError
from .models import Body, Form, Json

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> bytes:
    try:
        return json.dumps(
            value,
            default=_json_default,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"cannot encode JSON body: {exc}") from exc


def encode_body(body: Body) -> tuple[bytes, dict[str, str]]:
    """
    Encode a request body.

    Returns the payload and the headers the encoding forces; forced headers
    override whatever the caller set for the same name.
    """
    if body is None:
        return b"", {}
    if isinstance(body, Form):
        try:
            payload = urlencode(body.items()).encode("ascii")
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode form body: {exc}") from exc
        return payload, {"Content-Type": FORM_CONTENT_TYPE}
    if isinstance(body, Json):
        return encode_json(body.value), {}
    raise SerializationError(f"unsupported body type: {type(body).__name__}")


__all__ = ["FORM_CONTENT_TYPE", "JSON_CONTENT_TYPE", "encode_body", "encode_json"]
