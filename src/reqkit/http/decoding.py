# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Typed JSON decoding.

``decode_json`` parses a response body and shapes the result into the type a
caller asked for. Supported targets:

- ``Any`` / ``object``: the parsed value as-is
- ``dict``, ``list``, ``str``, ``int``, ``float``, ``bool`` and ``None``
- parametrized ``list[X]``, ``tuple[X, ...]``, ``dict[str, X]`` and ``X | None`` unions
- dataclasses, recursively; unknown keys are ignored and missing keys fall back
  to the field default
- any class exposing a ``from_mapping`` classmethod
"""

from __future__ import annotations

import dataclasses
import json
import types
import typing
from collections.abc import Mapping
from typing import Any, TypeVar, Union

T = TypeVar("T")

_SCALARS: tuple[type, ...] = (str, int, float, bool)


class ShapeError(ValueError):
    """The parsed JSON does not fit the requested type."""

    def __init__(self, message: str, path: str = "$"):
        super().__init__(f"{path}: {message}")
        self.path = path


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _convert_scalar(value: Any, target: type, path: str) -> Any:
    if target is bool:
        if isinstance(value, bool):
            return value
    elif target is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif target is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(value, target):
        return value
    raise ShapeError(f"expected {target.__name__}, got {_type_name(value)}", path)


def _convert_dataclass(value: Any, target: type, path: str) -> Any:
    if not isinstance(value, Mapping):
        raise ShapeError(f"expected object for {target.__name__}, got {_type_name(value)}", path)
    try:
        hints = typing.get_type_hints(target)
    except NameError:
        # Forward references that cannot be resolved; use whatever is not a string.
        hints = {f.name: f.type for f in dataclasses.fields(target) if not isinstance(f.type, str)}
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(target):
        if not f.init or f.name not in value:
            continue
        kwargs[f.name] = convert(value[f.name], hints.get(f.name, Any), f"{path}.{f.name}")
    try:
        return target(**kwargs)
    except TypeError as exc:
        raise ShapeError(str(exc), path) from exc


def _convert_union(value: Any, args: tuple[Any, ...], path: str) -> Any:
    if value is None and type(None) in args:
        return None
    errors: list[str] = []
    for arg in args:
        if arg is type(None):
            continue
        try:
            return convert(value, arg, path)
        except ShapeError as exc:
            errors.append(str(exc))
    raise ShapeError(f"no union member matched ({'; '.join(errors)})", path)


def convert(value: Any, target: Any, path: str = "$") -> Any:
    """Shape an already-parsed JSON value into ``target``."""
    if target is Any or target is object:
        return value
    if target is None or target is type(None):
        if value is not None:
            raise ShapeError(f"expected null, got {_type_name(value)}", path)
        return None

    origin = typing.get_origin(target)
    args = typing.get_args(target)

    if origin is Union or origin is types.UnionType:
        return _convert_union(value, args, path)

    if origin in (list, tuple) or target in (list, tuple):
        if not isinstance(value, list):
            raise ShapeError(f"expected array, got {_type_name(value)}", path)
        if not args:
            return list(value) if (origin or target) is list else tuple(value)
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(convert(item, args[0], f"{path}[{i}]") for i, item in enumerate(value))
            if len(args) != len(value):
                raise ShapeError(f"expected {len(args)} items, got {len(value)}", path)
            return tuple(convert(item, arg, f"{path}[{i}]") for i, (item, arg) in enumerate(zip(value, args)))
        return [convert(item, args[0], f"{path}[{i}]") for i, item in enumerate(value)]

    if origin is dict or target is dict:
        if not isinstance(value, dict):
            raise ShapeError(f"expected object, got {_type_name(value)}", path)
        if not args:
            return dict(value)
        return {key: convert(item, args[1], f"{path}.{key}") for key, item in value.items()}

    if isinstance(target, type):
        if dataclasses.is_dataclass(target):
            return _convert_dataclass(value, target, path)
        from_mapping = getattr(target, "from_mapping", None)
        if callable(from_mapping):
            if not isinstance(value, Mapping):
                raise ShapeError(f"expected object for {target.__name__}, got {_type_name(value)}", path)
            try:
                return from_mapping(value)
            except (TypeError, ValueError, KeyError, AttributeError) as exc:
                raise ShapeError(str(exc), path) from exc
        if target in _SCALARS:
            return _convert_scalar(value, target, path)

    raise ShapeError(f"unsupported target type {target!r}", path)


def decode_json(data: bytes, into: type[T] | Any) -> T:
    """
    Parse ``data`` as JSON and convert it to ``into``.

    Raises ``ValueError`` (``json.JSONDecodeError`` or :class:`ShapeError`)
    when the body is not valid JSON or does not fit the target.
    """
    try:
        parsed = json.loads(data)
    except UnicodeDecodeError as exc:
        raise ValueError(f"response body is not valid UTF-8: {exc}") from exc
    except RecursionError as exc:
        raise ValueError("response body is nested too deeply to parse") from exc
    try:
        return convert(parsed, into)
    except RecursionError as exc:
        raise ShapeError("value is nested too deeply to convert") from exc


__all__ = ["ShapeError", "convert", "decode_json"]
