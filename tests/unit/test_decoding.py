# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from reqkit.http.decoding import ShapeError, decode_json


@dataclass
class Record:
    a: int


@dataclass
class Owner:
    name: str
    email: str | None = None


@dataclass
class Repo:
    id: int
    owner: Owner
    tags: list[str] = field(default_factory=list)
    score: float = 0.0


class Token:
    def __init__(self, value: str):
        self.value = value

    @classmethod
    def from_mapping(cls, data):
        return cls(data["token"])


def test_decode_into_dataclass():
    record = decode_json(b'{"a":1}', Record)
    assert record == Record(a=1)


def test_decode_nested_dataclass_ignores_unknown_keys():
    body = json.dumps({"id": 7, "owner": {"name": "ada", "extra": 1}, "tags": ["x"], "score": 3, "unused": True})
    repo = decode_json(body.encode(), Repo)
    assert repo == Repo(id=7, owner=Owner(name="ada"), tags=["x"], score=3.0)
    assert isinstance(repo.score, float)


def test_decode_generic_containers():
    assert decode_json(b"[1,2,3]", list[int]) == [1, 2, 3]
    assert decode_json(b'{"a":{"a":2}}', dict[str, Record]) == {"a": Record(a=2)}
    assert decode_json(b"null", Record | None) is None
    assert decode_json(b'{"k": [1]}', Any) == {"k": [1]}
    assert decode_json(b'{"k": [1]}', dict) == {"k": [1]}


def test_decode_uses_from_mapping():
    token = decode_json(b'{"token":"abc"}', Token)
    assert token.value == "abc"


def test_decode_type_mismatch_raises_shape_error():
    with pytest.raises(ShapeError) as excinfo:
        decode_json(b'{"a":"1"}', Record)
    assert "$.a" in str(excinfo.value)

    with pytest.raises(ShapeError):
        decode_json(b"true", int)

    with pytest.raises(ShapeError):
        decode_json(b"[1]", Record)


def test_decode_missing_required_field_raises_shape_error():
    with pytest.raises(ShapeError):
        decode_json(b"{}", Record)


def test_decode_malformed_json_raises_value_error():
    with pytest.raises(ValueError):
        decode_json(b"{not json", Record)
    with pytest.raises(ValueError):
        decode_json(b"", dict)


class Profile:
    def __init__(self, city: str):
        self.city = city

    @classmethod
    def from_mapping(cls, data):
        return cls(data.get("address").get("city"))


def test_decode_from_mapping_attribute_error_raises_shape_error():
    with pytest.raises(ShapeError):
        decode_json(b'{"address": null}', Profile)
    assert decode_json(b'{"address": {"city": "Oslo"}}', Profile).city == "Oslo"


def test_decode_deeply_nested_json_raises_value_error():
    depth = 100_000
    with pytest.raises(ValueError):
        decode_json(b"[" * depth + b"]" * depth, list)
