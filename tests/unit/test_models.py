# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from reqkit.http.models import Form, Json, JsonResponse, RequestOptions, Response, default_validate_status


def test_request_options_wraps_raw_body_in_json():
    opts = RequestOptions(body={"a": 1})
    assert opts.body == Json({"a": 1})

    assert RequestOptions(body=Form({"a": "1"})).body == Form({"a": "1"})
    assert RequestOptions().body is None


def test_request_options_is_frozen():
    opts = RequestOptions(path="/x")
    with pytest.raises(AttributeError):
        opts.path = "/y"  # type: ignore[misc]


def test_form_items_sorted_and_multi_valued():
    form = Form({"b": "2", "a": ["x", "y"]})
    assert form.items() == [("a", "x"), ("a", "y"), ("b", "2")]


def test_response_exposes_body_and_status():
    resp = Response(data="héllo".encode(), status_code=201, headers={"Content-Type": "text/plain"})
    assert str(resp) == "héllo"
    assert resp.text == "héllo"
    assert resp.status_code == 201
    assert resp.headers == {"content-type": "text/plain"}
    assert resp.header("CONTENT-TYPE") == "text/plain"
    assert resp.header("missing", "none") == "none"


def test_empty_response_reports_status_zero():
    resp = Response()
    assert resp.status_code == 0
    assert str(resp) == ""


def test_response_json_and_json_response_value():
    resp = JsonResponse(data=b'{"a": 1}', status_code=200, value={"a": 1})
    assert resp.json() == {"a": 1}
    assert resp.value == {"a": 1}
    assert isinstance(resp, Response)


@pytest.mark.parametrize(("code", "expected"), [(199, False), (200, True), (204, True), (299, True), (300, False), (404, False)])
def test_default_validate_status(code, expected):
    assert default_validate_status(code) is expected
