# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import pytest

import reqkit
from reqkit import api
from reqkit.http.models import RequestOptions
from reqkit.http.stub import StubResponse, StubTransport
from reqkit.http.transport import TransportRequest


@dataclass
class Record:
    a: int


@pytest.fixture
def stub(monkeypatch):
    transport = StubTransport()
    monkeypatch.setattr("reqkit.client._shared_transport", transport)
    return transport


def test_default_client_is_unconfigured():
    assert api.DEFAULT_CLIENT.base_url == ""
    assert api.DEFAULT_CLIENT.default_options == RequestOptions()
    assert reqkit.DEFAULT_CLIENT is api.DEFAULT_CLIENT


def test_free_functions_forward_to_default_client(stub):
    url = "http://svc.test/thing"
    stub.add(url, StubResponse(200, b'{"a": 3}'))

    assert reqkit.get(RequestOptions(path=url)).status_code == 200
    assert reqkit.post(RequestOptions(path=url, body={"k": 1})).status_code == 200
    assert reqkit.put(RequestOptions(path=url)).status_code == 200
    assert reqkit.delete(RequestOptions(path=url)).status_code == 200
    assert reqkit.request("OPTIONS", RequestOptions(path=url)).status_code == 200

    assert [req.method for req in stub.requests] == ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


def test_free_json_functions_decode(stub):
    url = "http://svc.test/record"
    stub.add(url, StubResponse(200, b'{"a": 1}'))

    for fn in (reqkit.get_json, reqkit.post_json, reqkit.put_json, reqkit.delete_json):
        assert fn(RequestOptions(path=url), Record).value == Record(a=1)
    assert reqkit.request_json("GET", RequestOptions(path=url), dict).value == {"a": 1}


def test_concurrent_default_get_has_no_cross_talk(stub):
    def echo(request: TransportRequest) -> StubResponse:
        payload = {"url": request.url, "id": request.headers["X-Call"]}
        return StubResponse(200, json.dumps(payload).encode(), headers={"X-Call": request.headers["X-Call"]})

    for i in range(50):
        stub.add(f"http://svc.test/items/{i}", echo)

    def call(i: int):
        resp = reqkit.get(RequestOptions(path=f"http://svc.test/items/{i}", headers={"X-Call": str(i)}))
        return i, resp

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(call, range(50)))

    for i, resp in results:
        assert resp.json() == {"url": f"http://svc.test/items/{i}", "id": str(i)}
        assert resp.header("x-call") == str(i)
    assert len(stub.requests) == 50
