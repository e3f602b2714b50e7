# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from reqkit.client import Client
from reqkit.config import HttpSettings
from reqkit.errors import ErrorCategory, TransportError
from reqkit.http.httpx_transport import HttpxTransport
from reqkit.http.models import RequestOptions
from reqkit.utils.context import request_context

SERVER_DELAY = 2.0


class SlowHandler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        time.sleep(SERVER_DELAY)
        try:
            self.send_response(200)
            self.send_header("Content-Length", "2")
            self.end_headers()
            self.wfile.write(b"ok")
        except OSError:
            pass

    def log_message(self, *args):  # noqa: ARG002
        return None


@pytest.fixture
def slow_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), SlowHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def transport():
    transport = HttpxTransport(HttpSettings(timeout=10.0))
    try:
        yield transport
    finally:
        transport.close()


def test_cancel_while_waiting_for_headers_returns_promptly(slow_server, transport):
    event = threading.Event()
    timer = threading.Timer(0.2, event.set)
    client = Client(slow_server, transport=transport)

    started = time.monotonic()
    timer.start()
    try:
        with request_context(cancel_event=event), pytest.raises(TransportError) as excinfo:
            client.get(RequestOptions(path="/slow"))
    finally:
        timer.cancel()
    elapsed = time.monotonic() - started

    assert excinfo.value.category == ErrorCategory.CANCELLED
    assert excinfo.value.response.status_code == 0
    assert elapsed < SERVER_DELAY / 2


def test_uncancelled_event_lets_request_complete(slow_server, transport, monkeypatch):
    monkeypatch.setattr(SlowHandler, "do_GET", _fast_get)
    event = threading.Event()
    with request_context(cancel_event=event):
        resp = Client(slow_server, transport=transport).get(RequestOptions(path="/fast"))
    assert resp.status_code == 200
    assert str(resp) == "ok"


def _fast_get(handler):
    handler.send_response(200)
    handler.send_header("Content-Length", "2")
    handler.end_headers()
    handler.wfile.write(b"ok")
