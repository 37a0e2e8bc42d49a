from __future__ import annotations

import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Iterator

import httpx
import pytest
import requests

from jsonlib import JSONLibrary


@pytest.fixture(scope="session")
def local_json_server() -> Iterator[str]:
    class Handler(BaseHTTPRequestHandler):
        def _reply(self, status: int, body: bytes) -> None:
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def _handle(self) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            data = self.rfile.read(length) if length else b""

            if self.path.startswith("/echo"):
                payload = json.loads(data) if data else None
                body = {
                    "method": self.command,
                    "payload": payload,
                    "content_type": self.headers.get("Content-Type"),
                    "trace": self.headers.get("X-Trace"),
                }
                self._reply(200, json.dumps(body).encode("utf-8"))
                return
            if self.path.startswith("/fail"):
                self._reply(500, b'{"error": "boom"}')
                return
            if self.path.startswith("/not-found"):
                self._reply(404, b'{"error": "not found"}')
                return
            if self.path.startswith("/not-json"):
                self._reply(200, b"plain text")
                return
            if self.path.startswith("/empty"):
                self.send_response(204)
                self.end_headers()
                return
            if self.path.startswith("/slow"):
                time.sleep(0.2)
                self._reply(200, b"{}")
                return
            self._reply(200, b'{"items": [{"name": "jsonlib"}]}')

        do_GET = _handle
        do_POST = _handle
        do_PUT = _handle
        do_DELETE = _handle

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A003
            return

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        thread.join(timeout=1)


@pytest.fixture(params=["httpx", "requests"])
def integration_library(request) -> Iterator[JSONLibrary]:
    client = httpx.Client(timeout=5.0) if request.param == "httpx" else requests.Session()
    try:
        yield JSONLibrary(client=client, timeout=5.0)
    finally:
        client.close()


@pytest.fixture
def free_tcp_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])
