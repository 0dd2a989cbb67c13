"""Shared fixtures: a local raw-socket HTTP server for transport and CLI tests."""

import contextlib
import json
import socket
import threading
import time
from collections.abc import Callable, Iterator
from typing import Any

import pytest


def _read_http_request(conn: socket.socket) -> bytes:
    """Read one framed request: headers, then Content-Length bytes of body."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(4096)
        if not chunk:
            return data
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = conn.recv(4096)
        if not chunk:
            break
        body += chunk
    return head + b"\r\n\r\n" + body


class RawServer:
    """Accepts connections, records each request, and answers with a scripted raw reply."""

    def __init__(self) -> None:
        self._sock = socket.create_server(("127.0.0.1", 0))
        self._sock.settimeout(0.1)
        self.port: int = self._sock.getsockname()[1]
        self.requests: list[bytes] = []
        self.reply = b"HTTP/1.0 200 OK\r\nContent-Type: application/json\r\n\r\n"
        self.hang = 0.0  # seconds to hold the connection open after replying
        self.responder: Callable[[Any], str] | None = None  # builds a JSON reply from the decoded request body
        self.client_closed = threading.Event()  # set when the client closes the connection while held open
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.port}/rpc"

    def reply_json(self, body: str) -> None:
        """Answer with a well-formed HTTP envelope around a JSON body."""
        self.reply = (
            b"HTTP/1.0 200 OK\r\nContent-Type: application/json\r\n"
            + f"Content-Length: {len(body.encode())}\r\n\r\n".encode()
            + body.encode()
        )

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._thread.join(timeout=5)
        self._sock.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except TimeoutError:
                continue
            with conn, contextlib.suppress(OSError):
                request = _read_http_request(conn)
                self.requests.append(request)
                if self.responder is not None:
                    self.reply_json(self.responder(json.loads(request.partition(b"\r\n\r\n")[2])))
                conn.sendall(self.reply)
                self._hold(conn)

    def _hold(self, conn: socket.socket) -> None:
        """Keep the connection open for `hang` seconds, noting if the client closes it first."""
        conn.settimeout(0.01)
        deadline = time.monotonic() + self.hang
        while time.monotonic() < deadline and not self._stop.is_set():
            try:
                chunk = conn.recv(4096)
            except TimeoutError:
                continue
            if not chunk:
                self.client_closed.set()
                return


@pytest.fixture
def server() -> Iterator[RawServer]:
    """Running local server, stopped after the test."""
    srv = RawServer()
    srv.start()
    yield srv
    srv.stop()


@pytest.fixture
def closed_port() -> int:
    """A local port with nothing listening on it."""
    with socket.create_server(("127.0.0.1", 0)) as s:
        return s.getsockname()[1]


@pytest.fixture
def silent_port() -> Iterator[int]:
    """A local port that completes the handshake but never reads what is sent."""
    with socket.create_server(("127.0.0.1", 0)) as s:
        yield s.getsockname()[1]
