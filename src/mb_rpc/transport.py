"""Socket transport: one connection per call, read until end-of-stream or timeout."""

import logging
import socket
import ssl
import time
from typing import Protocol

from mb_rpc.errors import RpcConnectionError, TransportTimeoutError
from mb_rpc.framing import Target, build_request, strip_envelope

logger = logging.getLogger(__name__)

# Read buffer size
_BUFSIZE = 4096


class Transport(Protocol):
    """Anything that can move an encoded body to a target and return the reply body."""

    def send(self, target: Target, headers: dict[str, str], body: bytes, timeout: float) -> bytes:
        """Send body to target and return the reply body with the envelope stripped."""
        ...


def _remaining(deadline: float) -> float:
    """Seconds left before the deadline."""
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise TransportTimeoutError("Connection timed out before the call completed.")
    return remaining


def _send_all(s: socket.socket, data: bytes, deadline: float) -> None:
    """Write all data, failing if the deadline passes first."""
    s.settimeout(_remaining(deadline))
    try:
        s.sendall(data)
    except TimeoutError:
        raise TransportTimeoutError("Connection timed out while sending the request.") from None


def _recv_all(s: socket.socket, deadline: float) -> bytes:
    """Read from socket until the peer closes the connection or the deadline passes."""
    chunks: list[bytes] = []
    while True:
        s.settimeout(_remaining(deadline))
        try:
            chunk = s.recv(_BUFSIZE)
        except TimeoutError:
            raise TransportTimeoutError("Connection timed out while reading the reply.") from None
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


class SocketTransport:
    """Raw HTTP/1.0 transport over a plain or TLS socket."""

    def __init__(self, ssl_context: ssl.SSLContext | None = None) -> None:
        """Initialize the transport.

        Args:
            ssl_context: Context for https targets; the system default is used when omitted.

        """
        self._ssl_context = ssl_context

    def send(self, target: Target, headers: dict[str, str], body: bytes, timeout: float) -> bytes:
        """Send a framed POST request and return the reply body.

        Raises:
            RpcConnectionError: Connection could not be established or was dropped.
            TransportTimeoutError: Request not written or reply not complete before the timeout.

        """
        request = build_request(target, body, headers)
        with self._connect(target, timeout) as s:
            logger.debug("Connected to %s:%d, sending %d bytes", target.host, target.port, len(request))
            # one deadline covers both writing the request and reading the reply
            deadline = time.monotonic() + timeout
            try:
                _send_all(s, request, deadline)
                raw = _recv_all(s, deadline)
            except TransportTimeoutError:
                logger.debug("Timed out after %ss waiting for %s:%d", timeout, target.host, target.port)
                raise
            except OSError as e:
                raise RpcConnectionError(f"Connection to {target.host}:{target.port} lost: {e}", e.errno) from e
        logger.debug("Received %d bytes from %s:%d", len(raw), target.host, target.port)
        return strip_envelope(raw)

    def _connect(self, target: Target, timeout: float) -> socket.socket:
        """Open a connection to the target, wrapping it in TLS for https."""
        try:
            s = socket.create_connection((target.host, target.port), timeout=timeout)
        except OSError as e:
            raise RpcConnectionError(f"Unable to connect to {target.host}:{target.port}: {e}", e.errno) from e
        if not target.tls:
            return s
        context = self._ssl_context or ssl.create_default_context()
        try:
            return context.wrap_socket(s, server_hostname=target.host)
        except OSError as e:
            s.close()
            raise RpcConnectionError(f"TLS handshake with {target.host}:{target.port} failed: {e}", e.errno) from e
