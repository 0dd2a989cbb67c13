"""Synchronous JSON-RPC client: single calls, notifications, and batches."""

import base64
import logging
from typing import Any

from mb_rpc.config import Config
from mb_rpc.correlation import correlate, expected_ids
from mb_rpc.errors import DecodingError, InvalidNotifyError, MismatchedIdError
from mb_rpc.framing import parse_target
from mb_rpc.protocol import (
    JsonId,
    Params,
    Request,
    Response,
    decode,
    encode_batch,
    encode_request,
    next_id,
    to_response,
)
from mb_rpc.transport import SocketTransport, Transport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class Client:
    """JSON-RPC client bound to one server URI.

    `uri`, `auth_header`, and `timeout` are read at call time, so they may be
    changed between calls. Mutating them while other threads are calling on the
    same client must be synchronized by the caller.
    """

    def __init__(self, uri: str, *, timeout: float = DEFAULT_TIMEOUT, transport: Transport | None = None) -> None:
        """Initialize the client.

        Args:
            uri: Server URI, e.g. ``http://localhost:8080/rpc``.
            timeout: Per-call timeout in seconds.
            transport: Transport to send requests with; a socket transport by default.

        """
        self.uri = uri
        self.timeout = timeout
        self.auth_header: str | None = None  # ready Authorization header value
        self._transport = transport or SocketTransport()

    @classmethod
    def from_config(cls, cfg: Config, transport: Transport | None = None) -> "Client":
        """Build a client from application configuration.

        Raises:
            ValueError: No server URL configured.

        """
        if not cfg.url:
            raise ValueError("No server URL configured.")
        client = cls(cfg.url, timeout=cfg.timeout, transport=transport)
        if cfg.has_auth:
            client.set_basic_auth(str(cfg.username), str(cfg.password))
        return client

    # --- Configuration ---

    def set_basic_auth(self, username: str, password: str) -> None:
        """Use HTTP basic authentication for subsequent calls."""
        token = base64.b64encode(f"{username}:{password}".encode()).decode()
        self.auth_header = f"Basic {token}"

    def clear_auth(self) -> None:
        """Stop sending an Authorization header."""
        self.auth_header = None

    def set_timeout(self, timeout: float) -> None:
        """Set the per-call timeout in seconds."""
        self.timeout = timeout

    # --- Calls ---

    def call(self, method: str, params: Params | None = None) -> Response:
        """Call a remote method with a fresh id and return its response."""
        return self.send_request(Request(method, params if params is not None else [], id=next_id()))

    def send_request(self, request: Request) -> Response:
        """Send a single request and return its response.

        Protocol-level errors are returned as a Response with ``ok=False``.

        Raises:
            DecodingError: Reply is not a single response object.
            MismatchedIdError: Reply id differs from the request id.

        """
        reply = self._exchange(encode_request(request))
        resp = to_response(decode(reply))
        if not isinstance(resp, Response):
            raise DecodingError("Expected a single response object, got a batch", reply.decode(errors="replace"))
        if resp.id != request.id:
            raise MismatchedIdError(request.id, resp.id)
        return resp

    def notify(self, request: Request) -> None:
        """Send a notification. The reply body, if any, is not decoded.

        Raises:
            InvalidNotifyError: Request carries an id.

        """
        if not request.is_notification:
            raise InvalidNotifyError(f"Notify requests must not have an id set (got {request.id!r}).")
        self._exchange(encode_request(request))

    def send_batch(self, requests: list[Request]) -> list[Response]:
        """Send requests as one batch and return responses in request order.

        The result lines up with the id-bearing requests; notifications have no
        slot. A batch with no id-bearing requests (including an empty one) is
        still sent and returns an empty list.

        Raises:
            DecodingError: Reply is not a batch array.
            MissingResponseError: A requested id has no response.
            UnexpectedResponseError: Reply contains ids that were never requested, or repeats an id.

        """
        ids = expected_ids(requests)
        reply = self._exchange(encode_batch(requests))
        if not ids:
            return []
        resp = to_response(decode(reply))
        if not isinstance(resp, dict):
            raise DecodingError("Expected a batch response array", reply.decode(errors="replace"))
        return correlate(ids, resp)

    def send(self, body: bytes, *, notify: bool = False) -> Response | dict[JsonId, Response] | None:
        """Send an encoded JSON body and decode the reply, unless it is a notification.

        Raises:
            RpcConnectionError: Connection could not be established or was dropped.
            TransportTimeoutError: Reply did not complete before the timeout.
            DecodingError: Reply is not a JSON-RPC payload.

        """
        reply = self._exchange(body)
        if notify:
            return None
        value: Any = decode(reply)
        return to_response(value)

    def _exchange(self, body: bytes) -> bytes:
        """Send an encoded body with the current uri, auth, and timeout; return the raw reply body."""
        headers: dict[str, str] = {}
        if self.auth_header:
            headers["Authorization"] = self.auth_header
        reply = self._transport.send(parse_target(self.uri), headers, body, self.timeout)
        logger.debug("Reply body: %d bytes", len(reply))
        return reply
