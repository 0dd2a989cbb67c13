"""Hand-built HTTP/1.0 framing: target parsing, request framing, and envelope stripping.

The reply envelope (status line + headers) is separated from the body by the
first blank line. Some servers trim that separator; for them the trailing
non-empty line of the reply is taken as the body. This fallback is a
deliberate leniency and can mask a malformed reply as a valid body.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

_SEPARATOR = b"\r\n\r\n"
_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class Target:
    """Where to send a request: host, port, request path, and whether to use TLS."""

    host: str
    port: int
    path: str = "/"
    tls: bool = False

    @property
    def host_header(self) -> str:
        """Host header value, with the port only when it is not the scheme default."""
        default = _DEFAULT_PORTS["https" if self.tls else "http"]
        return self.host if self.port == default else f"{self.host}:{self.port}"


def parse_target(uri: str) -> Target:
    """Parse a server URI into a Target. Scheme-less URIs are treated as http.

    Raises:
        ValueError: Unsupported scheme, missing host, or invalid port.

    """
    if "://" not in uri:
        uri = f"http://{uri}"
    parts = urlsplit(uri)
    if parts.scheme not in _DEFAULT_PORTS:
        raise ValueError(f"Unsupported URI scheme: {parts.scheme!r}")
    if not parts.hostname:
        raise ValueError(f"Missing host in URI: {uri!r}")
    port = parts.port or _DEFAULT_PORTS[parts.scheme]
    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    return Target(host=parts.hostname, port=port, path=path, tls=parts.scheme == "https")


def build_request(target: Target, body: bytes, headers: dict[str, str] | None = None) -> bytes:
    """Frame a POST request carrying a JSON body."""
    lines = [
        f"POST {target.path} HTTP/1.0",
        f"Host: {target.host_header}",
        "Content-Type: application/json",
    ]
    lines.extend(f"{name}: {value}" for name, value in (headers or {}).items())
    lines.append(f"Content-Length: {len(body)}")
    lines.append("Connection: close")
    head = "\r\n".join(lines) + "\r\n\r\n"
    return head.encode("latin-1") + body


def strip_envelope(raw: bytes) -> bytes:
    """Return the body of a raw HTTP reply.

    Uses the first blank-line separator; without one, falls back to the
    trailing non-empty line of the reply.
    """
    head, sep, body = raw.partition(_SEPARATOR)
    if sep:
        if head:
            logger.debug("Reply status: %s", head.split(b"\r\n", 1)[0].decode("latin-1"))
        return body

    for line in reversed(raw.split(b"\n")):
        stripped = line.strip()
        if stripped:
            logger.debug("No envelope separator in reply (%d bytes), using trailing line", len(raw))
            return stripped
    return b""
