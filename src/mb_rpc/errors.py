"""Error taxonomy for JSON-RPC calls. Every error aborts the in-flight call."""


class RpcError(Exception):
    """Base error raised by client, transport, and codec operations."""

    code = "rpc_error"

    def __init__(self, message: str) -> None:
        """Initialize with a human-readable message; the machine-readable code is per class."""
        super().__init__(message)


class RpcConnectionError(RpcError):
    """Transport connection could not be established or was dropped."""

    code = "connection_failed"

    def __init__(self, message: str, errno: int | None = None) -> None:
        """Initialize with the underlying socket error number, if any."""
        super().__init__(message)
        self.errno = errno


class TransportTimeoutError(RpcError):
    """Connection succeeded but the reply did not complete before the timeout."""

    code = "timeout"


class EncodingError(RpcError):
    """Request payload could not be serialized as JSON."""

    code = "encoding_error"


class DecodingError(RpcError):
    """Reply could not be parsed as a JSON-RPC payload."""

    code = "decoding_error"

    def __init__(self, message: str, raw: str) -> None:
        """Initialize with the offending raw reply text."""
        super().__init__(f"{message}: {raw}")
        self.raw = raw


class MismatchedIdError(RpcError):
    """Single-call reply id differs from the request id."""

    code = "mismatched_id"

    def __init__(self, expected: object, actual: object) -> None:
        """Initialize with the request id and the id found in the reply."""
        super().__init__(f"Mismatched request id: expected {expected!r}, got {actual!r}.")
        self.expected = expected
        self.actual = actual


class InvalidNotifyError(RpcError):
    """Caller attempted to notify with a request carrying an id."""

    code = "invalid_notify"


class MissingResponseError(RpcError):
    """Batch reply lacks the response for a requested id."""

    code = "missing_response"

    def __init__(self, id_: object) -> None:
        """Initialize with the id that has no response."""
        super().__init__(f"Missing id in response: {id_!r}.")
        self.id = id_


class UnexpectedResponseError(RpcError):
    """Batch reply contains ids that were never requested."""

    code = "unexpected_response"

    def __init__(self, ids: list[object]) -> None:
        """Initialize with the extra ids."""
        super().__init__(f"Extra id(s) in response: {', '.join(repr(i) for i in ids)}.")
        self.ids = ids
