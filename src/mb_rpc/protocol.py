"""Request/Response model and wire codec for JSON-RPC over HTTP.

Request:  {"method": "sum", "params": [2, 3], "id": 1}
Notify:   {"method": "log", "params": ["hello"]}
Response: {"result": 5, "id": 1}
Error:    {"error": {"code": -32601, "message": "Method not found"}, "id": 1}
Batch:    a JSON array of the above, replies in any order.
"""

import itertools
import json
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from mb_rpc.errors import DecodingError, EncodingError, UnexpectedResponseError

JsonId: TypeAlias = int | float | str | None
Params: TypeAlias = list[Any] | dict[str, Any]

# Process-wide id source; next() on itertools.count is atomic under the GIL
_ids = itertools.count(1)


def next_id() -> int:
    """Return a fresh, non-null request id."""
    return next(_ids)


@dataclass(frozen=True)
class Request:
    """A call to make. A request without an id is a notification."""

    method: str
    params: Params = field(default_factory=list)
    id: JsonId = None

    def __post_init__(self) -> None:
        """Validate method name and params shape.

        Raises:
            ValueError: Empty method name or params that are neither a list nor a dict.

        """
        if not self.method:
            raise ValueError("Request method cannot be empty.")
        if not isinstance(self.params, list | tuple | dict):
            raise ValueError(f"Request params must be a list or dict, got {type(self.params).__name__}.")

    @property
    def is_notification(self) -> bool:
        """Check if the request expects no response."""
        return self.id is None

    def to_dict(self) -> dict[str, Any]:
        """Build the wire object; `id` is omitted for notifications."""
        payload: dict[str, Any] = {"method": self.method, "params": self.params}
        if not self.is_notification:
            payload["id"] = self.id
        return payload


@dataclass(frozen=True)
class Response:
    """Result of a call: exactly one of result or error is populated."""

    ok: bool
    id: JsonId = None
    result: Any = None
    error_code: int | None = None
    error_message: str = ""

    @staticmethod
    def success(result: Any, id_: JsonId) -> "Response":  # noqa: ANN401
        """Build a success response."""
        return Response(ok=True, id=id_, result=result)

    @staticmethod
    def fail(id_: JsonId, code: int | None, message: str) -> "Response":
        """Build a protocol-level error response."""
        return Response(ok=False, id=id_, error_code=code, error_message=message)


def _dumps(payload: object) -> bytes:
    try:
        return json.dumps(payload).encode()
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Unable to encode request as JSON: {e}") from e


def encode_request(req: Request) -> bytes:
    """Serialize a single Request to JSON bytes."""
    return _dumps(req.to_dict())


def encode_batch(requests: list[Request]) -> bytes:
    """Serialize Requests to a JSON array, preserving order."""
    return _dumps([req.to_dict() for req in requests])


def decode(data: bytes) -> Any:  # noqa: ANN401
    """Parse raw reply bytes as JSON.

    Raises:
        DecodingError: Invalid UTF-8, invalid JSON, or a payload that parses to null.

    """
    raw = data.decode(errors="replace")
    try:
        value = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise DecodingError("Unable to decode JSON response", raw) from None
    if value is None:
        raise DecodingError("Unable to decode JSON response", raw)
    return value


def to_response(value: Any) -> Response | dict[JsonId, Response]:  # noqa: ANN401
    """Convert a decoded JSON value into a Response, or an id-keyed dict of Responses for a batch.

    Raises:
        DecodingError: Value is neither a response object nor an array of them, or an id is not a scalar.
        UnexpectedResponseError: A batch reply repeats an id.

    """
    if isinstance(value, list):
        batch: dict[JsonId, Response] = {}
        for item in value:
            resp = to_response(item)
            if not isinstance(resp, Response):
                raise DecodingError("Nested array in batch response", json.dumps(value))
            if resp.id in batch:
                raise UnexpectedResponseError([resp.id])
            batch[resp.id] = resp
        return batch

    if not isinstance(value, dict):
        raise DecodingError("Unexpected JSON-RPC response shape", json.dumps(value))

    id_ = value.get("id")
    # bool is an int subclass: true would otherwise match id 1
    if isinstance(id_, bool) or not isinstance(id_, int | float | str | None):
        raise DecodingError("Response id must be a number, string, or null", json.dumps(value))

    # JSON-RPC 1.0 servers send "error": null alongside a successful result
    error = value.get("error")
    if error is not None:
        if isinstance(error, dict):
            return Response.fail(id_, error.get("code"), str(error.get("message", "")))
        return Response.fail(id_, None, str(error))

    return Response.success(value.get("result"), id_)
