"""Batch correlation: map id-keyed replies back onto the caller's request order."""

from collections.abc import Iterable, Mapping

from mb_rpc.errors import MissingResponseError, UnexpectedResponseError
from mb_rpc.protocol import JsonId, Request, Response


def expected_ids(requests: Iterable[Request]) -> list[JsonId]:
    """Return the ids of id-bearing requests, in request order."""
    return [req.id for req in requests if not req.is_notification]


def correlate(ids: list[JsonId], responses: Mapping[JsonId, Response]) -> list[Response]:
    """Order responses to match ids, one-to-one with no extras.

    Fails on the first missing id; no partial result is returned.

    Raises:
        MissingResponseError: An expected id has no response.
        UnexpectedResponseError: Responses remain for ids that were never requested.

    """
    remaining = dict(responses)
    ordered: list[Response] = []
    for id_ in ids:
        if id_ not in remaining:
            raise MissingResponseError(id_)
        ordered.append(remaining.pop(id_))
    if remaining:
        raise UnexpectedResponseError(list(remaining))
    return ordered
