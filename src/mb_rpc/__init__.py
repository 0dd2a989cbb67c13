"""Synchronous JSON-RPC over HTTP client with batch correlation."""

from mb_rpc.client import Client as Client
from mb_rpc.errors import DecodingError as DecodingError
from mb_rpc.errors import EncodingError as EncodingError
from mb_rpc.errors import InvalidNotifyError as InvalidNotifyError
from mb_rpc.errors import MismatchedIdError as MismatchedIdError
from mb_rpc.errors import MissingResponseError as MissingResponseError
from mb_rpc.errors import RpcConnectionError as RpcConnectionError
from mb_rpc.errors import RpcError as RpcError
from mb_rpc.errors import TransportTimeoutError as TransportTimeoutError
from mb_rpc.errors import UnexpectedResponseError as UnexpectedResponseError
from mb_rpc.protocol import Request as Request
from mb_rpc.protocol import Response as Response
