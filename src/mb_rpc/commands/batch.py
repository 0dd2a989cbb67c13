"""Send a batch of calls from a JSON file."""

import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from mb_rpc.app_context import use_context
from mb_rpc.errors import RpcError
from mb_rpc.output import Output
from mb_rpc.protocol import Request


def _load_requests(out: Output, source: str) -> list[Request]:
    """Read a JSON array of {method, params, id?} objects from a file or stdin ("-")."""
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text()
    except OSError as e:
        out.print_error_and_exit("invalid_batch", f"Unable to read batch file: {e}")
    try:
        items: Any = json.loads(text)
    except json.JSONDecodeError as e:
        out.print_error_and_exit("invalid_batch", f"Batch file is not valid JSON: {e}")
    if not isinstance(items, list):
        out.print_error_and_exit("invalid_batch", "Batch must be a JSON array of requests.")
    try:
        return [Request(item["method"], item.get("params", []), id=item.get("id")) for item in items]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        out.print_error_and_exit("invalid_batch", f"Invalid request in batch: {e}")


def batch(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="JSON file with an array of requests, or '-' for stdin.")],
) -> None:
    """Send several calls in one round trip; results are printed in request order."""
    app = use_context(ctx)
    client = app.client()
    requests = _load_requests(app.out, source)
    try:
        responses = client.send_batch(requests)
    except RpcError as e:
        app.out.print_error_and_exit(e.code, str(e))
    app.out.print_batch(responses)
