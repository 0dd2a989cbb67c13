"""Send a notification."""

from typing import Annotated

import typer

from mb_rpc.app_context import use_context
from mb_rpc.commands.params import parse_params
from mb_rpc.errors import RpcError
from mb_rpc.protocol import Request


def notify(
    ctx: typer.Context,
    method: str,
    params: Annotated[str, typer.Argument(help="Params as a JSON array or object.")] = "[]",
) -> None:
    """Send a notification (no response expected)."""
    app = use_context(ctx)
    client = app.client()
    try:
        client.notify(Request(method, parse_params(app.out, params)))
    except RpcError as e:
        app.out.print_error_and_exit(e.code, str(e))
    app.out.print_notified(method)
