"""Call a remote method."""

from typing import Annotated

import typer

from mb_rpc.app_context import use_context
from mb_rpc.commands.params import parse_params
from mb_rpc.errors import RpcError


def call(
    ctx: typer.Context,
    method: str,
    params: Annotated[str, typer.Argument(help="Params as a JSON array or object.")] = "[]",
) -> None:
    """Call a remote method and print its result."""
    app = use_context(ctx)
    client = app.client()
    try:
        resp = client.call(method, parse_params(app.out, params))
    except RpcError as e:
        app.out.print_error_and_exit(e.code, str(e))
    app.out.print_response(resp)
