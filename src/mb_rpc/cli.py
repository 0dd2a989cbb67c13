"""CLI entry point for mb-rpc."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from mb_rpc.app_context import AppContext
from mb_rpc.commands.batch import batch
from mb_rpc.commands.call import call
from mb_rpc.commands.notify import notify
from mb_rpc.config import Config
from mb_rpc.log import setup_logging
from mb_rpc.output import Output

app = TyperPlus(package_name="mb-rpc")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    url: Annotated[str | None, typer.Option("--url", help="JSON-RPC server URL.")] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", help="Per-call timeout in seconds.")] = None,
    username: Annotated[str | None, typer.Option("--user", help="HTTP basic auth username.")] = None,
    password: Annotated[str | None, typer.Option("--password", help="HTTP basic auth password.")] = None,
) -> None:
    """Call JSON-RPC services over HTTP from the terminal."""
    cfg = Config.build(data_dir, url=url, timeout=timeout, username=username, password=password)
    setup_logging(cfg.log_path)
    ctx.obj = AppContext(out=Output(json_mode=json_output), cfg=cfg)


app.command(aliases=["c"])(call)
app.command(aliases=["n"])(notify)
app.command(aliases=["b"])(batch)
