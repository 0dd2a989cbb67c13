"""Application context shared across CLI commands."""

from dataclasses import dataclass

import typer

from mb_rpc.client import Client
from mb_rpc.config import Config
from mb_rpc.output import Output


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    cfg: Config

    def client(self) -> Client:
        """Build a client for the configured server, exiting with an error if no URL is set."""
        if not self.cfg.url:
            self.out.print_error_and_exit("no_url", "No server URL. Pass --url or set 'url' in config.toml.")
        return Client.from_config(self.cfg)


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
