"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201 -- this module is the output layer; print() is its sole mechanism for producing CLI output.

import json
import sys
from typing import Any, NoReturn

import typer

from mb_rpc.protocol import Response


def _response_data(resp: Response) -> dict[str, Any]:
    """Build the JSON envelope data for a single response."""
    if resp.ok:
        return {"id": resp.id, "result": resp.result}
    return {"id": resp.id, "error": {"code": resp.error_code, "message": resp.error_message}}


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)

    def print_response(self, resp: Response) -> None:
        """Print a single call result, or exit with the protocol error it carries."""
        if not resp.ok:
            self.print_error_and_exit(str(resp.error_code), resp.error_message)
        if self._json_mode:
            print(json.dumps({"ok": True, "data": _response_data(resp)}))
        else:
            print(json.dumps(resp.result, indent=2))

    def print_batch(self, responses: list[Response]) -> None:
        """Print batch results in request order; protocol errors are printed inline."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"responses": [_response_data(r) for r in responses]}}))
            return
        for resp in responses:
            if resp.ok:
                print(f"[{resp.id}] {json.dumps(resp.result)}")
            else:
                print(f"[{resp.id}] error {resp.error_code}: {resp.error_message}")

    def print_notified(self, method: str) -> None:
        """Print notification sent confirmation."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"method": method}}))
        else:
            print(f"Notification '{method}' sent.")
