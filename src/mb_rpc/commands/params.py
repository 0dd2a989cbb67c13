"""Parse JSON params given on the command line."""

import json
from typing import Any

from mb_rpc.output import Output


def parse_params(out: Output, raw: str) -> list[Any] | dict[str, Any]:
    """Parse a JSON array or object, exiting with an error on anything else."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        out.print_error_and_exit("invalid_params", f"Params are not valid JSON: {e}")
    if not isinstance(value, list | dict):
        out.print_error_and_exit("invalid_params", "Params must be a JSON array or object.")
    return value
