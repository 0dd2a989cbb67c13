"""Logging configuration for mb-rpc."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(log_path: Path, level: int = logging.DEBUG) -> None:
    """Attach a rotating file handler to the package logger.

    Idempotent: skips if a handler is already attached. Library users who
    never call this get no log output from mb_rpc.
    """
    pkg_logger = logging.getLogger("mb_rpc")
    if pkg_logger.handlers:
        return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))

    pkg_logger.setLevel(level)
    pkg_logger.addHandler(handler)
