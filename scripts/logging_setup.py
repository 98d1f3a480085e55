"""Logging setup for the server script.

Usage:
    from scripts.logging_setup import setup_logging
    setup_logging(verbose=True)  # or False
"""
from __future__ import annotations

import logging
import sys

# JSON lines loggers carry their own handler; keep them off the root handler.
STRUCTURED_LOGGERS = ("function_host.api", "function_host.registry", "function_host.host_settings")


def setup_logging(verbose: bool = False) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    for name in STRUCTURED_LOGGERS:
        logging.getLogger(name).propagate = False
    logging.getLogger("uvicorn.access").setLevel(level)


__all__ = ["setup_logging"]
