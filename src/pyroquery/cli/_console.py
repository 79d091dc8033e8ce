"""Console output helpers shared by CLI commands."""

from __future__ import annotations

import json
import logging
from typing import Any

import click


def emit_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=False))


def setup_logging(verbose: bool) -> None:
    """Attach a debug console handler to the ``pyroquery`` logger when verbose."""
    if not verbose:
        return
    logger = logging.getLogger("pyroquery")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


__all__ = ["emit_json", "setup_logging"]
