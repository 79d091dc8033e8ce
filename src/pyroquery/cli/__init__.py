"""Command-line interface for pyroquery (Click-based)."""

from __future__ import annotations

from typing import Optional

import click

from pyroquery.client import QueryClient
from pyroquery.core.config import DEFAULT_ENDPOINT, ENV_ENDPOINT, ENV_SECURE, ENV_TIMEOUT, ClientConfig

from ._console import setup_logging
from .query import label_names, label_values, merge, profile_types, series


@click.group(help="Query a profiling service from the command line")
@click.option(
    "--endpoint",
    envvar=ENV_ENDPOINT,
    default=DEFAULT_ENDPOINT,
    show_default=True,
    help="Querier gRPC endpoint (host:port)",
)
@click.option("--timeout", envvar=ENV_TIMEOUT, type=click.FloatRange(min=0, min_open=True), help="Per-call deadline in seconds")
@click.option("--secure", envvar=ENV_SECURE, is_flag=True, help="Use TLS with the default root certificates")
@click.option("-v", "--verbose", is_flag=True, help="Log each remote call")
@click.pass_context
def cli(
    ctx: click.Context,
    endpoint: str,
    timeout: Optional[float],
    secure: bool,
    verbose: bool,
) -> None:
    """Top-level CLI group."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = ClientConfig(endpoint=endpoint, timeout=timeout, secure=secure)
    ctx.obj.setdefault("client_factory", QueryClient.from_config)


cli.add_command(profile_types)
cli.add_command(series, "series")
cli.add_command(merge, "merge")
cli.add_command(label_names)
cli.add_command(label_values)


def main() -> None:
    """CLI entry point for console scripts."""
    cli()


__all__ = ["cli", "main"]
