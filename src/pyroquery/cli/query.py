"""Query commands: one per querier operation."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

import click

from pyroquery.client import DEFAULT_STEP, QueryClient
from pyroquery.core.errors import QueryError
from pyroquery.core.timerange import parse_time

from ._console import emit_json


def _parse_time_option(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_time(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


@contextmanager
def _client(ctx: click.Context) -> Iterator[QueryClient]:
    factory = ctx.obj["client_factory"]
    client = factory(ctx.obj["config"])
    try:
        yield client
    except QueryError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        client.close()


def _window_options(func):
    func = click.option(
        "--until",
        "end",
        default="now",
        show_default=True,
        callback=_parse_time_option,
        help="End of the window (epoch ms or now[-<n><s|m|h|d>])",
    )(func)
    func = click.option(
        "--from",
        "start",
        default="now-1h",
        show_default=True,
        callback=_parse_time_option,
        help="Start of the window (epoch ms or now[-<n><s|m|h|d>])",
    )(func)
    func = click.option(
        "--selector",
        "label_selector",
        default="{}",
        show_default=True,
        help="Label selector forwarded to the service",
    )(func)
    return func


@click.command("profile-types", help="List the profile types the service knows about.")
@click.pass_context
def profile_types(ctx: click.Context) -> None:
    with _client(ctx) as client:
        types = client.list_profile_types()
    emit_json([profile_type.to_dict() for profile_type in types])


@click.command(help="Fetch time series for a profile type.")
@click.argument("profile_type_id")
@_window_options
@click.option("--group-by", multiple=True, help="Label to group series by (repeatable)")
@click.option("--step", type=float, default=DEFAULT_STEP, show_default=True, help="Step in seconds")
@click.pass_context
def series(
    ctx: click.Context,
    profile_type_id: str,
    label_selector: str,
    start: int,
    end: int,
    group_by: Tuple[str, ...],
    step: float,
) -> None:
    with _client(ctx) as client:
        response = client.get_series(
            profile_type_id,
            label_selector,
            start,
            end,
            group_by=group_by,
            step=step,
        )
    emit_json(response.to_dict())


@click.command(help="Merge stack traces into a flame graph.")
@click.argument("profile_type_id")
@_window_options
@click.option("--max-nodes", type=click.IntRange(min=1), help="Upper bound on flame graph nodes")
@click.pass_context
def merge(
    ctx: click.Context,
    profile_type_id: str,
    label_selector: str,
    start: int,
    end: int,
    max_nodes: Optional[int],
) -> None:
    with _client(ctx) as client:
        result = client.get_merge_profile(
            profile_type_id,
            label_selector,
            start,
            end,
            max_nodes=max_nodes,
        )
    emit_json(result.to_dict())


@click.command("label-names", help="List public label names.")
@click.pass_context
def label_names(ctx: click.Context) -> None:
    with _client(ctx) as client:
        names = client.list_label_names()
    emit_json(names)


@click.command("label-values", help="List the values of a label.")
@click.argument("name")
@click.pass_context
def label_values(ctx: click.Context, name: str) -> None:
    with _client(ctx) as client:
        values = client.list_label_values(name)
    emit_json(values)


__all__ = ["label_names", "label_values", "merge", "profile_types", "series"]
