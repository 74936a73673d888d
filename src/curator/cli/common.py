"""
curator.cli.common — Shared command config.

Every command builds its own Config (and ChartMuseum client) from
the global options stored on the click context.
"""

from __future__ import annotations

from dataclasses import dataclass

import click

from curator.chartmuseum import ChartMuseumError, Client
from curator.config import ConfigError, load_config


@dataclass
class Config:
    """Resolved global options for one invocation."""
    server: str
    org: str
    repo: str
    client: Client


def init_config(ctx: click.Context) -> Config:
    """Resolve and validate the global options, create the client.

    Raises ConfigError before any network activity.
    """
    opts = ctx.find_root().obj or {}
    defaults = load_config()

    server = opts.get("server") or defaults.server
    org = opts.get("org") or defaults.org
    repo = opts.get("repo") or defaults.repo

    if org and not repo:
        raise ConfigError("Repo required if Org is set")

    try:
        client = Client(server, session=opts.get("session"))
    except ChartMuseumError as e:
        raise ConfigError(
            f"Could not create ChartMuseum client (server: {server!r}): {e}"
        ) from e

    return Config(server=server, org=org, repo=repo, client=client)


def config_or_help(ctx: click.Context) -> Config | None:
    """init_config, printing the error and the command help on failure."""
    try:
        return init_config(ctx)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(ctx.get_help())
        return None
