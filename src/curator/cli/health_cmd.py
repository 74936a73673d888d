"""
curator.cli.health_cmd — curator health command.

  curator -s https://charts.example.com health
"""

import click
import requests

from curator.chartmuseum import ChartMuseumError, ContextError, background
from curator.cli.common import config_or_help


@click.command("health")
@click.pass_context
def health_cmd(ctx):
    """Check that the server is healthy."""
    config = config_or_help(ctx)
    if config is None:
        return

    try:
        response = config.client.health(background())
    except (ChartMuseumError, ContextError, requests.RequestException) as e:
        click.echo(f"Error while checking {config.server!r}: {e}", err=True)
        return

    if response.healthy:
        click.echo(f"✓ {config.server} is healthy")
    else:
        click.echo(
            f"Unexpected ChartMuseum response (Message = {response.message!r})",
            err=True,
        )
