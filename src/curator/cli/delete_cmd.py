"""
curator.cli.delete_cmd — curator delete command.

  curator delete mychart 1.0.0
  curator -o acme -r stable delete mychart 1.0.0
"""

import click

from curator.chartmuseum import ChartInfo, ChartMuseumError, background
from curator.cli.common import config_or_help


@click.command("delete")
@click.argument("chart_name", metavar="CHART-NAME")
@click.argument("version")
@click.pass_context
def delete_cmd(ctx, chart_name, version):
    """Delete a chart version from the server."""
    config = config_or_help(ctx)
    if config is None:
        return

    info = ChartInfo(
        name=chart_name, version=version, org=config.org, repo=config.repo,
    )

    try:
        response = config.client.charts.delete_chart(background(), info)
    except ChartMuseumError as e:
        click.echo(f"Error while deleting {info}: {e}", err=True)
        return

    if response.deleted:
        click.echo(f"✓ Successfully deleted {info} from {config.server!r}")
    else:
        click.echo(
            f"Unexpected ChartMuseum response (Message = {response.message!r})",
            err=True,
        )
