"""
curator.cli.push_cmd — curator push command.

  curator push ./mychart
  curator -s https://charts.example.com -r stable push ./mychart
"""

from __future__ import annotations

import tempfile

import click

from curator.chart import ChartError, is_chart_dir, load_chart, save_chart
from curator.chartmuseum import ChartInfo, ChartMuseumError, Response, background
from curator.chartmuseum.context import Context
from curator.cli.common import Config, config_or_help


@click.command("push")
@click.argument("chart_dir", metavar="CHART-DIR")
@click.pass_context
def push_cmd(ctx, chart_dir):
    """Push CHART-DIR to the server."""
    config = config_or_help(ctx)
    if config is None:
        return

    try:
        is_chart_dir(chart_dir)
    except ChartError as e:
        click.echo(f"Error validating chart path: {chart_dir!r}: {e}", err=True)
        return

    try:
        response = package_and_upload(background(), config, chart_dir)
    except (ChartError, ChartMuseumError, OSError) as e:
        click.echo(f"Error while processing {chart_dir!r}: {e}", err=True)
        return

    if response.saved:
        click.echo(f"✓ Successfully uploaded {chart_dir!r} to {config.server!r}")
    else:
        click.echo(
            f"Unexpected ChartMuseum response (Message = {response.message!r})",
            err=True,
        )


def package_and_upload(ctx: Context, config: Config, chart_dir: str) -> Response:
    """Package a chart directory into a temp .tgz and upload it."""
    try:
        tmpdir = tempfile.TemporaryDirectory(prefix="curator-")
    except OSError as e:
        raise ChartError(f"Error while preparing temp Dir: {e}") from e

    with tmpdir as tmp:
        try:
            chart = load_chart(chart_dir)
        except ChartError as e:
            raise ChartError(
                f"Error while loading Chart directory: {chart_dir!r}: {e}"
            ) from e

        try:
            package = save_chart(chart, tmp)
        except (ChartError, OSError) as e:
            raise ChartError(
                f"Error while packaging Chart: {chart_dir!r}: {e}"
            ) from e

        click.echo(
            f"Packaged {chart.metadata.name}:{chart.metadata.version}",
            err=True,
        )

        info = ChartInfo(
            name=chart.metadata.name,
            version=chart.metadata.version,
            org=config.org,
            repo=config.repo,
        )
        try:
            f = open(package, "rb")
        except OSError as e:
            raise ChartError(
                "Error while opening generated Chart package: "
                f"{str(package)!r}: {e}"
            ) from e
        with f:
            return config.client.charts.upload_chart(ctx, info, f)
