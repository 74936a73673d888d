"""
curator.cli — CLI entry point.

Commands:
  curator push <chart-dir>               — Package and upload a chart
  curator delete <chart-name> <version>  — Delete a chart version
  curator health                         — Server health check
  curator config show|set|unset          — Saved defaults

Global flags (env var):
  --server, -s   CHARTMUSEUM_SERVER
  --org, -o      CHARTMUSEUM_ORG
  --repo, -r     CHARTMUSEUM_REPO
"""

import logging

import click

from curator import __version__
from curator.cli import push_cmd as _push_mod
from curator.cli.delete_cmd import delete_cmd
from curator.cli.health_cmd import health_cmd
from curator.cli.config_cmd import config_cmd


@click.group()
@click.option("--server", "-s", envvar="CHARTMUSEUM_SERVER", default=None,
              metavar="URL", help="ChartMuseum API base URL")
@click.option("--org", "-o", envvar="CHARTMUSEUM_ORG", default=None,
              help="ChartMuseum organisation")
@click.option("--repo", "-r", envvar="CHARTMUSEUM_REPO", default=None,
              help="ChartMuseum repo")
@click.option("--debug", is_flag=True, help="Log HTTP requests to stderr")
@click.version_option(version=__version__, prog_name="curator")
@click.pass_context
def main(ctx, server, org, repo, debug):
    """curator — ChartMuseum CLI."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    ctx.ensure_object(dict)
    ctx.obj.update(server=server, org=org, repo=repo)


main.add_command(_push_mod.push_cmd, "push")
main.add_command(delete_cmd, "delete")
main.add_command(health_cmd, "health")
main.add_command(config_cmd, "config")
