"""
curator.cli.config_cmd — curator config command.

  curator config set server https://charts.example.com
  curator config set repo stable
  curator config unset org
  curator config show
"""

import click

from curator.config import KEYS, load_config, save_config


@click.group("config")
def config_cmd():
    """Default server / org / repo."""
    pass


@config_cmd.command("show")
def config_show():
    """Show the saved defaults."""
    cfg = load_config()
    for key in KEYS:
        value = getattr(cfg, key) or "-"
        click.echo(f"{key:8s} {value}")


@config_cmd.command("set")
@click.argument("key", type=click.Choice(KEYS))
@click.argument("value")
def config_set(key, value):
    """Save a default."""
    cfg = load_config()
    cfg.set(key, value)
    save_config(cfg)
    click.echo(f"✓ {key} = {value}")


@config_cmd.command("unset")
@click.argument("key", type=click.Choice(KEYS))
def config_unset(key):
    """Remove a default."""
    cfg = load_config()
    cfg.set(key, "")
    save_config(cfg)
    click.echo(f"✓ {key} unset")
