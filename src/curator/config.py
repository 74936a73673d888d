"""
curator.config — Default server / org / repo.

~/.curator/config.yaml:

    server: https://charts.example.com
    org: acme
    repo: stable

Precedence: command-line flag > CHARTMUSEUM_* env var > this file.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


CURATOR_HOME = Path.home() / ".curator"

KEYS = ("server", "org", "repo")


class ConfigError(Exception):
    pass


@dataclass
class CuratorConfig:
    """Persisted defaults."""
    server: str = ""
    org: str = ""
    repo: str = ""

    def set(self, key: str, value: str) -> None:
        if key not in KEYS:
            raise ConfigError(
                f"Unknown config key {key!r} (expected one of: {', '.join(KEYS)})"
            )
        setattr(self, key, value)


def config_path() -> Path:
    return CURATOR_HOME / "config.yaml"


def load_config() -> CuratorConfig:
    """Read ~/.curator/config.yaml."""
    cp = config_path()
    if not cp.exists():
        return CuratorConfig()

    try:
        with open(cp) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file {cp}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {cp}: not a mapping")

    cfg = CuratorConfig()
    for key in KEYS:
        value = data.get(key)
        if value:
            setattr(cfg, key, str(value))
    return cfg


def save_config(cfg: CuratorConfig) -> None:
    """Write ~/.curator/config.yaml."""
    CURATOR_HOME.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {}
    for f in fields(cfg):
        value = getattr(cfg, f.name)
        if value:
            data[f.name] = value

    with open(config_path(), "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
