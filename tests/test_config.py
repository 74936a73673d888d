"""
tests/test_config.py — ~/.curator/config.yaml tests.
"""

import pytest

from curator.config import ConfigError, CuratorConfig, load_config, save_config


class TestConfig:
    def test_empty_config(self):
        cfg = load_config()
        assert cfg == CuratorConfig()

    def test_save_and_load(self):
        save_config(CuratorConfig(server="http://cm", org="acme", repo="stable"))
        cfg = load_config()
        assert cfg.server == "http://cm"
        assert cfg.org == "acme"
        assert cfg.repo == "stable"

    def test_empty_values_not_written(self, curator_home):
        save_config(CuratorConfig(server="http://cm"))
        assert (curator_home / "config.yaml").read_text() == "server: http://cm\n"

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown config key"):
            CuratorConfig().set("token", "x")

    def test_invalid_file(self, curator_home):
        curator_home.mkdir()
        (curator_home / "config.yaml").write_text("- not\n- a mapping\n")
        with pytest.raises(ConfigError, match="not a mapping"):
            load_config()
