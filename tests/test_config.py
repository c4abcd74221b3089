"""Tests for AutoMod config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from quaver_automod.automod.config import AutoModConfig, ConfigError, load_config

REPO_CONFIG = Path(__file__).parent.parent / "configs" / "automod.yaml"


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config == AutoModConfig()
        assert config.short_long_note_threshold == 36
        assert config.overlapping_objects_threshold == 10

    def test_shipped_config_matches_defaults(self):
        assert load_config(REPO_CONFIG) == AutoModConfig()

    def test_partial_file(self, tmp_path):
        path = tmp_path / "automod.yaml"
        path.write_text("overlapping_objects_threshold: 15\n", encoding="utf-8")
        config = load_config(path)
        assert config.overlapping_objects_threshold == 15
        assert config.short_long_note_threshold == 36

    def test_overrides_win_over_file(self, tmp_path):
        path = tmp_path / "automod.yaml"
        path.write_text("short_long_note_threshold: 40\n", encoding="utf-8")
        config = load_config(path, ["short_long_note_threshold=50"])
        assert config.short_long_note_threshold == 50

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            load_config(overrides=["severity=high"])

    def test_wrong_type(self):
        with pytest.raises(ConfigError):
            load_config(overrides=["overlapping_objects_threshold=wide"])

    def test_negative_threshold(self):
        with pytest.raises(ConfigError, match="short_long_note_threshold"):
            load_config(overrides=["short_long_note_threshold=-1"])

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "automod.yaml"
        path.write_text("short_long_note_threshold: [\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_directory_path(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path)
