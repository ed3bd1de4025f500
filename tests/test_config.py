"""Tests for configuration loading."""

import os

import pytest

from dashlist.config import Config, ConfigModel, get_config, load_config, save_config


class TestConfigModel:
    """Test the configuration model."""

    def test_defaults(self):
        """Test default values."""
        config = ConfigModel()

        assert config.encoding == "utf-8"
        assert config.strict is False
        assert config.output_format == "table"
        assert config.log_level == "WARNING"
        assert config.config_dir == os.path.expanduser("~/.dashlist")

    def test_yaml_round_trip(self):
        """Test to_yaml and from_yaml."""
        config = ConfigModel(strict=True, output_format="json", log_level="debug")
        loaded = ConfigModel.from_yaml(config.to_yaml())

        assert loaded == config
        assert loaded.log_level == "DEBUG"

    def test_unknown_keys_ignored(self):
        """Test that unknown keys do not break loading."""
        config = ConfigModel.from_yaml("strict: true\ntheme: dark\n")
        assert config.strict is True

    def test_invalid_values_fall_back(self):
        """Test fallbacks for bad format and log level."""
        config = ConfigModel.from_yaml("output_format: html\nlog_level: loud\n")
        assert config.output_format == "table"
        assert config.log_level == "WARNING"

    def test_unknown_encoding_falls_back(self):
        """Test that an encoding Python does not know becomes utf-8."""
        config = ConfigModel.from_yaml("encoding: bogus\n")
        assert config.encoding == "utf-8"

    def test_known_encoding_kept(self):
        """Test that a valid non-default encoding is kept."""
        assert ConfigModel(encoding="latin-1").encoding == "latin-1"

    def test_empty_yaml(self):
        """Test an empty file gives defaults."""
        assert ConfigModel.from_yaml("") == ConfigModel()

    def test_non_mapping_rejected(self):
        """Test that a YAML list is not a config."""
        with pytest.raises(ValueError):
            ConfigModel.from_yaml("- a\n- b\n")


class TestConfig:
    """Test the configuration manager."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test loading from a path that does not exist."""
        path = tmp_path / "config.yaml"
        config = load_config(path)

        assert config == ConfigModel()
        assert not path.exists()

    def test_save_and_load(self, tmp_path):
        """Test persisting a config."""
        path = tmp_path / "nested" / "config.yaml"
        save_config(ConfigModel(encoding="latin-1"), path)

        assert load_config(path).encoding == "latin-1"

    def test_get_config_is_cached(self, tmp_path):
        """Test that get_config returns the loaded instance."""
        config = load_config(tmp_path / "config.yaml")
        assert get_config() is config

    def test_reload(self, tmp_path, monkeypatch):
        """Test that reload drops the cached instance."""
        monkeypatch.setattr(Config, "_instance", ConfigModel(strict=True))
        monkeypatch.setenv("HOME", str(tmp_path))
        assert Config.reload().strict is False
