"""Tests for ConfigManager class."""

from pathlib import Path

import pytest

from repo_builder.models import BuildConfig
from repo_builder.utils.config_manager import ConfigManager


class TestConfigManagerInit:
    """Tests for ConfigManager initialization."""

    def test_init_with_path(self):
        """Test ConfigManager initialization with explicit path."""
        manager = ConfigManager("/tmp/test_config.toml")

        assert manager.config_path == Path("/tmp/test_config.toml")
        assert manager._config is None

    def test_init_without_path(self):
        """Test ConfigManager falls back to the default path."""
        manager = ConfigManager()

        assert manager.config_path == Path("~/.config/repo-builder/config.toml").expanduser()


class TestConfigManagerLoad:
    """Tests for loading configuration files."""

    def test_load_file_not_found(self, tmp_path):
        """Test load() raises FileNotFoundError when file doesn't exist."""
        config_path = tmp_path / "nonexistent.toml"

        with pytest.raises(FileNotFoundError) as exc_info:
            ConfigManager(str(config_path)).load()

        assert str(config_path) in str(exc_info.value)

    def test_load_invalid_toml(self, tmp_path):
        """Test load() raises ValueError for invalid TOML."""
        config_path = tmp_path / "config.toml"
        config_path.write_text("invalid toml content [unclosed")

        with pytest.raises(ValueError, match="Invalid TOML"):
            ConfigManager(str(config_path)).load()

    def test_load_cached(self, config_file):
        """Test load() returns the cached dictionary."""
        manager = ConfigManager(str(config_file))

        assert manager.load() is manager.load()

    def test_load_build_config(self, config_file):
        """Test the configuration validates into a BuildConfig."""
        build_config = ConfigManager(str(config_file)).load_build_config()

        assert isinstance(build_config, BuildConfig)
        distro = build_config.get_distro("ubuntu1604")
        assert distro.architectures == ["amd64", "arm64"]
        assert "${code_name}" in build_config.release_template("org")
        assert build_config.notary.key_name == "server-3.4"

    def test_load_build_config_schema_error(self, tmp_path):
        """Test schema violations raise ValueError naming the file."""
        config_path = tmp_path / "config.toml"
        config_path.write_text('[[distros]]\nname = "broken"\n')

        with pytest.raises(ValueError) as exc_info:
            ConfigManager(str(config_path)).load_build_config()

        assert "Invalid configuration" in str(exc_info.value)
        assert str(config_path) in str(exc_info.value)
