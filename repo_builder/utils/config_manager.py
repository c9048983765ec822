"""
Configuration management utilities.

This module loads the repo-builder TOML configuration and validates it
into a BuildConfig.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..models.config import BuildConfig
from .constants import DEFAULT_CONFIG_PATH


class ConfigManager:
    """
    Manages configuration loading and access.

    The raw TOML document is cached by load(); the validated schema is
    cached by load_build_config().
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._config: Optional[Dict[str, Any]] = None
        self._build_config: Optional[BuildConfig] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "rb") as f:
                self._config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to load configuration from {self.config_path}: {e}") from e

        logging.debug("Loaded configuration from %s", self.config_path)
        return self._config

    def load_build_config(self) -> BuildConfig:
        """
        Load and validate the configuration.

        Returns:
            Validated BuildConfig

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid or doesn't match the schema
        """
        if self._build_config is not None:
            return self._build_config

        data = self.load()
        try:
            self._build_config = BuildConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration in {self.config_path}: {e}") from e

        logging.debug(
            "Configuration defines %d distro(s) and %d Release template(s)",
            len(self._build_config.distros),
            len(self._build_config.templates.deb),
        )
        return self._build_config


__all__ = ["ConfigManager"]
