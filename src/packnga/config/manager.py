"""Configuration manager for packnga.

This module provides functionality for loading and validating
YAML configuration files with Pydantic model validation.
"""

import logging
from pathlib import Path

import yaml

from ..config.schema import PackngaConfig, PublishConfig
from ..utils.core.exceptions import ConfigurationError, MissingFileError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("packnga.yaml")
DEFAULT_PUBLISH_CONFIG_PATH = Path("~/.config/packnga/publish.yaml")


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    The project configuration (``packnga.yaml``) is optional: a missing file
    means defaults. The per-user publish configuration holds the rsync
    credentials and must exist before anything is uploaded.
    """

    @staticmethod
    def _read_yaml(config_path: Path) -> dict[str, object]:
        """
        Read a YAML file that must contain a mapping.

        Args:
            config_path: Path to the YAML file

        Returns:
            dict[str, object]: Parsed data, empty for an empty file

        Raises:
            ConfigurationError: If the YAML is invalid or not a mapping
        """
        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML syntax in {config_path}: {e}", context=config_path
            ) from e

        if raw_config_data is None:
            return {}
        if isinstance(raw_config_data, dict):
            return raw_config_data  # pyright: ignore[reportUnknownVariableType]
        raise ConfigurationError(
            f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}",
            context=config_path,
        )

    @staticmethod
    def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> PackngaConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            PackngaConfig: Validated configuration object, defaults if the file doesn't exist

        Raises:
            ConfigurationError: If the YAML syntax is invalid
            ValidationError: If the configuration fails Pydantic validation
        """
        if not config_path.exists():
            logger.debug(f"No configuration file at {config_path}, using defaults")
            return PackngaConfig()

        config_data = ConfigManager._read_yaml(config_path)
        config = PackngaConfig.model_validate(config_data)
        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def load_publish_config(
        config_path: Path = DEFAULT_PUBLISH_CONFIG_PATH,
    ) -> PublishConfig:
        """
        Load the per-user rsync configuration.

        Args:
            config_path: Path to the YAML file, ``~`` is expanded

        Returns:
            PublishConfig: Validated remote host configuration

        Raises:
            MissingFileError: If the file doesn't exist
            ConfigurationError: If the YAML syntax is invalid
            ValidationError: If the configuration fails Pydantic validation
        """
        config_path = config_path.expanduser()
        if not config_path.exists():
            raise MissingFileError(
                config_path,
                f"Publish configuration not found: {config_path}",
            )

        return PublishConfig.model_validate(ConfigManager._read_yaml(config_path))
