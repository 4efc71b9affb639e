"""Config loader for YAML configuration files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from dialograph.config.settings import DialographConfig
from dialograph.core.errors import ConfigurationError


class ConfigLoader:
    """Load DialographConfig from YAML files."""

    @staticmethod
    def load(path: Path | str | None = None) -> DialographConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to dialograph.yaml, or a directory containing it. None
                returns the defaults.

        Returns:
            Parsed DialographConfig instance

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the file is not valid YAML or fails validation.
        """
        if path is None:
            return DialographConfig()

        config_path = Path(path)
        if config_path.is_dir():
            config_path = config_path / "dialograph.yaml"
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, encoding="utf-8") as f:
                data: dict[str, Any] = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config root in {config_path} must be a mapping")

        try:
            return DialographConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e
