"""
Configuration loader for skywidget
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..utils.errors import ConfigurationError
from .validator import ConfigValidator

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

DEFAULT_CONFIG: Dict[str, Any] = {
    "location": {
        "provider": "ip",
        "timeout": 5,
        "fallback": {"latitude": 47.6062, "longitude": -122.3321},
    },
    "weather": {
        "endpoint": "https://api.open-meteo.com/v1/forecast",
        "temperature_unit": "fahrenheit",
        "windspeed_unit": "mph",
        "timeout": 10,
    },
    "refresh": {
        "enabled": True,
        "interval": 900,
    },
    "surface": {
        "type": "console",
    },
}


class ConfigLoader:
    """Loads and validates YAML configuration files"""

    def load(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file, or None for defaults

        Returns:
            Validated configuration dictionary with defaults applied

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config file is invalid or too large
        """
        if config_path is None:
            logger.info("No configuration file given, using defaults")
            return self.from_dict({})

        config = self.from_dict(self.read(config_path))
        logger.info(f"Loaded configuration from {Path(config_path).expanduser().resolve()}")
        return config

    def read(self, config_path: str) -> Any:
        """
        Read a YAML configuration file without validating it.

        Returns:
            The parsed document, or an empty dict for an empty file

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the path is a directory, the file is too
                large, unreadable or not valid YAML
        """
        resolved_path = Path(config_path).expanduser().resolve()

        self._validate_config_path(resolved_path)

        if not resolved_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {resolved_path}")

        file_size = resolved_path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(resolved_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except (PermissionError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}") from e

        return config if config is not None else {}

    def from_dict(self, config: Any) -> Dict[str, Any]:
        """
        Validate a configuration dictionary and apply defaults.

        Raises:
            ConfigurationError: If validation reports errors
        """
        validator = ConfigValidator(config)
        valid, errors, warnings = validator.validate()

        for warning in warnings:
            logger.warning(f"Configuration: {warning}")

        if not valid:
            raise ConfigurationError("Invalid configuration: " + "; ".join(errors))

        return self._apply_defaults(config)

    def _validate_config_path(self, config_path: Path) -> None:
        """
        Validate that the configuration file path is safe to load.

        Raises:
            ConfigurationError: If path is a directory
        """
        if config_path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {config_path}")

        if config_path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {config_path.suffix}. "
                f"Expected .yaml or .yml"
            )

        logger.debug(f"Configuration path validated: {config_path}")

    def _apply_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply default values to configuration"""
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for section, values in config.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(copy.deepcopy(values))
            elif values is not None:
                merged[section] = copy.deepcopy(values)
        return merged
