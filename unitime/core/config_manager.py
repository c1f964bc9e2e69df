"""
Configuration Manager for Unitime

Handles configuration loading, validation, and management.
Settings come from built-in defaults, optionally overridden by JSON or
YAML files in a config directory and then by environment variables.

Python 3.9+ compatible.
"""

import copy
import functools
import json
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

import yaml

from .errors import InvalidInputError


ENV_PREFIX = "UNITIME"

SKEW_POLICIES = ("raise", "clamp")
EPOCH_SECONDS_PRECISIONS = ("double", "single")


class ConfigManager:
    """
    Centralized configuration management for unitime.

    Supports JSON and YAML configuration files, deep merging over defaults,
    and environment variable overrides of the form
    UNITIME_<CONFIG>_<KEY>, with "__" separating nested keys.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Optional custom config directory path
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            # Default to config/ directory next to the package
            package_root = Path(__file__).parent.parent.parent
            self.config_dir = package_root / "config"

        self._config_cache: Dict[str, Any] = {}
        self._defaults = self._load_default_config()

        self.logger = logging.getLogger(__name__)

    def _load_default_config(self) -> Dict[str, Any]:
        """Load default configuration values."""
        return {
            "timestamp": {
                "skew_policy": "raise",
                "epoch_seconds_precision": "double",
                "string_separator": ":"
            }
        }

    def load_config(self, config_name: str, required: bool = False) -> Dict[str, Any]:
        """
        Load configuration from file with caching.

        Args:
            config_name: Configuration file name (without extension)
            required: Whether this config file is required

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If required config file not found
        """
        if config_name in self._config_cache:
            return self._config_cache[config_name]

        config_data: Dict[str, Any] = {}

        for extension in ['.json', '.yaml', '.yml']:
            config_path = self.config_dir / f"{config_name}{extension}"

            if config_path.exists():
                try:
                    if extension == '.json':
                        config_data = self._load_json(config_path)
                    else:
                        config_data = self._load_yaml(config_path)

                    self.logger.info(f"Loaded configuration from {config_path}")
                    break

                except (OSError, ValueError, yaml.YAMLError) as e:
                    self.logger.error(f"Error loading config from {config_path}: {e}")
                    continue

        if not config_data and required:
            raise FileNotFoundError(f"Required configuration '{config_name}' not found in {self.config_dir}")

        if config_name in self._defaults:
            config_data = self._deep_merge(self._defaults[config_name], config_data)

        config_data = self._apply_env_overrides(config_name, config_data)

        self._config_cache[config_name] = config_data

        return config_data

    def _load_json(self, path: Path) -> Dict[str, Any]:
        """Load JSON configuration file."""
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML configuration file."""
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _deep_merge(self, default: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = copy.deepcopy(default)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_name: str, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        # UNITIME_TIMESTAMP_SKEW_POLICY -> config["skew_policy"]
        # UNITIME_TIMESTAMP_A__B -> config["a"]["b"]
        prefix = f"{ENV_PREFIX}_{config_name.upper()}_"

        for env_var, value in os.environ.items():
            if not env_var.startswith(prefix):
                continue

            key_path = env_var[len(prefix):].lower().split('__')

            current = config
            for key in key_path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            current[key_path[-1]] = self._convert_env_value(value)
            self.logger.debug(f"Applied environment override {env_var}")

        return config

    def _convert_env_value(self, value: str) -> Union[str, int, bool, float]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ['true', 'yes']:
            return True
        elif value.lower() in ['false', 'no']:
            return False

        try:
            if '.' in value:
                return float(value)
            else:
                return int(value)
        except ValueError:
            pass

        return value

    def get(self, config_name: str, key: Optional[str] = None, default: Any = None) -> Any:
        """
        Get configuration value with optional key path.

        Args:
            config_name: Configuration file name
            key: Optional dot-separated key path (e.g., "skew_policy")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        config = self.load_config(config_name)

        if key is None:
            return config

        current = config
        for key_part in key.split('.'):
            if isinstance(current, dict) and key_part in current:
                current = current[key_part]
            else:
                return default

        return current

    def get_timestamp_config(self) -> Dict[str, Any]:
        """
        Get validated settings for Timestamp instances.

        Returns:
            Timestamp settings dictionary

        Raises:
            InvalidInputError: If a setting holds an unsupported value
        """
        settings = dict(self.load_config("timestamp"))

        policy = str(settings.get("skew_policy", "raise")).lower()
        if policy not in SKEW_POLICIES:
            raise InvalidInputError(f"Unknown skew_policy '{policy}'. Supported: {list(SKEW_POLICIES)}")
        settings["skew_policy"] = policy

        precision = str(settings.get("epoch_seconds_precision", "double")).lower()
        if precision not in EPOCH_SECONDS_PRECISIONS:
            raise InvalidInputError(
                f"Unknown epoch_seconds_precision '{precision}'. Supported: {list(EPOCH_SECONDS_PRECISIONS)}"
            )
        settings["epoch_seconds_precision"] = precision

        settings["string_separator"] = str(settings.get("string_separator", ":"))

        return settings

    def save_config(self, config_name: str, config_data: Dict[str, Any], format: str = "json") -> Path:
        """
        Save configuration to file.

        Args:
            config_name: Configuration file name
            config_data: Configuration data to save
            format: File format ('json' or 'yaml')

        Returns:
            Path of the written file
        """
        extension = ".yaml" if format == "yaml" else ".json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.config_dir / f"{config_name}{extension}"

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if format == "yaml":
                    yaml.safe_dump(config_data, f, default_flow_style=False, indent=2)
                else:
                    json.dump(config_data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.logger.error(f"Error saving config to {config_path}: {e}")
            raise

        # Drop the cached merge so the next read sees the new file
        self._config_cache.pop(config_name, None)
        self.logger.info(f"Saved configuration to {config_path}")

        return config_path

    def create_default_configs(self) -> None:
        """Create default configuration files if they don't exist."""
        for config_name, config_data in self._defaults.items():
            existing = [
                self.config_dir / f"{config_name}{ext}" for ext in ('.json', '.yaml', '.yml')
            ]
            if not any(path.exists() for path in existing):
                self.save_config(config_name, config_data)
                self.logger.info(f"Created default config for '{config_name}'")


@functools.lru_cache(maxsize=None)
def default_config_manager() -> ConfigManager:
    """
    Shared ConfigManager for callers that do not pass their own.

    Built on first use; its cache means config files and environment
    overrides are read once per process.
    """
    return ConfigManager()
