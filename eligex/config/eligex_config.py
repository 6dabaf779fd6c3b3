"""
EligEX Configuration Management

This module provides configuration management for EligEX.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from eligex.exceptions import ConfigurationError

# Configure logging
logger = logging.getLogger(__name__)


class EligEXConfig:
    """
    Manages system-wide configuration for EligEX

    This class follows the singleton pattern so the engine, the sweep and the
    CLI all read the same settings. Defaults come from default_config.yaml and
    are overlaid by ~/.eligex/config.yaml when that file exists.
    """

    _instance = None

    REQUIRED_SECTIONS = ('engine', 'sweep', 'logging')

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, 'initialized'):
            self.config: Dict[str, Any] = self._load_defaults()

            self.config_file = Path.home() / '.eligex' / 'config.yaml'
            if self.config_file.exists():
                self._load_config(self.config_file)

            self.initialized = True

    @staticmethod
    def _load_defaults() -> Dict[str, Any]:
        default_config_path = Path(__file__).parent / 'default_config.yaml'
        with open(default_config_path, 'r') as f:
            return yaml.safe_load(f)

    @classmethod
    def from_file(cls, config_path: str) -> 'EligEXConfig':
        """Load configuration from file on top of the defaults

        Args:
            config_path: Path to configuration file

        Returns:
            EligEXConfig instance

        Raises:
            ConfigurationError: If the file is missing, empty or invalid
        """
        instance = cls()
        instance._load_config(Path(config_path))
        return instance

    @classmethod
    def setup(cls, **kwargs) -> 'EligEXConfig':
        """
        Override configuration sections in memory

        Args:
            engine: Engine settings
                - division_keys: Division container keys in lookup order
                - default_category: Category used when the candidate has none
                - default_marks_percentage: Fallback marks threshold
                - strict_mode: Treat malformed exam data as ineligible
            sweep: Batch sweep settings
                - max_concurrent: Documents evaluated at once
                - document_timeout: Seconds allowed per document
            logging: Logging configuration
                - level: Logging level
                - format: Log record format

        Returns:
            EligEXConfig instance
        """
        instance = cls()
        for section, values in kwargs.items():
            if section not in instance.config or not isinstance(values, dict):
                raise ConfigurationError(f"Unknown configuration section: {section}")
            instance._update_config_recursive(instance.config[section], values)
        instance._validate_config()
        logger.info("EligEX configuration updated")
        return instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance so the next access reloads defaults"""
        cls._instance = None

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value

        Args:
            key: Configuration key (dot notation)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        try:
            value = self.config
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value

        Args:
            key: Configuration key (dot notation)
            value: Configuration value
        """
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
        logger.debug(f"Set configuration {key}={value}")

    def _load_config(self, path: Path) -> None:
        """Merge a YAML file into the current configuration"""
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r') as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {str(e)}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {str(e)}") from e

        if file_config is None:
            raise ConfigurationError("Configuration file is empty")
        if not isinstance(file_config, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        self._update_config_recursive(self.config, file_config)
        self._validate_config()
        logger.info(f"Configuration loaded from {path}")

    def _validate_config(self) -> None:
        """Validate configuration structure and values"""
        for section in self.REQUIRED_SECTIONS:
            if section not in self.config:
                raise ConfigurationError(f"Missing required configuration section: {section}")

        division_keys = self.get('engine.division_keys')
        if not isinstance(division_keys, list) or not division_keys:
            raise ConfigurationError("engine.division_keys must be a non-empty list")

        max_concurrent = self.get('sweep.max_concurrent')
        if not isinstance(max_concurrent, int) or max_concurrent < 1:
            raise ConfigurationError("sweep.max_concurrent must be a positive integer")

    def _update_config_recursive(self, base: Dict[str, Any], update: Dict[str, Any]) -> None:
        """Update configuration recursively"""
        for key, value in update.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._update_config_recursive(base[key], value)
            else:
                base[key] = value

    def get_engine_config(self) -> Dict[str, Any]:
        """Get engine configuration"""
        return self.config.get('engine', {})

    def get_sweep_config(self) -> Dict[str, Any]:
        """Get batch sweep configuration"""
        return self.config.get('sweep', {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration"""
        return self.config.get('logging', {})

    def configure_logging(self, level: Optional[str] = None) -> None:
        """Apply the logging section to the root logger"""
        logging_config = self.get_logging_config()
        logging.basicConfig(
            level=(level or logging_config.get('level', 'WARNING')).upper(),
            format=logging_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        )

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration"""
        return self.config.copy()
