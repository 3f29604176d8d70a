"""Configuration management for the backup check."""

import os
import yaml
from typing import Dict, List, Any, Optional

from .config_validator import ConfigValidator
from ..core.exceptions import ConfigurationError
from ..core.models import CheckConfig


class ConfigManager:
    """Loads the optional config file and merges command-line overrides."""

    DEFAULT_CONFIG_LOCATIONS = [
        "backup-check.yaml",
        "backup-check.yml",
        os.path.expanduser("~/.backup-check/config.yaml"),
        os.path.expanduser("~/.backup-check/config.yml"),
        "/etc/backup-check/config.yaml",
        "/etc/backup-check/config.yml"
    ]

    DEFAULTS = {
        'check': {
            'pattern': '*',
            'sample_size': 10,
            'warning_disk_percent': 80.0,
            'critical_disk_percent': 90.0,
            'disk_probe': 'auto'
        },
        'logging': {
            'level': 'WARNING',
            'file': None
        }
    }

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. If not provided,
                        the default locations are searched; finding none
                        is not an error since every setting can come from
                        the command line.
        """
        self.config_path = config_path
        self.config_file: Optional[str] = None
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()
        self._loaded = False

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file.

        Returns:
            Dictionary containing configuration data, with defaults applied.

        Raises:
            ConfigurationError: If the config file is missing or invalid.
        """
        self.config_file = self._find_config_file()
        self.config_data = {}

        if self.config_file:
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self.config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file {self.config_file}: {e}")
            except OSError as e:
                raise ConfigurationError(f"Error reading config file {self.config_file}: {e}")

            if not isinstance(self.config_data, dict):
                raise ConfigurationError(f"Config file {self.config_file} must contain a mapping")

        self._set_defaults()
        self._loaded = True

        return self.config_data

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in default locations.

        Returns:
            Path to configuration file, or None if there is none.

        Raises:
            ConfigurationError: If an explicitly given file does not exist.
        """
        if self.config_path:
            if os.path.exists(self.config_path):
                return self.config_path
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if os.path.exists(location):
                return location

        return None

    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        for section, section_defaults in self.DEFAULTS.items():
            if not isinstance(self.config_data.get(section), dict):
                self.config_data[section] = {}
            for key, value in section_defaults.items():
                self.config_data[section].setdefault(key, value)

    def get_check_config(self) -> Dict[str, Any]:
        """Get the raw ``check`` section."""
        if not self._loaded:
            self.load_config()
        return self.config_data['check']

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration.

        Returns:
            Logging configuration dictionary.
        """
        if not self._loaded:
            self.load_config()
        return self.config_data['logging']

    def build_check_config(self, overrides: Optional[Dict[str, Any]] = None) -> CheckConfig:
        """Build the validated configuration for a check run.

        Args:
            overrides: Command-line values; None entries are ignored.

        Returns:
            Immutable CheckConfig.

        Raises:
            ConfigurationError: If the merged settings are invalid.
        """
        merged = dict(self.get_check_config())
        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        merged['directories'] = parse_directories(merged.get('directories'))
        self.validator.validate(merged)

        return CheckConfig(
            directories=tuple(merged['directories']),
            max_age_seconds=merged['max_age_seconds'],
            min_size_bytes=merged['min_size_bytes'],
            pattern=merged['pattern'],
            sample_size=merged['sample_size'],
            warning_disk_percent=float(merged['warning_disk_percent']),
            critical_disk_percent=float(merged['critical_disk_percent']),
            disk_probe=merged['disk_probe']
        )


def parse_directories(value: Any) -> List[str]:
    """Normalize directories given as a comma-separated string or a list."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(',')
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"directories must be a list or comma-separated string, got {value!r}")
    return [d.strip() if isinstance(d, str) else d for d in value
            if not (isinstance(d, str) and not d.strip())]
