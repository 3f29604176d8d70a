"""Configuration management for backup check."""

from .config_manager import ConfigManager
from .config_validator import ConfigValidator

__all__ = ["ConfigManager", "ConfigValidator"]
