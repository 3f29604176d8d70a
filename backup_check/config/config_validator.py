"""Configuration validation for backup check."""

from numbers import Real
from typing import Dict, Any

from ..core.disk import PROBES
from ..core.exceptions import ConfigurationError


class ConfigValidator:
    """Validates backup check configuration."""

    REQUIRED_FIELDS = ['directories', 'max_age_seconds', 'min_size_bytes']
    DISK_PROBES = ['auto'] + list(PROBES)

    def validate(self, check: Dict[str, Any]) -> None:
        """Validate the merged ``check`` settings.

        Args:
            check: Settings from the config file overlaid with CLI options.

        Raises:
            ConfigurationError: If settings are missing or invalid.
        """
        self._validate_required(check)
        self._validate_directories(check['directories'])
        self._validate_thresholds(check)
        self._validate_disk_percentages(check)

        pattern = check.get('pattern', '*')
        if not isinstance(pattern, str) or not pattern:
            raise ConfigurationError("pattern must be a non-empty string")

        if check.get('disk_probe', 'auto') not in self.DISK_PROBES:
            raise ConfigurationError(
                f"disk_probe must be one of {self.DISK_PROBES}, got {check['disk_probe']!r}"
            )

    def _validate_required(self, check: Dict[str, Any]) -> None:
        missing_fields = [f for f in self.REQUIRED_FIELDS if check.get(f) in (None, '', [], ())]
        if missing_fields:
            raise ConfigurationError(f"Missing required settings: {missing_fields}")

    def _validate_directories(self, directories: Any) -> None:
        if not isinstance(directories, (list, tuple)) or not directories:
            raise ConfigurationError("At least one backup directory must be configured")

        for i, directory in enumerate(directories):
            if not isinstance(directory, str) or not directory.strip():
                raise ConfigurationError(f"Backup directory {i} must be a non-empty path")

    def _validate_thresholds(self, check: Dict[str, Any]) -> None:
        """Validate the age, size and sample thresholds.

        Raises:
            ConfigurationError: If a threshold is not a positive integer.
        """
        for name in ('max_age_seconds', 'min_size_bytes', 'sample_size'):
            if name not in check:
                continue
            value = check[name]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

    def _validate_disk_percentages(self, check: Dict[str, Any]) -> None:
        warning = check.get('warning_disk_percent', 80.0)
        critical = check.get('critical_disk_percent', 90.0)

        for name, value in (('warning_disk_percent', warning), ('critical_disk_percent', critical)):
            if isinstance(value, bool) or not isinstance(value, Real) or not 0 < value <= 100:
                raise ConfigurationError(f"{name} must be a number in (0, 100], got {value!r}")

        if warning > critical:
            raise ConfigurationError(
                f"warning_disk_percent ({warning}) must not exceed critical_disk_percent ({critical})"
            )
