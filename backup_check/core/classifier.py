"""Severity classification for a backup directory."""

from typing import Optional, Tuple
from .models import BackupArtifact, Severity

NO_FILES = "no files"
DISK_ERROR = "disk error"
TOO_OLD = "backup too old"
TOO_SMALL = "backup too small"


class Classifier:
    """Applies the configured thresholds to one directory's figures.

    Rules are checked in order and the first match wins. Nothing is
    remembered between calls.
    """

    def __init__(self, max_age_seconds: int, min_size_bytes: int,
                 warning_disk_percent: float = 80.0, critical_disk_percent: float = 90.0):
        self.max_age_seconds = max_age_seconds
        self.min_size_bytes = min_size_bytes
        self.warning_disk_percent = warning_disk_percent
        self.critical_disk_percent = critical_disk_percent

    @classmethod
    def from_config(cls, config) -> 'Classifier':
        return cls(
            max_age_seconds=config.max_age_seconds,
            min_size_bytes=config.min_size_bytes,
            warning_disk_percent=config.warning_disk_percent,
            critical_disk_percent=config.critical_disk_percent
        )

    def classify(self, latest: Optional[BackupArtifact], age_seconds: Optional[float] = None,
                 used_percent: Optional[float] = None, disk_error: bool = False) -> Tuple[Severity, str]:
        """Classify a directory.

        Args:
            latest: Most recent backup, or None if nothing matched.
            age_seconds: Age of the most recent backup.
            used_percent: Disk usage of the hosting filesystem.
            disk_error: Whether the disk probe failed.

        Returns:
            Tuple of (severity, reason).
        """
        if latest is None:
            return Severity.UNKNOWN, NO_FILES
        if disk_error or used_percent is None:
            return Severity.UNKNOWN, DISK_ERROR

        if age_seconds >= self.max_age_seconds:
            return Severity.CRITICAL, TOO_OLD
        if latest.size_bytes <= self.min_size_bytes:
            return Severity.CRITICAL, TOO_SMALL
        if used_percent >= self.critical_disk_percent:
            return Severity.CRITICAL, disk_full_reason(used_percent)
        if used_percent >= self.warning_disk_percent:
            return Severity.WARNING, disk_full_reason(used_percent)

        return Severity.OK, "OK"


def disk_full_reason(used_percent: float) -> str:
    return f"disk {used_percent:.1f}% full"
