"""Data models for backup checking."""

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import List, Optional, Tuple

from .exceptions import ConfigurationError


class Severity(IntEnum):
    """Health classification of a backup directory.

    The integer values double as the monitoring plugin exit codes. UNKNOWN
    sorts above CRITICAL, so a single unanalyzable directory dominates the
    overall verdict.
    """
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def exit_code(self) -> int:
        return int(self)


@dataclass(frozen=True)
class BackupArtifact:
    """A single backup file found by the scanner."""
    path: str
    modified_at: datetime
    size_bytes: int

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


@dataclass(frozen=True)
class DiskStat:
    """Capacity of the filesystem hosting a backup directory."""
    total_bytes: int
    free_bytes: int

    @property
    def used_percent(self) -> float:
        """Percentage of the filesystem in use."""
        return 100 * (self.total_bytes - self.free_bytes) / self.total_bytes


@dataclass(frozen=True)
class BackupStatistics:
    """Recency, size and frequency derived from the recent sample."""
    latest: BackupArtifact
    age_seconds: float
    mean_size_bytes: int
    mean_interval_seconds: float
    sample_size: int


@dataclass(frozen=True)
class Forecast:
    """Projected runway before the filesystem fills up."""
    estimated_remaining_count: int
    estimated_remaining_duration: Optional[timedelta]


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of checking one backup directory.

    Everything after ``latest_artifact`` is None unless the scan found at
    least one artifact and the disk probe succeeded.
    """
    directory: str
    severity: Severity
    reason: str
    artifact_count: int = 0
    latest_artifact: Optional[BackupArtifact] = None
    age_seconds: Optional[float] = None
    mean_interval_seconds: Optional[float] = None
    mean_size_bytes: Optional[int] = None
    disk_stat: Optional[DiskStat] = None
    used_percent: Optional[float] = None
    estimated_remaining_count: Optional[int] = None
    estimated_remaining_duration: Optional[timedelta] = None

    @property
    def summary(self) -> str:
        return f"[{self.directory}] {self.reason}"


@dataclass(frozen=True)
class OverallVerdict:
    """Most severe result across all checked directories."""
    severity: Severity
    reasons: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_results(cls, results: List[AnalysisResult]) -> 'OverallVerdict':
        severity = max((r.severity for r in results), default=Severity.OK)
        return cls(severity=severity, reasons=tuple(r.summary for r in results))


@dataclass(frozen=True)
class CheckConfig:
    """Thresholds and inputs for one check run.

    Raises:
        ConfigurationError: On construction, if a threshold is out of range.
    """
    directories: Tuple[str, ...]
    max_age_seconds: int
    min_size_bytes: int
    pattern: str = '*'
    sample_size: int = 10
    warning_disk_percent: float = 80.0
    critical_disk_percent: float = 90.0
    disk_probe: str = 'auto'

    def __post_init__(self):
        if not self.directories:
            raise ConfigurationError("At least one backup directory must be configured")
        if not self.pattern:
            raise ConfigurationError("pattern must be a non-empty string")

        for name in ('max_age_seconds', 'min_size_bytes', 'sample_size'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)!r}")

        for name in ('warning_disk_percent', 'critical_disk_percent'):
            if not 0 < getattr(self, name) <= 100:
                raise ConfigurationError(f"{name} must be in (0, 100], got {getattr(self, name)!r}")

        if self.warning_disk_percent > self.critical_disk_percent:
            raise ConfigurationError(
                f"warning_disk_percent ({self.warning_disk_percent}) must not exceed "
                f"critical_disk_percent ({self.critical_disk_percent})"
            )
