"""Backup analysis engine."""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from .classifier import Classifier
from .disk import get_disk_probe
from .exceptions import DiskProbeError, EmptyScanResult
from .file_analyzer import Clock, StatisticsAggregator
from .forecast import forecast
from .models import AnalysisResult, CheckConfig, DiskStat, OverallVerdict, Severity
from .scanner import FileScanner


DiskProbe = Callable[[str], DiskStat]


class AnalysisEngine:
    """Runs the scan, statistics, disk and classification steps per directory."""

    def __init__(self, config: CheckConfig, probe: Optional[DiskProbe] = None,
                 clock: Optional[Clock] = None):
        """Initialize analysis engine.

        Args:
            config: Thresholds and inputs for this run.
            probe: Returns the DiskStat for a path. Defaults to the probe
                   named by ``config.disk_probe``.
            clock: Returns the current time; defaults to ``datetime.now``.
        """
        self.config = config
        self.probe = probe or get_disk_probe(config.disk_probe)
        self.scanner = FileScanner(config.pattern)
        self.aggregator = StatisticsAggregator(clock)
        self.classifier = Classifier.from_config(config)
        self.logger = logging.getLogger(__name__)

    def analyze_all(self, directories: Optional[Iterable[str]] = None
                    ) -> Tuple[OverallVerdict, List[AnalysisResult]]:
        """Analyze every directory and combine the results.

        A failure in one directory only affects that directory's result.

        Args:
            directories: Directories to check; defaults to the configured ones.

        Returns:
            Tuple of (overall verdict, per-directory results in input order).
        """
        if directories is None:
            directories = self.config.directories

        results = []
        for directory in directories:
            try:
                result = self.analyze_directory(directory)
            except Exception as e:
                self.logger.error(f"Failed to analyze {directory}: {e}")
                result = AnalysisResult(directory=directory, severity=Severity.UNKNOWN,
                                        reason="scan error")
            results.append(result)

        verdict = OverallVerdict.from_results(results)
        self.logger.info(f"Checked {len(results)} directories, overall {verdict.severity.name}")
        return verdict, results

    def analyze_directory(self, directory: str) -> AnalysisResult:
        """Analyze a single backup directory.

        Args:
            directory: Directory to check.

        Returns:
            AnalysisResult for the directory.
        """
        artifacts = self.scanner.scan(directory)
        sample = artifacts[:self.config.sample_size]

        try:
            stats = self.aggregator.aggregate(sample)
        except EmptyScanResult:
            self.logger.info(f"No files matching '{self.scanner.pattern}' in {directory}")
            severity, reason = self.classifier.classify(None)
            return AnalysisResult(directory=directory, severity=severity, reason=reason)

        try:
            disk = self._probe_disk(directory)
        except DiskProbeError as e:
            self.logger.error(f"Disk probe failed for {directory}: {e}")
            severity, reason = self.classifier.classify(stats.latest, disk_error=True)
            return AnalysisResult(
                directory=directory,
                severity=severity,
                reason=reason,
                artifact_count=len(artifacts),
                latest_artifact=stats.latest
            )

        used_percent = disk.used_percent
        remaining_count = None
        remaining_duration = None
        if stats.mean_size_bytes > 0:
            runway = forecast(disk.free_bytes, stats.mean_size_bytes, stats.mean_interval_seconds)
            remaining_count = runway.estimated_remaining_count
            remaining_duration = runway.estimated_remaining_duration

        severity, reason = self.classifier.classify(stats.latest, stats.age_seconds, used_percent)
        self.logger.info(f"{directory}: {severity.name} ({reason})")

        return AnalysisResult(
            directory=directory,
            severity=severity,
            reason=reason,
            artifact_count=len(artifacts),
            latest_artifact=stats.latest,
            age_seconds=stats.age_seconds,
            mean_interval_seconds=stats.mean_interval_seconds,
            mean_size_bytes=stats.mean_size_bytes,
            disk_stat=disk,
            used_percent=used_percent,
            estimated_remaining_count=remaining_count,
            estimated_remaining_duration=remaining_duration
        )

    def _probe_disk(self, directory: str) -> DiskStat:
        """Probe disk capacity, rejecting figures that cannot be right."""
        disk = self.probe(directory)
        if disk.total_bytes <= 0:
            raise DiskProbeError(f"filesystem of {directory} reports no capacity")
        if not 0 <= disk.free_bytes <= disk.total_bytes:
            raise DiskProbeError(
                f"filesystem of {directory} reports {disk.free_bytes} free of {disk.total_bytes}"
            )
        return disk
