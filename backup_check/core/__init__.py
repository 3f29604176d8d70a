"""Core backup analysis functionality."""

from .monitor import AnalysisEngine
from .scanner import FileScanner, auto_glob
from .file_analyzer import StatisticsAggregator
from .classifier import Classifier
from .disk import DiskSpaceProbe, get_disk_probe
from .exceptions import BackupCheckError, ConfigurationError, DiskProbeError, EmptyScanResult
from .models import (AnalysisResult, BackupArtifact, BackupStatistics, CheckConfig,
                     DiskStat, Forecast, OverallVerdict, Severity)

__all__ = [
    "AnalysisEngine", "FileScanner", "auto_glob", "StatisticsAggregator", "Classifier",
    "DiskSpaceProbe", "get_disk_probe",
    "BackupCheckError", "ConfigurationError", "DiskProbeError", "EmptyScanResult",
    "AnalysisResult", "BackupArtifact", "BackupStatistics", "CheckConfig",
    "DiskStat", "Forecast", "OverallVerdict", "Severity",
]
