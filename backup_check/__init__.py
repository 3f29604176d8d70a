"""
Backup Check - a monitoring plugin for backup directories.

This package checks that the newest backup in each directory is recent and
large enough, that the hosting filesystem has room left, and reports a
Nagios-style verdict.
"""

__version__ = "1.0.0"

from .core.models import CheckConfig, Severity
from .core.monitor import AnalysisEngine
from .reporters.nagios_reporter import NagiosReporter

__all__ = ["AnalysisEngine", "CheckConfig", "NagiosReporter", "Severity"]
