"""Report generation for backup check results."""

from .nagios_reporter import NagiosReporter

__all__ = ["NagiosReporter"]
