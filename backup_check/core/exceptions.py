"""Exception types raised by the backup check."""


class BackupCheckError(Exception):
    """Base class for all backup check errors."""


class ConfigurationError(BackupCheckError, ValueError):
    """Raised when required thresholds are missing or invalid.

    This is fatal: it is raised once, before any directory is analyzed.
    """


class DiskProbeError(BackupCheckError):
    """Raised when the filesystem capacity query cannot be completed."""


class EmptyScanResult(BackupCheckError):
    """Raised when no backup artifact matched in a directory."""
