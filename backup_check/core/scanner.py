"""Directory scanning functionality for backup checking."""

import os
import logging
from fnmatch import fnmatchcase
from datetime import datetime
from typing import List
from .models import BackupArtifact


GLOB_METACHARACTERS = '*?['


def auto_glob(pattern: str) -> str:
    """Turn a plain string into a substring glob.

    A pattern without any glob metacharacter is wrapped as ``*pattern*`` so
    that ``db`` matches ``nightly-db-2024.tar.gz``.

    Args:
        pattern: Raw name pattern supplied by the user.

    Returns:
        Glob pattern to match base file names against.
    """
    if any(ch in pattern for ch in GLOB_METACHARACTERS):
        return pattern
    return f"*{pattern}*"


class FileScanner:
    """Finds backup files below a directory."""

    def __init__(self, pattern: str = '*'):
        """Initialize file scanner.

        Args:
            pattern: Shell-glob pattern matched against base file names.
                     Plain strings are matched as substrings.
        """
        self.pattern = auto_glob(pattern)
        self.logger = logging.getLogger(__name__)

    def matches(self, name: str) -> bool:
        """Check if a base file name matches the scanner's pattern."""
        return fnmatchcase(name, self.pattern)

    def scan(self, directory: str) -> List[BackupArtifact]:
        """Scan a directory tree for backup files.

        Unreadable entries are skipped, and a missing or unreadable
        directory simply yields no artifacts.

        Args:
            directory: Root of the tree to walk.

        Returns:
            Matching artifacts, most recently modified first.
        """
        artifacts = []

        self.logger.debug(f"Scanning {directory} for '{self.pattern}'")

        for root, dirs, files in os.walk(directory, onerror=self._on_walk_error):
            for name in files:
                if not self.matches(name):
                    continue

                path = os.path.join(root, name)
                try:
                    entry_stat = os.stat(path)
                    modified_at = datetime.fromtimestamp(entry_stat.st_mtime)
                except (OSError, ValueError, OverflowError) as e:
                    # Permission denied, broken symlink, vanished file, mtime out of range
                    self.logger.debug(f"Skipping {path}: {e}")
                    continue

                artifacts.append(BackupArtifact(
                    path=path,
                    modified_at=modified_at,
                    size_bytes=entry_stat.st_size
                ))

        artifacts.sort(key=lambda a: a.modified_at, reverse=True)

        self.logger.info(f"Found {len(artifacts)} backup files in {directory}")
        return artifacts

    def _on_walk_error(self, error: OSError) -> None:
        self.logger.debug(f"Skipping {error.filename}: {error}")
