"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from backup_check.core.exceptions import DiskProbeError
from backup_check.core.models import CheckConfig, DiskStat

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0)
MB = 1024 * 1024


class FakeProbe:
    """Disk probe returning canned figures and recording calls."""

    def __init__(self, total_bytes: int = 1000 * MB, free_bytes: int = 400 * MB,
                 error: Optional[Exception] = None):
        self.total_bytes = total_bytes
        self.free_bytes = free_bytes
        self.error = error
        self.calls: List[str] = []

    def __call__(self, path: str) -> DiskStat:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return DiskStat(total_bytes=self.total_bytes, free_bytes=self.free_bytes)


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def probe() -> FakeProbe:
    """Disk probe reporting 60% usage."""
    return FakeProbe()


@pytest.fixture
def failing_probe() -> FakeProbe:
    return FakeProbe(error=DiskProbeError("statvfs failed"))


@pytest.fixture
def make_backup(tmp_path: Path) -> Callable[..., Path]:
    """Create a backup file of a given size and age below tmp_path."""

    def _make(name: str, size: int = 2 * MB, age: timedelta = timedelta(hours=1),
              directory: Optional[Path] = None) -> Path:
        directory = directory or tmp_path
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.truncate(size)
        mtime = (FIXED_NOW - age).timestamp()
        os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def check_config(tmp_path: Path) -> CheckConfig:
    """Config for a single directory with a 1 day age and 1 MiB size threshold."""
    return CheckConfig(
        directories=(str(tmp_path),),
        max_age_seconds=86400,
        min_size_bytes=MB,
        pattern='*.tar.gz'
    )
