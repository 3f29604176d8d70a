"""Statistics over the most recent backup files."""

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence
from .exceptions import EmptyScanResult
from .models import BackupArtifact, BackupStatistics


Clock = Callable[[], datetime]


class StatisticsAggregator:
    """Derives freshness, size and frequency figures from a backup sample."""

    def __init__(self, clock: Optional[Clock] = None):
        """Initialize statistics aggregator.

        Args:
            clock: Returns the current time. Defaults to ``datetime.now``;
                   tests pass a fixed clock instead.
        """
        self.clock = clock or datetime.now
        self.logger = logging.getLogger(__name__)

    def aggregate(self, sample: Sequence[BackupArtifact]) -> BackupStatistics:
        """Compute statistics for a recency-ordered sample.

        Args:
            sample: Artifacts ordered by modification time, newest first.

        Returns:
            BackupStatistics for the sample.

        Raises:
            EmptyScanResult: If the sample is empty.
        """
        if not sample:
            raise EmptyScanResult("no backup files in sample")

        latest = sample[0]
        age_seconds = (self.clock() - latest.modified_at).total_seconds()

        mean_size = sum(a.size_bytes for a in sample) // len(sample)

        mean_interval = 0.0
        if len(sample) > 1:
            gaps = [
                (newer.modified_at - older.modified_at).total_seconds()
                for newer, older in zip(sample, sample[1:])
            ]
            mean_interval = sum(gaps) / len(gaps)

        self.logger.debug(f"Sample of {len(sample)}: latest {latest.path}, "
                          f"age {age_seconds:.0f}s, mean size {mean_size}, "
                          f"mean interval {mean_interval:.0f}s")

        return BackupStatistics(
            latest=latest,
            age_seconds=age_seconds,
            mean_size_bytes=mean_size,
            mean_interval_seconds=mean_interval,
            sample_size=len(sample)
        )
