"""Linear forecast of the remaining backup runway."""

from datetime import timedelta
from .models import Forecast

MAX_DURATION_SECONDS = timedelta.max.total_seconds()


def forecast(free_bytes: int, mean_size_bytes: int, mean_interval_seconds: float) -> Forecast:
    """Project how many more backups fit and how long that lasts.

    Args:
        free_bytes: Free space on the backup filesystem.
        mean_size_bytes: Average backup size; must be positive.
        mean_interval_seconds: Average time between backups, 0 when unknown.

    Returns:
        Forecast whose duration is None when there is no interval data.

    Raises:
        ValueError: If mean_size_bytes is not positive.
    """
    if mean_size_bytes <= 0:
        raise ValueError(f"mean backup size must be positive, got {mean_size_bytes}")

    remaining = free_bytes // mean_size_bytes

    duration = None
    if mean_interval_seconds > 0:
        seconds = remaining * mean_interval_seconds
        # Tiny backups on a large disk can exceed what timedelta holds
        if seconds >= MAX_DURATION_SECONDS:
            duration = timedelta.max
        else:
            duration = timedelta(seconds=seconds)

    return Forecast(
        estimated_remaining_count=remaining,
        estimated_remaining_duration=duration
    )
