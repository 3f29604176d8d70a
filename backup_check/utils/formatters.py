"""Formatting utilities for backup check reports."""

from datetime import datetime


def format_file_size(size_bytes: int) -> str:
    """Format file size in human readable binary units.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Human readable size string, e.g. ``512 B`` or ``1.5 GiB``.
    """
    unit = 1024
    if size_bytes < unit:
        return f"{size_bytes} B"

    div, exp = unit, 0
    n = size_bytes // unit
    while n >= unit and exp < 5:
        div *= unit
        exp += 1
        n //= unit
    return f"{size_bytes / div:.1f} {'KMGTPE'[exp]}iB"


def format_date(dt: datetime) -> str:
    """Format datetime for display, e.g. ``02 January 2006 at 15:04``."""
    return dt.strftime('%d %B %Y at %H:%M')


def format_days_hours(seconds: float) -> str:
    """Format a duration as whole days and hours.

    Args:
        seconds: Duration in seconds.

    Returns:
        String like ``1d 6h``. Negative durations (clock skew) render as ``0d 0h``.
    """
    hours = int(max(seconds, 0) // 3600)
    return f"{hours // 24}d {hours % 24}h"


def format_frequency(seconds: float) -> str:
    """Describe how often backups happen.

    Args:
        seconds: Average interval between backups.

    Returns:
        Phrase such as ``about once a day``.
    """
    if seconds < 90:
        return f"about every {seconds:.0f} s"
    elif seconds < 5400:
        return f"about every {seconds / 60:.0f} min"
    elif seconds < 3 * 3600:
        return "about once an hour"
    elif seconds < 22 * 3600:
        return f"roughly every {seconds / 3600:.0f} h"
    elif seconds < 36 * 3600:
        return "about once a day"
    elif seconds < 7 * 86400:
        return f"every {seconds / 86400:.0f} days"
    else:
        return f"every {seconds / 86400:.1f} days"