"""Utility modules for backup check."""

from .formatters import format_file_size, format_date, format_days_hours, format_frequency

__all__ = ["format_file_size", "format_date", "format_days_hours", "format_frequency"]
