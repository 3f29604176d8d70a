"""Monitoring plugin output for backup check results."""

import json
from typing import Any, Dict, List

from ..core.classifier import NO_FILES
from ..core.models import AnalysisResult, OverallVerdict
from ..utils.formatters import format_date, format_days_hours, format_file_size, format_frequency


class NagiosReporter:
    """Renders results as a plugin summary line plus optional details."""

    LABEL_WIDTH = 16

    def __init__(self, details: bool = True):
        """Initialize reporter.

        Args:
            details: Whether to append the human-readable section per directory.
        """
        self.details = details

    def render(self, verdict: OverallVerdict, results: List[AnalysisResult]) -> str:
        """Render the full text report."""
        lines = [self.summary_line(verdict)]
        if self.details:
            for result in results:
                lines.append(self.format_result(result))
        return "\n".join(lines)

    @staticmethod
    def summary_line(verdict: OverallVerdict) -> str:
        """One-line machine summary, e.g. ``CRITICAL: [/a] OK, [/b] backup too old``."""
        return f"{verdict.severity.name}: " + ", ".join(verdict.reasons)

    def format_result(self, result: AnalysisResult) -> str:
        """Human-readable section for one directory.

        Args:
            result: Analysis result to describe.

        Returns:
            Multi-line text block, surrounded by blank lines.
        """
        if result.latest_artifact is None:
            if result.reason == NO_FILES:
                return f"\nDirectory {result.directory} - no matching files found\n"
            return f"\nDirectory {result.directory} - {result.reason}\n"

        latest = result.latest_artifact
        lines = [f"\nDirectory {result.directory} ({result.artifact_count} backups)"]

        if result.disk_stat is None:
            lines.append(self._row("Last backup:", f"{format_date(latest.modified_at)}  ({latest.name})"))
            lines.append(self._row("Disk:", result.reason))
            return "\n".join(lines) + "\n"

        disk = result.disk_stat
        lines.append(self._row(
            "Last backup:",
            f"{format_date(latest.modified_at)}  "
            f"({format_days_hours(result.age_seconds)} ago, {result.age_seconds:.0f} s)"
        ))
        lines.append("")
        lines.append(self._row(
            "Disk:",
            f"{format_file_size(disk.free_bytes)} free / {format_file_size(disk.total_bytes)} total "
            f"({result.used_percent:.1f} % used)"
        ))

        if result.estimated_remaining_count is None:
            lines.append(self._row("Capacity:", "unknown (backups are empty)"))
        else:
            lines.append(self._row(
                "Capacity:",
                f"≈ {result.estimated_remaining_count} backups "
                f"({format_file_size(result.mean_size_bytes)} each)"
            ))

        if not result.mean_interval_seconds:
            lines.append(self._row("Frequency:", "not enough data"))
        else:
            lines.append(self._row("Frequency:", format_frequency(result.mean_interval_seconds)))
            if result.estimated_remaining_duration is not None:
                lines.append(self._row(
                    "Forecast:",
                    f"space should last ≈ {result.estimated_remaining_duration.days} days"
                ))

        return "\n".join(lines) + "\n"

    def _row(self, label: str, value: str) -> str:
        return f"{label:<{self.LABEL_WIDTH}}{value}"

    def to_dict(self, verdict: OverallVerdict, results: List[AnalysisResult]) -> Dict[str, Any]:
        """Convert results to a JSON-serializable dictionary."""
        json_results = []
        for result in results:
            result_dict = {
                'directory': result.directory,
                'status': result.severity.name,
                'reason': result.reason,
                'artifact_count': result.artifact_count,
                'latest_backup': None,
                'age_seconds': result.age_seconds,
                'mean_interval_seconds': result.mean_interval_seconds,
                'mean_size_bytes': result.mean_size_bytes,
                'disk': None,
                'used_percent': result.used_percent,
                'estimated_remaining_count': result.estimated_remaining_count,
                'estimated_remaining_seconds': None
            }

            if result.latest_artifact:
                result_dict['latest_backup'] = {
                    'path': result.latest_artifact.path,
                    'size_bytes': result.latest_artifact.size_bytes,
                    'modified_at': result.latest_artifact.modified_at.isoformat()
                }
            if result.disk_stat:
                result_dict['disk'] = {
                    'total_bytes': result.disk_stat.total_bytes,
                    'free_bytes': result.disk_stat.free_bytes
                }
            if result.estimated_remaining_duration is not None:
                result_dict['estimated_remaining_seconds'] = \
                    result.estimated_remaining_duration.total_seconds()

            json_results.append(result_dict)

        return {
            'status': verdict.severity.name,
            'exit_code': verdict.severity.exit_code,
            'results': json_results
        }

    def render_json(self, verdict: OverallVerdict, results: List[AnalysisResult]) -> str:
        return json.dumps(self.to_dict(verdict, results), indent=2)
