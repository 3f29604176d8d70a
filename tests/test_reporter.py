"""Tests for plugin output rendering."""

import json
from datetime import datetime, timedelta

from backup_check.core.models import (AnalysisResult, BackupArtifact, DiskStat, OverallVerdict,
                                      Severity)
from backup_check.reporters.nagios_reporter import NagiosReporter

GIB = 1024 ** 3
LATEST = BackupArtifact(path="/srv/backups/db-2026-10-19.tar.gz",
                        modified_at=datetime(2026, 10, 19, 3, 0), size_bytes=3 * GIB)


def ok_result(**changes) -> AnalysisResult:
    fields = dict(
        directory="/srv/backups",
        severity=Severity.OK,
        reason="OK",
        artifact_count=14,
        latest_artifact=LATEST,
        age_seconds=21600.0,
        mean_interval_seconds=86400.0,
        mean_size_bytes=3 * GIB,
        disk_stat=DiskStat(total_bytes=1000 * GIB, free_bytes=420 * GIB),
        used_percent=58.0,
        estimated_remaining_count=140,
        estimated_remaining_duration=timedelta(days=140)
    )
    fields.update(changes)
    return AnalysisResult(**fields)


def no_files_result(directory: str = "/srv/empty") -> AnalysisResult:
    return AnalysisResult(directory=directory, severity=Severity.UNKNOWN, reason="no files")


class TestSummaryLine:

    def test_single_directory(self) -> None:
        verdict = OverallVerdict.from_results([ok_result()])

        assert NagiosReporter.summary_line(verdict) == "OK: [/srv/backups] OK"

    def test_multiple_directories_use_worst_state(self) -> None:
        results = [ok_result(severity=Severity.CRITICAL, reason="backup too old"), no_files_result()]

        line = NagiosReporter.summary_line(OverallVerdict.from_results(results))

        assert line == "UNKNOWN: [/srv/backups] backup too old, [/srv/empty] no files"

    def test_no_directories_is_ok(self) -> None:
        assert OverallVerdict.from_results([]).severity == Severity.OK


class TestDetails:

    def test_full_result(self) -> None:
        text = NagiosReporter().format_result(ok_result())

        assert "Last backup:    19 October 2026 at 03:00  (0d 6h ago, 21600 s)" in text
        assert "Disk:           420.0 GiB free / 1000.0 GiB total (58.0 % used)" in text
        assert "Capacity:       ≈ 140 backups (3.0 GiB each)" in text
        assert "Frequency:      about once a day" in text
        assert "Forecast:       space should last ≈ 140 days" in text

    def test_no_interval_data(self) -> None:
        text = NagiosReporter().format_result(
            ok_result(mean_interval_seconds=0.0, estimated_remaining_duration=None)
        )

        assert "Frequency:      not enough data" in text
        assert "Forecast" not in text

    def test_no_files(self) -> None:
        text = NagiosReporter().format_result(no_files_result())

        assert "Directory /srv/empty - no matching files found" in text

    def test_disk_error(self) -> None:
        result = AnalysisResult(directory="/srv/backups", severity=Severity.UNKNOWN,
                                reason="disk error", artifact_count=3, latest_artifact=LATEST)

        text = NagiosReporter().format_result(result)

        assert "db-2026-10-19.tar.gz" in text
        assert "Disk:           disk error" in text
        assert "Capacity" not in text

    def test_render_without_details(self) -> None:
        results = [ok_result()]

        text = NagiosReporter(details=False).render(OverallVerdict.from_results(results), results)

        assert text == "OK: [/srv/backups] OK"


class TestJson:

    def test_json_output(self) -> None:
        results = [ok_result(), no_files_result()]

        data = json.loads(NagiosReporter().render_json(OverallVerdict.from_results(results), results))

        assert data['status'] == 'UNKNOWN'
        assert data['exit_code'] == 3
        first, second = data['results']
        assert first['latest_backup']['modified_at'] == '2026-10-19T03:00:00'
        assert first['disk'] == {'total_bytes': 1000 * GIB, 'free_bytes': 420 * GIB}
        assert first['estimated_remaining_seconds'] == 140 * 86400
        assert second['reason'] == 'no files'
        assert second['latest_backup'] is None
        assert second['estimated_remaining_seconds'] is None
