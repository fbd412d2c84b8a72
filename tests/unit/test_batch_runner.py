from pathlib import Path
from unittest.mock import MagicMock

import pytest

from slipstage.download.exceptions import DownloadFailed
from slipstage.ingestion.models import SubmissionRow
from slipstage.pipeline.batch import BatchRunner
from slipstage.pipeline.driver import RowResult
from slipstage.pipeline.exceptions import BatchAborted
from slipstage.staging.models import Stage, StagingArtifact


def _row(name: str) -> SubmissionRow:
    return SubmissionRow(file_name=name, source_refs=(f"https://x/{name}.jpg",))


def _result(row: SubmissionRow) -> RowResult:
    artifact = StagingArtifact(
        document=row.file_name,
        path=Path(f"/tmp/{row.file_name}.jpg"),
        stage=Stage.PENDING_UPLOAD,
    )
    return RowResult(row=row, staged=artifact, tiles=1, composed=False)


def _driver(failing: set[str]) -> MagicMock:
    driver = MagicMock()

    def process_row(row: SubmissionRow) -> RowResult:
        if row.file_name in failing:
            raise DownloadFailed(row.source_refs[0], 404, "Not Found")
        return _result(row)

    driver.process_row.side_effect = process_row
    return driver


class TestBatchRunner:
    def test_runs_rows_in_order(self) -> None:
        driver = _driver(failing=set())
        rows = [_row("a"), _row("b")]

        report = BatchRunner(driver).run(rows)

        assert report.ok
        assert [r.row.file_name for r in report.staged] == ["a", "b"]
        assert [c.args[0] for c in driver.process_row.call_args_list] == rows

    def test_fail_fast_aborts_on_first_failure(self) -> None:
        driver = _driver(failing={"b"})

        with pytest.raises(BatchAborted) as exc_info:
            BatchRunner(driver, fail_fast=True).run([_row("a"), _row("b"), _row("c")])

        assert exc_info.value.row.file_name == "b"
        assert isinstance(exc_info.value.cause, DownloadFailed)
        assert driver.process_row.call_count == 2

    def test_continue_records_failures(self) -> None:
        driver = _driver(failing={"b"})

        report = BatchRunner(driver, fail_fast=False).run([_row("a"), _row("b"), _row("c")])

        assert not report.ok
        assert [r.row.file_name for r in report.staged] == ["a", "c"]
        [(row, error)] = report.failed
        assert row.file_name == "b"
        assert isinstance(error, DownloadFailed)

    def test_recorder_called_for_staged_rows(self) -> None:
        recorder = MagicMock()

        BatchRunner(_driver(failing={"b"}), fail_fast=False, recorder=recorder).run(
            [_row("a"), _row("b")]
        )

        recorder.record.assert_called_once()
        assert recorder.record.call_args.args[0].row.file_name == "a"

    def test_recorder_failure_counts_as_row_failure(self) -> None:
        recorder = MagicMock()
        recorder.record.side_effect = RuntimeError("db down")

        report = BatchRunner(_driver(failing=set()), fail_fast=False, recorder=recorder).run(
            [_row("a")]
        )

        assert report.staged == []
        assert str(report.failed[0][1]) == "db down"
