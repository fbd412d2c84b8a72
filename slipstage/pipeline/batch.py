from collections.abc import Iterable
from dataclasses import dataclass, field

from slipstage.ingestion.models import SubmissionRow
from slipstage.logging.logger import Log
from slipstage.pipeline.driver import PipelineDriver, RowResult
from slipstage.pipeline.exceptions import BatchAborted
from slipstage.pipeline.recorder import SubmissionRecorder


@dataclass
class BatchReport:
    staged: list[RowResult] = field(default_factory=list)
    failed: list[tuple[SubmissionRow, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class BatchRunner:
    """Run every row in order and apply the batch failure policy.

    With ``fail_fast`` the first failing row stops the run; otherwise the
    failure is recorded and the next row is processed.
    """

    def __init__(
        self,
        driver: PipelineDriver,
        *,
        fail_fast: bool = True,
        recorder: SubmissionRecorder | None = None,
    ) -> None:
        self._driver = driver
        self._fail_fast = fail_fast
        self._recorder = recorder

    def run(self, rows: Iterable[SubmissionRow]) -> BatchReport:
        report = BatchReport()
        for index, row in enumerate(rows, start=1):
            Log.info("BatchRunner", f"Row {index}: {row.file_name}")
            try:
                result = self._driver.process_row(row)
                if self._recorder is not None:
                    self._recorder.record(result)
            except Exception as exc:
                Log.error("BatchRunner", f"Row {index} ({row.file_name}) failed: {exc}")
                if self._fail_fast:
                    raise BatchAborted(row, exc) from exc
                report.failed.append((row, exc))
                continue
            report.staged.append(result)

        Log.info(
            "BatchRunner",
            f"Batch finished: {len(report.staged)} staged, {len(report.failed)} failed",
        )
        return report
