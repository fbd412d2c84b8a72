from slipstage.config.settings import Settings
from slipstage.database.connection import close_pool, init_pool
from slipstage.database.exceptions import DatabaseUnavailable
from slipstage.database.repositories.payment_records_repository import (
    PaymentRecordsRepository,
)
from slipstage.download.downloader import Downloader
from slipstage.extraction.factory import ExtractorFactory
from slipstage.ingestion.csv_reader import CsvSubmissionReader
from slipstage.ingestion.exceptions import IngestionError
from slipstage.ingestion.models import SubmissionRow
from slipstage.logging.logger import Log
from slipstage.pipeline.batch import BatchRunner
from slipstage.pipeline.driver import build_driver
from slipstage.pipeline.exceptions import BatchAborted
from slipstage.pipeline.recorder import SubmissionRecorder
from slipstage.staging.layout import StagingLayout


def load_rows(settings: Settings) -> list[SubmissionRow]:
    records = CsvSubmissionReader(settings.csv_path).read()
    return [SubmissionRow.from_record(record) for record in records]


def run(settings: Settings) -> int:
    """Stage every new submission in the CSV log. Returns the process exit code."""
    layout = StagingLayout(settings.staging_root)
    layout.ensure()

    try:
        rows = load_rows(settings)
    except IngestionError as exc:
        Log.error("Main", f"Cannot load submissions: {exc}")
        return 1

    repository: PaymentRecordsRepository | None = None
    if settings.dedup_enabled:
        try:
            init_pool(settings)
        except DatabaseUnavailable as exc:
            Log.error("Main", str(exc))
            return 1
        repository = PaymentRecordsRepository(settings.payment_table)

    downloader = Downloader(timeout_seconds=settings.download_timeout_seconds)
    try:
        if repository is not None:
            repository.ensure_table()
            rows = repository.filter_new_rows(rows)

        recorder = SubmissionRecorder(
            extractor=ExtractorFactory.create(settings),
            repository=repository,
        )
        runner = BatchRunner(
            build_driver(settings, layout, downloader),
            fail_fast=settings.fail_fast,
            recorder=recorder if recorder.enabled else None,
        )
        try:
            report = runner.run(rows)
        except BatchAborted as exc:
            Log.error("Main", str(exc))
            return 1
    finally:
        downloader.close()
        if repository is not None:
            close_pool()

    for row, error in report.failed:
        Log.error("Main", f"{row.file_name}: {error}")
    return 0 if report.ok else 1


def main() -> None:
    """Entry point: load settings -> configure logging -> run the batch."""
    settings = Settings()
    Log.configure(settings.log_level)
    raise SystemExit(run(settings))


if __name__ == "__main__":
    main()
