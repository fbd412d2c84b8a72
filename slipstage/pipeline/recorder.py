from slipstage.database.repositories.payment_records_repository import (
    PaymentRecordsRepository,
)
from slipstage.extraction.base import BaseSlipExtractor
from slipstage.logging.logger import Log
from slipstage.pipeline.driver import RowResult


class SubmissionRecorder:
    """Extracts slip fields from a staged submission and persists the record."""

    def __init__(
        self,
        *,
        extractor: BaseSlipExtractor | None = None,
        repository: PaymentRecordsRepository | None = None,
    ) -> None:
        self._extractor = extractor
        self._repository = repository

    @property
    def enabled(self) -> bool:
        return self._extractor is not None or self._repository is not None

    def record(self, result: RowResult) -> None:
        fields = None
        if self._extractor is not None:
            fields = self._extractor.extract(result.staged.path)
            Log.info("SubmissionRecorder", f"Extracted fields for '{result.row.file_name}'")
        if self._repository is not None:
            self._repository.insert_submission(result.row, fields)
