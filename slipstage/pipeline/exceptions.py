from slipstage.ingestion.models import SubmissionRow


class PipelineError(Exception):
    """Base exception for pipeline orchestration errors."""


class BatchAborted(PipelineError):
    """Raised when a row fails and the batch is configured to stop."""

    def __init__(self, row: SubmissionRow, cause: Exception) -> None:
        super().__init__(f"Batch aborted at submission '{row.file_name}': {cause}")
        self.row = row
        self.cause = cause
