class IngestionError(Exception):
    """Base exception for submission log ingestion errors."""


class IncompleteRow(IngestionError):
    """Raised when a submission record lacks a required value."""


class SubmissionLogReadError(IngestionError):
    """Raised when the submission CSV cannot be read."""
