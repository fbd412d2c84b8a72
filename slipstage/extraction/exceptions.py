class ExtractionError(Exception):
    """Raised when slip field extraction fails."""


class ExtractionValidationError(ExtractionError):
    """Raised when the extracted result fails validation."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
