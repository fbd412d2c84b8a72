class RasterToolError(Exception):
    """Base exception for raster tool failures."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
        hint: str | None = None,
    ) -> None:
        if hint:
            message = f"{message}\n\nHint: {hint}"
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
        self.hint = hint


class RasterToolSpawnError(RasterToolError):
    """Raised when the raster tool cannot be started (missing or not executable)."""


class RasterToolExitError(RasterToolError):
    """Raised when the raster tool exits with a non-zero code."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None,
        stderr: str = "",
        hint: str | None = None,
        page_index: int | None = None,
        source_spec: str | None = None,
    ) -> None:
        super().__init__(message, returncode=returncode, stderr=stderr, hint=hint)
        self.page_index = page_index
        self.source_spec = source_spec

    @property
    def page_number(self) -> int | None:
        return None if self.page_index is None else self.page_index + 1


class RasterToolTimeout(RasterToolError):
    """Raised when the raster tool does not finish within the configured timeout."""


class PageCountUndetermined(RasterToolError):
    """Raised when the page-count output cannot be decoded."""
