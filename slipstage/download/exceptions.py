class DownloadFailed(Exception):
    """Raised when a source reference cannot be fetched."""

    def __init__(self, url: str, status_code: int | None, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {status_code} {reason}")
        self.url = url
        self.status_code = status_code
        self.reason = reason
