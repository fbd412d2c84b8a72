from pathlib import Path

import httpx

from slipstage.download.exceptions import DownloadFailed
from slipstage.logging.logger import Log

_CHUNK_SIZE = 64 * 1024


class Downloader:
    """Fetches a remote reference and streams its body straight to disk."""

    def __init__(
        self,
        *,
        timeout_seconds: float,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout_seconds, follow_redirects=True)

    def close(self) -> None:
        self._client.close()

    def download(self, url: str, destination: Path) -> Path:
        """Stream ``url`` into ``destination``.

        Raises:
            DownloadFailed: on a non-success status, an empty body, or a transport error.
        """
        try:
            with self._client.stream("GET", url) as response:
                if not response.is_success:
                    raise DownloadFailed(url, response.status_code, response.reason_phrase)
                written = self._copy(response, destination)
                if written == 0:
                    raise DownloadFailed(url, response.status_code, "response has no body")
        except DownloadFailed as exc:
            Log.error("Downloader", str(exc))
            raise
        except httpx.HTTPError as exc:
            Log.error("Downloader", f"Transport error while fetching {url}: {exc}")
            raise DownloadFailed(url, None, str(exc)) from exc

        Log.info("Downloader", f"Downloaded {written} bytes to {destination}")
        return destination

    @staticmethod
    def _copy(response: httpx.Response, destination: Path) -> int:
        written = 0
        with destination.open("wb") as handle:
            for chunk in response.iter_bytes(_CHUNK_SIZE):
                handle.write(chunk)
                written += len(chunk)
        return written
