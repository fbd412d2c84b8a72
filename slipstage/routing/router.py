import posixpath
from dataclasses import dataclass
from enum import Enum
from urllib.parse import unquote, urlparse

from slipstage.logging.logger import Log
from slipstage.routing.exceptions import ExtensionUnresolvable, UnsupportedExtension
from slipstage.staging.models import Stage

JPEG_EXTENSIONS = frozenset({"jpg", "jpeg"})
RASTER_EXTENSIONS = frozenset({"png", "webp", "gif", "avif", "tif", "tiff", "svg"})
PAGINATED_EXTENSIONS = frozenset({"pdf"})


class SourceKind(str, Enum):
    JPEG = "jpeg"
    RASTER = "raster"
    PAGINATED = "paginated"


@dataclass(frozen=True)
class RouteDecision:
    """Where a downloaded source goes next and whether it needs conversion."""

    extension: str
    kind: SourceKind
    destination: Stage
    convert: bool


def extension_from_url(url: str) -> str:
    """Case-folded text after the final ``.`` of the URL's last path segment.

    Raises:
        ExtensionUnresolvable: if the last segment has no extension.
    """
    segment = posixpath.basename(unquote(urlparse(url).path))
    stem, dot, extension = segment.rpartition(".")
    if not dot or not stem or not extension:
        raise ExtensionUnresolvable(f"Can't find a file extension in {url!r}")
    return extension.casefold()


def route(url: str, file_count: int) -> RouteDecision:
    """Classify ``url`` for a submission of ``file_count`` sources.

    Raises:
        ExtensionUnresolvable: if the URL carries no extension.
        UnsupportedExtension: if the extension is in no supported class.
    """
    extension = extension_from_url(url)
    if extension in JPEG_EXTENSIONS:
        destination = Stage.PENDING_COMBINE if file_count > 1 else Stage.PENDING_UPLOAD
        return RouteDecision(extension, SourceKind.JPEG, destination, convert=False)
    if extension in RASTER_EXTENSIONS:
        return RouteDecision(extension, SourceKind.RASTER, Stage.RAW_DOWNLOAD, convert=True)
    if extension in PAGINATED_EXTENSIONS:
        return RouteDecision(extension, SourceKind.PAGINATED, Stage.RAW_DOWNLOAD, convert=True)
    raise UnsupportedExtension(f"File extension is not supported: {extension!r} ({url})")


class SourceRouter:
    """Logs routing decisions and failures under the SourceRouter tag."""

    def route(self, url: str, file_count: int) -> RouteDecision:
        try:
            decision = route(url, file_count)
        except (ExtensionUnresolvable, UnsupportedExtension) as exc:
            Log.error("SourceRouter", str(exc))
            raise
        Log.info(
            "SourceRouter",
            f"{decision.extension} -> {decision.destination.value} (convert={decision.convert})",
        )
        return decision
