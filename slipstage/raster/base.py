from abc import ABC, abstractmethod
from pathlib import Path

from slipstage.raster.models import PageCount


class BaseRasterTool(ABC):
    """Contract for external raster introspection/conversion tools."""

    @abstractmethod
    def count_pages(self, source: Path) -> PageCount:
        """Return how many pages/frames ``source`` contains.

        Raises:
            RasterToolSpawnError: if the tool cannot be started.
            RasterToolExitError: if the tool exits non-zero.
            PageCountUndetermined: if the tool output cannot be decoded.
        """

    @abstractmethod
    def convert_page(
        self,
        source: Path,
        frame_index: int,
        output_path: Path,
        density: int,
    ) -> Path:
        """Rasterize frame ``frame_index`` of ``source`` into ``output_path``.

        Returns:
            ``output_path`` once the tool reports success.

        Raises:
            RasterToolSpawnError: if the tool cannot be started.
            RasterToolExitError: if the tool exits non-zero.
        """
