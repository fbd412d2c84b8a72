from slipstage.config.settings import Settings
from slipstage.raster.base import BaseRasterTool
from slipstage.raster.cli_tool import CliRasterTool, GraphicsMagickTool, ImageMagickTool


class RasterToolFactory:
    """Creates the configured raster tool."""

    ADAPTERS: dict[str, type[CliRasterTool]] = {
        "graphicsmagick": GraphicsMagickTool,
        "imagemagick": ImageMagickTool,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseRasterTool:
        engine = settings.raster_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown raster engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(timeout_seconds=settings.raster_timeout_seconds or None)
