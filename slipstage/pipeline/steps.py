from slipstage.download.downloader import Downloader
from slipstage.logging.logger import Log
from slipstage.pipeline.pipeline import SourceContext, SourceStep
from slipstage.raster.base import BaseRasterTool
from slipstage.raster.converter import RasterConverter
from slipstage.routing.router import SourceKind, SourceRouter
from slipstage.staging.ledger import ArtifactLedger
from slipstage.staging.models import Stage, StagingArtifact


class DownloadStep(SourceStep):
    def __init__(self, downloader: Downloader, ledger: ArtifactLedger) -> None:
        self._downloader = downloader
        self._ledger = ledger

    def run(self, context: SourceContext) -> SourceContext:
        temp_path = self._ledger.layout.raw_download / f"{context.base_name}.download"
        context.download_path = self._downloader.download(context.url, temp_path)
        return context


class RouteStep(SourceStep):
    def __init__(self, router: SourceRouter) -> None:
        self._router = router

    def run(self, context: SourceContext) -> SourceContext:
        context.route = self._router.route(context.url, context.row.file_count)
        return context


class StageStep(SourceStep):
    """Gives the download its real name in the stage picked by routing.

    JPEG sources are final tiles at this point; everything else waits in
    RawDownload for conversion.
    """

    def __init__(self, ledger: ArtifactLedger) -> None:
        self._ledger = ledger

    def run(self, context: SourceContext) -> SourceContext:
        if context.route is None or context.download_path is None:
            raise ValueError("SourceContext must be downloaded and routed before staging")
        downloaded = self._ledger.register(
            context.document, context.download_path, Stage.RAW_DOWNLOAD
        )
        name = f"{context.base_name}.{context.route.extension}"
        context.source = self._ledger.transition(downloaded, context.route.destination, name)
        if context.route.kind is SourceKind.JPEG:
            context.tiles = [context.source]
        return context


class ConvertStep(SourceStep):
    def __init__(
        self,
        tool: BaseRasterTool,
        converter: RasterConverter,
        ledger: ArtifactLedger,
    ) -> None:
        self._tool = tool
        self._converter = converter
        self._ledger = ledger

    def run(self, context: SourceContext) -> SourceContext:
        if context.route is None or context.source is None:
            raise ValueError("SourceContext must be staged before conversion")
        if not context.route.convert:
            return context

        if context.route.kind is SourceKind.PAGINATED:
            self._convert_document(context, context.source)
        else:
            self._convert_image(context, context.source)
        return context

    def _output_stage(self, context: SourceContext, tiles_from_source: int) -> Stage:
        if tiles_from_source > 1 or context.row.file_count > 1:
            return Stage.PENDING_COMBINE
        return Stage.PENDING_UPLOAD

    def _convert_document(self, context: SourceContext, source: StagingArtifact) -> None:
        page_info = self._tool.count_pages(source.path)
        context.page_count = page_info.page_count
        stage = self._output_stage(context, page_info.page_count)
        paths = self._converter.convert_document(
            page_info.resolved_path,
            page_info.page_count,
            self._ledger.layout.directory_for(stage),
            context.base_name,
            single_output=stage is Stage.PENDING_UPLOAD,
        )
        context.tiles = [self._ledger.register(context.document, p, stage) for p in paths]

    def _convert_image(self, context: SourceContext, source: StagingArtifact) -> None:
        stage = self._output_stage(context, 1)
        output_path = self._ledger.layout.directory_for(stage) / f"{context.base_name}.jpg"
        path = self._converter.convert_image(source.path, output_path)
        context.tiles = [self._ledger.register(context.document, path, stage)]
        Log.debug("ConvertStep", f"{source.name} -> {path}")
