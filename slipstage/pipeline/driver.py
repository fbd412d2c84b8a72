from collections.abc import Sequence
from dataclasses import dataclass

from slipstage.composition.compositor import Compositor
from slipstage.config.settings import Settings
from slipstage.download.downloader import Downloader
from slipstage.ingestion.models import SubmissionRow
from slipstage.logging.logger import Log
from slipstage.pipeline.pipeline import SourceContext, SourceStep
from slipstage.pipeline.steps import ConvertStep, DownloadStep, RouteStep, StageStep
from slipstage.raster.converter import RasterConverter
from slipstage.raster.factory import RasterToolFactory
from slipstage.routing.router import SourceRouter
from slipstage.staging.layout import StagingLayout
from slipstage.staging.ledger import ArtifactLedger
from slipstage.staging.models import Stage, StagingArtifact


@dataclass(frozen=True)
class RowResult:
    """Outcome of one submission: the file left in PendingUpload for it."""

    row: SubmissionRow
    staged: StagingArtifact
    tiles: int
    composed: bool


class PipelineDriver:
    """Runs one submission row through download, routing, conversion and composition.

    Composition happens here and only here: once every source of the row
    has arrived and the row produced two or more tiles.
    """

    def __init__(
        self,
        steps: Sequence[SourceStep],
        ledger: ArtifactLedger,
        compositor: Compositor,
    ) -> None:
        self._steps = list(steps)
        self._ledger = ledger
        self._compositor = compositor

    def process_row(self, row: SubmissionRow) -> RowResult:
        """Stage ``row`` for upload; the first failing step propagates."""
        document = row.file_name
        Log.info("PipelineDriver", f"Processing '{document}' ({row.file_count} file(s))")
        self._ledger.open_document(document, expected_sources=row.file_count)
        try:
            return self._stage_row(row)
        finally:
            self._ledger.close_document(document)

    def _stage_row(self, row: SubmissionRow) -> RowResult:
        document = row.file_name
        for position, url in enumerate(row.source_refs, start=1):
            context = SourceContext(
                row=row,
                url=url,
                position=position,
                base_name=row.source_name(position),
            )
            Log.info("PipelineDriver", f"File {position}/{row.file_count}: {url}")
            for step in self._steps:
                context = step.run(context)
            self._ledger.source_arrived(document, len(context.tiles))

        tally = self._ledger.tally(document)
        if tally.needs_composition:
            tiles = self._ledger.artifacts(document, Stage.PENDING_COMBINE)
            staged = self._compositor.compose(document, tiles)
            return RowResult(row=row, staged=staged, tiles=tally.tiles, composed=True)

        uploads = self._ledger.artifacts(document, Stage.PENDING_UPLOAD)
        if len(uploads) != 1:
            raise RuntimeError(
                f"Expected one staged file for '{document}', found {len(uploads)}"
            )
        return RowResult(row=row, staged=uploads[0], tiles=tally.tiles, composed=False)


def build_driver(
    settings: Settings,
    layout: StagingLayout,
    downloader: Downloader | None = None,
) -> PipelineDriver:
    """Build a PipelineDriver with all required adapters."""
    ledger = ArtifactLedger(layout)
    tool = RasterToolFactory.create(settings)
    converter = RasterConverter(tool, density=settings.raster_density)
    downloader = downloader or Downloader(timeout_seconds=settings.download_timeout_seconds)
    steps: list[SourceStep] = [
        DownloadStep(downloader, ledger),
        RouteStep(SourceRouter()),
        StageStep(ledger),
        ConvertStep(tool, converter, ledger),
    ]
    return PipelineDriver(steps=steps, ledger=ledger, compositor=Compositor(ledger))
