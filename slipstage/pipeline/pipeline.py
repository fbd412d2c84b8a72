from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from slipstage.ingestion.models import SubmissionRow
from slipstage.routing.router import RouteDecision
from slipstage.staging.models import StagingArtifact


@dataclass(slots=True)
class SourceContext:
    """Accumulates state while one source reference moves through the steps."""

    row: SubmissionRow
    url: str
    position: int
    base_name: str
    download_path: Path | None = None
    route: RouteDecision | None = None
    source: StagingArtifact | None = None
    page_count: int = 1
    tiles: list[StagingArtifact] = field(default_factory=list)

    @property
    def document(self) -> str:
        return self.row.file_name


class SourceStep(ABC):
    @abstractmethod
    def run(self, context: SourceContext) -> SourceContext:
        raise NotImplementedError
