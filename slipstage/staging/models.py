from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Stage(str, Enum):
    """Pipeline stages, each backed by one staging directory."""

    RAW_DOWNLOAD = "raw_download"
    PENDING_COMBINE = "pending_combine"
    PENDING_UPLOAD = "pending_upload"
    ARCHIVED_COMBINED = "archived_combined"
    ARCHIVED_UPLOADED = "archived_uploaded"


@dataclass(frozen=True)
class StagingArtifact:
    """A file on disk representing one document at one pipeline stage."""

    document: str
    path: Path
    stage: Stage

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class DocumentTally:
    """Tracks how much of a submission has arrived in the staging area."""

    expected_sources: int
    arrived_sources: int = 0
    tiles: int = 0

    @property
    def complete(self) -> bool:
        return self.arrived_sources >= self.expected_sources

    @property
    def needs_composition(self) -> bool:
        return self.complete and self.tiles > 1
