"""In-memory record of which stage every staged file is in.

The staging directories stay the observable representation for the upload
side; transitions are driven from here instead of by re-scanning them.
"""

import shutil
from pathlib import Path

from slipstage.logging.logger import Log
from slipstage.staging.layout import StagingLayout
from slipstage.staging.models import DocumentTally, Stage, StagingArtifact


class ArtifactLedger:
    def __init__(self, layout: StagingLayout) -> None:
        self._layout = layout
        self._artifacts: dict[str, list[StagingArtifact]] = {}
        self._tallies: dict[str, DocumentTally] = {}

    @property
    def layout(self) -> StagingLayout:
        return self._layout

    def open_document(self, document: str, expected_sources: int) -> DocumentTally:
        """Start tracking ``document`` afresh, discarding entries from an earlier run."""
        tally = DocumentTally(expected_sources=expected_sources)
        self._tallies[document] = tally
        self._artifacts[document] = []
        return tally

    def close_document(self, document: str) -> None:
        self._tallies.pop(document, None)
        self._artifacts.pop(document, None)

    def tally(self, document: str) -> DocumentTally:
        return self._tallies[document]

    def source_arrived(self, document: str, tiles: int) -> DocumentTally:
        """Count one processed source reference and the tiles it produced."""
        tally = self._tallies[document]
        tally.arrived_sources += 1
        tally.tiles += tiles
        return tally

    def register(self, document: str, path: Path, stage: Stage) -> StagingArtifact:
        """Record a file that was written directly into ``stage``."""
        artifact = StagingArtifact(document=document, path=path, stage=stage)
        self._artifacts.setdefault(document, []).append(artifact)
        return artifact

    def transition(
        self,
        artifact: StagingArtifact,
        stage: Stage,
        name: str | None = None,
    ) -> StagingArtifact:
        """Move ``artifact`` into ``stage``'s directory.

        The ledger entry is only updated once the file exists at its new
        location; on failure the artifact stays owned by its prior stage.
        """
        target = self._layout.directory_for(stage) / (name or artifact.name)
        shutil.move(str(artifact.path), str(target))
        moved = StagingArtifact(document=artifact.document, path=target, stage=stage)
        entries = self._artifacts.setdefault(artifact.document, [])
        if artifact in entries:
            entries[entries.index(artifact)] = moved
        else:
            entries.append(moved)
        Log.debug("ArtifactLedger", f"{artifact.path} -> {target} ({stage.value})")
        return moved

    def artifacts(self, document: str, stage: Stage | None = None) -> list[StagingArtifact]:
        """Artifacts of ``document`` in production order, optionally filtered by stage."""
        entries = self._artifacts.get(document, [])
        if stage is None:
            return list(entries)
        return [entry for entry in entries if entry.stage == stage]
