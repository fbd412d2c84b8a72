from dataclasses import dataclass
from pathlib import Path

from slipstage.staging.models import Stage


@dataclass(frozen=True)
class StagingLayout:
    """Physical directory layout under the staging root.

    ``<root>/{raw-download, pending-combine, pending-upload/already-uploaded,
    pending-combine-inbox/already-combined}``
    """

    root: Path

    @property
    def raw_download(self) -> Path:
        return self.root / "raw-download"

    @property
    def pending_combine(self) -> Path:
        return self.root / "pending-combine"

    @property
    def pending_upload(self) -> Path:
        return self.root / "pending-upload"

    @property
    def already_uploaded(self) -> Path:
        return self.pending_upload / "already-uploaded"

    @property
    def combine_inbox(self) -> Path:
        return self.root / "pending-combine-inbox"

    @property
    def already_combined(self) -> Path:
        return self.combine_inbox / "already-combined"

    def directory_for(self, stage: Stage) -> Path:
        return {
            Stage.RAW_DOWNLOAD: self.raw_download,
            Stage.PENDING_COMBINE: self.pending_combine,
            Stage.PENDING_UPLOAD: self.pending_upload,
            Stage.ARCHIVED_COMBINED: self.already_combined,
            Stage.ARCHIVED_UPLOADED: self.already_uploaded,
        }[stage]

    def directories(self) -> list[Path]:
        return [
            self.raw_download,
            self.pending_combine,
            self.pending_upload,
            self.already_uploaded,
            self.combine_inbox,
            self.already_combined,
        ]

    def ensure(self) -> None:
        """Create every staging directory; safe to call repeatedly."""
        for directory in self.directories():
            directory.mkdir(parents=True, exist_ok=True)
