from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from slipstage.ingestion.exceptions import IncompleteRow

REQUIRED_FIELDS = ("roomNumber", "submissionTime", "monthsCovered", "fileLink", "fileName")


@dataclass(frozen=True)
class SubmissionRow:
    """One logical payment submission, backed by one or more remote files."""

    file_name: str
    source_refs: tuple[str, ...]
    room_number: str = ""
    submission_time: str = ""
    condo_name: str = ""
    months_covered: str = ""

    def __post_init__(self) -> None:
        if not self.source_refs:
            raise IncompleteRow(f"Submission '{self.file_name}' has no source references")

    @property
    def file_count(self) -> int:
        return len(self.source_refs)

    def source_name(self, position: int) -> str:
        """Base name for the source at 1-based ``position``."""
        if self.file_count > 1:
            return f"{self.file_name}_{position}"
        return self.file_name

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SubmissionRow":
        """Build a row from a parsed submission record.

        Raises:
            IncompleteRow: if a required value is falsy or fileLink is not a list.
        """
        missing = [name for name in REQUIRED_FIELDS if not record.get(name)]
        if missing:
            raise IncompleteRow(
                f"Submission record is incomplete, missing {missing}: {dict(record)}"
            )
        links = record["fileLink"]
        if not isinstance(links, (list, tuple)):
            raise IncompleteRow(f"fileLink must be a list of URLs, got {links!r}")
        return cls(
            file_name=record["fileName"],
            source_refs=tuple(links),
            room_number=record["roomNumber"],
            submission_time=record["submissionTime"],
            condo_name=record.get("condoName") or "",
            months_covered=record["monthsCovered"],
        )
