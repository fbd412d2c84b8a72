"""Reads the submission log exported from the payment-slip form."""

import csv
import re
from pathlib import Path

from slipstage.ingestion.exceptions import SubmissionLogReadError
from slipstage.logging.logger import Log

COLUMNS = ("submissionTime", "condoName", "roomNumber", "monthsCovered", "fileLink")

_UNSAFE_NAME_CHARS = re.compile(r'[/\\:;*?"<>| \x00-\x1F]')
_TIME_SEPARATORS = re.compile(r"[:-]")


def build_file_name(room_number: str, submission_time: str) -> str:
    """Stable artifact name: ``"<room>, <time>"`` with filesystem-unsafe chars replaced."""
    room = _UNSAFE_NAME_CHARS.sub("-", room_number)
    time = _TIME_SEPARATORS.sub("_", submission_time.split(".")[0])
    return f"{room}, {time}"


def split_file_links(raw: str) -> list[str]:
    return [link.strip() for link in raw.split(";") if link.strip()]


class CsvSubmissionReader:
    """Parses the submission CSV into records keyed by column name."""

    def __init__(self, csv_path: Path) -> None:
        self._csv_path = csv_path

    def read(self) -> list[dict[str, object]]:
        """Read every non-empty data row.

        The header line is skipped; columns are positional.

        Raises:
            SubmissionLogReadError: if the file cannot be opened.
        """
        try:
            with self._csv_path.open(newline="", encoding="utf-8-sig") as handle:
                rows = list(csv.reader(handle, delimiter=","))
        except OSError as exc:
            Log.error("CsvSubmissionReader", f"Failed to read {self._csv_path}: {exc}")
            raise SubmissionLogReadError(f"Cannot read submission log: {exc}") from exc

        records = [self._to_record(row) for row in rows[1:] if any(cell.strip() for cell in row)]
        Log.info("CsvSubmissionReader", f"Parsed {len(records)} rows from {self._csv_path}")
        return records

    @staticmethod
    def _to_record(row: list[str]) -> dict[str, object]:
        cells = [cell.strip() for cell in row] + [""] * (len(COLUMNS) - len(row))
        record: dict[str, object] = dict(zip(COLUMNS, cells))
        record["fileLink"] = split_file_links(str(record["fileLink"]))
        room = str(record["roomNumber"])
        submitted = str(record["submissionTime"])
        record["fileName"] = build_file_name(room, submitted) if room and submitted else ""
        return record
