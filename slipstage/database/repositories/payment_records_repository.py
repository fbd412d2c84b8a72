import re
from collections.abc import Iterable
from dataclasses import asdict
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row

from slipstage.database.connection import get_connection
from slipstage.database.exceptions import InvalidIdentifierError
from slipstage.extraction.models import PaymentSlipFields
from slipstage.ingestion.models import SubmissionRow
from slipstage.logging.logger import Log

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_]+$")

COLUMNS: tuple[tuple[str, str], ...] = (
    ("file_name", "TEXT PRIMARY KEY"),
    ("submission_time", "TEXT NOT NULL"),
    ("condo_name", "TEXT"),
    ("room_number", "TEXT NOT NULL"),
    ("file_link", "TEXT NOT NULL"),
    ("transfer_from_whom", "TEXT"),
    ("transfer_to_whom", "TEXT"),
    ("transfer_from_account_no", "TEXT"),
    ("transfer_to_account_no", "TEXT"),
    ("transfer_date_time", "TEXT"),
    ("amount", "BIGINT"),
    ("transaction_id", "TEXT"),
    ("transfer_receipt_memo", "TEXT"),
)


def _identifier(name: str) -> sql.Identifier:
    if not name or not _IDENTIFIER.match(name):
        raise InvalidIdentifierError(f"'{name}' is not an allowed SQL identifier")
    return sql.Identifier(name)


class PaymentRecordsRepository:
    """Database operations for the payment records table."""

    def __init__(self, table: str = "payment_records") -> None:
        self._table_name = table
        self._table = _identifier(table)

    def ensure_table(self) -> None:
        """Create the table and its file_name lookup index if missing."""
        column_defs = sql.SQL(", ").join(
            sql.SQL("{} {}").format(sql.Identifier(name), sql.SQL(kind))
            for name, kind in COLUMNS
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    sql.SQL("CREATE TABLE IF NOT EXISTS {} ({})").format(
                        self._table, column_defs
                    )
                )
            conn.commit()
        Log.info("PaymentRecordsRepository", f"Table {self._table_name} is ready")

    def exists(self, table: str, column: str, value: str) -> dict[str, Any] | None:
        """Return the first row where ``column`` equals ``value``, else None.

        Raises:
            InvalidIdentifierError: if ``table`` or ``column`` is not a plain identifier.
        """
        query = sql.SQL("SELECT * FROM {} WHERE {} = %s LIMIT 1").format(
            _identifier(table), _identifier(column)
        )
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (value,))
                return cur.fetchone()

    def filter_new_rows(self, rows: Iterable[SubmissionRow]) -> list[SubmissionRow]:
        """Drop rows whose file_name is already recorded."""
        new_rows: list[SubmissionRow] = []
        skipped = 0
        for row in rows:
            if self.exists(self._table_name, "file_name", row.file_name) is None:
                new_rows.append(row)
            else:
                skipped += 1
                Log.info("PaymentRecordsRepository", f"Already recorded: {row.file_name}")
        Log.info(
            "PaymentRecordsRepository",
            f"{len(new_rows)} new row(s), {skipped} already recorded",
        )
        return new_rows

    def insert_submission(
        self,
        row: SubmissionRow,
        fields: PaymentSlipFields | None = None,
    ) -> None:
        """Persist a staged submission, with extracted slip fields when available."""
        values: dict[str, Any] = {
            "file_name": row.file_name,
            "submission_time": row.submission_time,
            "condo_name": row.condo_name or None,
            "room_number": row.room_number,
            "file_link": ";".join(row.source_refs),
        }
        if fields is not None:
            values.update(asdict(fields))
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            self._table,
            sql.SQL(", ").join(sql.Identifier(name) for name in values),
            sql.SQL(", ").join(sql.Placeholder() for _ in values),
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, tuple(values.values()))
            conn.commit()
        Log.info("PaymentRecordsRepository", f"Recorded {row.file_name}")
