"""Record store interface and its SQLite implementation.

The store is owner-scoped: every read and delete takes the holder identity
and never returns another holder's records.  ``exists`` is the only
cross-owner lookup, used to tell "not found" from "not yours".
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from offerdesk.domain.types import OfferStatus
from offerdesk.tracking.models import OfferRecord

# Fixed-width UTC timestamps so SQL string comparison matches time order
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime(_TIMESTAMP_FORMAT)


class RecordStore(Protocol):
    """CRUD and query operations over holder-owned offer records."""

    def add(self, record: OfferRecord) -> None: ...

    def get(self, owner_id: str, record_id: str) -> OfferRecord | None: ...

    def exists(self, record_id: str) -> bool: ...

    def update(self, record: OfferRecord) -> None: ...

    def delete(self, owner_id: str, record_id: str) -> bool: ...

    def list_by_owner(
        self, owner_id: str, status: OfferStatus | None = None
    ) -> list[OfferRecord]: ...

    def list_follow_ups_due(self, owner_id: str, now: datetime) -> list[OfferRecord]: ...

    def list_where(
        self, owner_id: str, predicate: Callable[[OfferRecord], bool]
    ) -> list[OfferRecord]: ...


class SQLiteRecordStore:
    """Persist offer records in SQLite.

    Accepts an open connection, uses parameterized queries exclusively, and
    commits after every write.  Update-by-identity is last-write-wins.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize with an open database connection.

        Args:
            conn: An open sqlite3.Connection whose database already has the
                  ``offer_records`` table (see ``init_offer_records_table``).
        """
        self._conn = conn

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def add(self, record: OfferRecord) -> None:
        self._conn.execute(
            """
            INSERT INTO offer_records (
                id, owner_id, status, follow_up_date, follow_up_sent,
                record_json, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            self._row_values(record),
        )
        self._conn.commit()

    def update(self, record: OfferRecord) -> None:
        record_id, owner_id, *values = self._row_values(record)
        self._conn.execute(
            """
            UPDATE offer_records
            SET status = ?, follow_up_date = ?, follow_up_sent = ?,
                record_json = ?, created_at = ?, updated_at = ?
            WHERE id = ? AND owner_id = ?
            """,
            (*values, record_id, owner_id),
        )
        self._conn.commit()

    def delete(self, owner_id: str, record_id: str) -> bool:
        """Delete a record; returns False if the owner has no such record."""
        cursor = self._conn.execute(
            "DELETE FROM offer_records WHERE id = ? AND owner_id = ?",
            (record_id, owner_id),
        )
        self._conn.commit()
        return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get(self, owner_id: str, record_id: str) -> OfferRecord | None:
        row = self._conn.execute(
            "SELECT record_json FROM offer_records WHERE id = ? AND owner_id = ?",
            (record_id, owner_id),
        ).fetchone()
        if row is None:
            return None
        return OfferRecord.model_validate_json(row[0])

    def exists(self, record_id: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM offer_records WHERE id = ?",
            (record_id,),
        ).fetchone()
        return row is not None

    def list_by_owner(
        self, owner_id: str, status: OfferStatus | None = None
    ) -> list[OfferRecord]:
        """Records for *owner_id*, newest first, optionally filtered by status."""
        if status is None:
            return self._select(
                "WHERE owner_id = ? ORDER BY created_at DESC", (owner_id,)
            )
        return self._select(
            "WHERE owner_id = ? AND status = ? ORDER BY created_at DESC",
            (owner_id, status.value),
        )

    def list_follow_ups_due(self, owner_id: str, now: datetime) -> list[OfferRecord]:
        """Content-created records whose follow-up date has passed, oldest due first."""
        return self._select(
            """
            WHERE owner_id = ?
              AND status = ?
              AND follow_up_sent = 0
              AND follow_up_date IS NOT NULL
              AND follow_up_date <= ?
            ORDER BY follow_up_date ASC
            """,
            (owner_id, OfferStatus.CONTENT_CREATED.value, format_timestamp(now)),
        )

    def list_where(
        self, owner_id: str, predicate: Callable[[OfferRecord], bool]
    ) -> list[OfferRecord]:
        return [record for record in self.list_by_owner(owner_id) if predicate(record)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select(self, clause: str, params: tuple[str, ...]) -> list[OfferRecord]:
        cursor = self._conn.execute(f"SELECT record_json FROM offer_records {clause}", params)
        return [OfferRecord.model_validate_json(row[0]) for row in cursor.fetchall()]

    @staticmethod
    def _row_values(record: OfferRecord) -> tuple[str | int | None, ...]:
        follow_up = format_timestamp(record.follow_up_date) if record.follow_up_date else None
        return (
            record.id,
            record.owner_id,
            record.status.value,
            follow_up,
            int(record.follow_up_sent),
            record.model_dump_json(),
            format_timestamp(record.created_at),
            format_timestamp(record.updated_at),
        )
