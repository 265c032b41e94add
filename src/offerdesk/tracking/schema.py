"""SQLite schema for tracked offer records."""

from __future__ import annotations

import sqlite3


def init_offer_records_table(conn: sqlite3.Connection) -> None:
    """Create the offer_records table and its indexes if they do not exist.

    The full record is stored as JSON; owner, status, and follow-up columns
    are duplicated out of it so the list queries can filter in SQL.

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS offer_records (
            id TEXT PRIMARY KEY,
            owner_id TEXT NOT NULL,
            status TEXT NOT NULL,
            follow_up_date TEXT,
            follow_up_sent INTEGER NOT NULL DEFAULT 0,
            record_json TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """)

    conn.execute("CREATE INDEX IF NOT EXISTS idx_offer_records_owner ON offer_records (owner_id)")
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_offer_records_owner_status "
        "ON offer_records (owner_id, status)"
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_offer_records_follow_up "
        "ON offer_records (follow_up_date)"
    )

    conn.commit()
