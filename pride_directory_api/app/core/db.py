"""
SQLite document store and simple migration system.

The directory keeps businesses and events as JSON documents, one per
row, keyed by a store-assigned string identifier.  Documents keep the
field names clients write (``businessName``, ``coverImage``, ...);
the service layer is responsible for normalising them.  Queries reach
into documents with SQLite's JSON1 functions (``json_extract``,
``json_each``).

This module provides ``get_connection``, the ``get_cursor`` context
manager, ``init_db`` (applied on application start) and a few helpers
for reading and writing documents.  Applied migration versions are
stored in the ``migrations`` table and new migrations run in order.
"""

import json
import os
import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .config import settings

COLLECTIONS = {"businesses", "events"}

# Millisecond ISO‑8601 timestamp in UTC, e.g. ``2025-03-01T18:22:05.123Z``.
NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"


@dataclass
class Document:
    """A raw document as returned by the store."""

    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # pride_directory_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Timestamps are stored as ISO strings and are not converted.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def new_document_id() -> str:
    """Return a new 20 character document identifier."""
    return uuid.uuid4().hex[:20]


def load_document(row: sqlite3.Row) -> Document:
    """Build a ``Document`` from a ``(id, data[, created_at])`` row.

    Rows whose ``data`` column is not a JSON object are returned with
    an empty payload so that normalisation drops them like any other
    nameless record.
    """
    try:
        data = json.loads(row["data"]) if row["data"] else {}
    except (TypeError, ValueError):
        data = {}
    if not isinstance(data, dict):
        data = {}
    created_at = row["created_at"] if "created_at" in row.keys() else None
    return Document(id=row["id"], data=data, created_at=created_at)


def insert_document(
    cursor: sqlite3.Cursor,
    collection: str,
    data: Dict[str, Any],
    doc_id: Optional[str] = None,
    created_at: Optional[str] = None,
) -> str:
    """Insert ``data`` into ``collection`` and return the document id.

    When ``created_at`` is omitted the store clock assigns it.
    """
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection {collection!r}")
    doc_id = doc_id or new_document_id()
    payload = json.dumps(data, ensure_ascii=False)
    if created_at is None:
        cursor.execute(
            f"INSERT INTO {collection} (id, data, created_at) VALUES (?, ?, {NOW_SQL})",
            (doc_id, payload),
        )
    else:
        cursor.execute(
            f"INSERT INTO {collection} (id, data, created_at) VALUES (?, ?, ?)",
            (doc_id, payload, created_at),
        )
    return doc_id


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of the
    ``migrations`` list.  Append new migrations with an incremented
    version number.
    """
    migrations: list[tuple[int, str]] = [
        # Migration 1: Initial schema
        (
            1,
            f"""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT NOT NULL UNIQUE,
                full_name TEXT,
                password TEXT,
                disabled INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS businesses (
                id TEXT PRIMARY KEY,
                data TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT ({NOW_SQL})
            );

            CREATE TABLE IF NOT EXISTS events (
                id TEXT PRIMARY KEY,
                data TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT ({NOW_SQL})
            );
            """,
        ),
        # Migration 2: indices used by the landing page and category views
        (
            2,
            """
            CREATE INDEX IF NOT EXISTS idx_businesses_created_at ON businesses(created_at);
            CREATE INDEX IF NOT EXISTS idx_businesses_category
                ON businesses(json_extract(data, '$.category'));
            CREATE INDEX IF NOT EXISTS idx_events_date ON events(json_extract(data, '$.date'));
            """,
        ),
    ]

    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in migrations:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
