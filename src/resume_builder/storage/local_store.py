"""SQLite persistence for the editing session.

Two blobs are stored independently, each with its own schema version: the
resume document and the customization bundle. Saving is best-effort and
loading degrades field by field, so neither ever raises to the caller.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from resume_builder.errors import StorageParseError
from resume_builder.models.customization import CustomizationBundle, bundle_from_raw
from resume_builder.models.resume import ResumeData, document_from_raw

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".resume-builder" / "session.db"

RESUME_DATA_KEY = "resume_data"
CUSTOMIZATION_KEY = "customization"

SCHEMA_VERSIONS = {
    RESUME_DATA_KEY: 1,
    CUSTOMIZATION_KEY: 1,
}


class LocalStore:
    """SQLite-backed store for the resume document and its customization."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS blobs (
                    key TEXT PRIMARY KEY,
                    version INTEGER NOT NULL,
                    payload TEXT NOT NULL,
                    saved_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    # -- writing -------------------------------------------------------------

    def save_resume_data(self, doc: ResumeData) -> bool:
        return self._save(RESUME_DATA_KEY, doc)

    def save_customization(self, bundle: CustomizationBundle) -> bool:
        return self._save(CUSTOMIZATION_KEY, bundle)

    def save_raw(self, key: str, payload: str, version: int | None = None) -> bool:
        """Write a pre-serialized payload. Returns False when the write failed."""
        version = SCHEMA_VERSIONS.get(key, 1) if version is None else version
        try:
            with self._connect() as conn:
                conn.execute(
                    """INSERT OR REPLACE INTO blobs
                       (key, version, payload, saved_at)
                       VALUES (?, ?, ?, ?)""",
                    (key, version, payload, time.time()),
                )
        except (sqlite3.Error, OSError):
            logger.error("Failed to persist %s", key, exc_info=True)
            return False
        return True

    def _save(self, key: str, model: BaseModel) -> bool:
        return self.save_raw(key, model.model_dump_json())

    # -- reading -------------------------------------------------------------

    def load_resume_data(self) -> ResumeData:
        raw = self._load(RESUME_DATA_KEY)
        return ResumeData() if raw is None else document_from_raw(raw)

    def load_customization(self) -> CustomizationBundle:
        raw = self._load(CUSTOMIZATION_KEY)
        return CustomizationBundle() if raw is None else bundle_from_raw(raw)

    def _load(self, key: str) -> Any | None:
        """Decoded payload for ``key``, or None when absent or unreadable."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT version, payload FROM blobs WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error:
            logger.error("Failed to read %s", key, exc_info=True)
            return None

        if row is None:
            return None
        version, payload = row
        if version != SCHEMA_VERSIONS.get(key):
            logger.info("Stored %s has schema version %s; loading field by field", key, version)
        try:
            return decode_payload(key, payload)
        except StorageParseError as exc:
            logger.warning("%s; using defaults", exc)
            return None

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM blobs WHERE key = ?", (key,))

    def clear(self) -> int:
        """Clear all stored blobs. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM blobs")
            return cursor.rowcount


def decode_payload(key: str, payload: str) -> Any:
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, TypeError) as exc:
        raise StorageParseError(f"Stored {key} is not valid JSON: {exc}") from exc
