# =============================================================================
# venue_core/offline/local_mirror.py
# Local key/value mirror of the site collections
# =============================================================================
"""
LocalMirror - SQLite-backed key/value store holding a JSON copy of each
collection.

Features:
- One fixed key per collection (events, artworks, cafeItems,
  site_opening_hours)
- Writes fully replace the stored value; there is no merge
- Corrupt values read as absent and never raise
- An unavailable store turns reads into None and writes into no-ops
"""

from __future__ import annotations
import json
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Union

from venue_core.errors import LocalMirrorCorrupt, handle_error
from venue_core.logging import get_logger
from venue_core.data.models import (
    ARTWORKS,
    CAFE_ITEMS,
    EVENTS,
    HOURS,
    resolve_collection,
)

logger = get_logger(__name__)

# Collection -> storage key
MIRROR_KEYS = {
    EVENTS: "events",
    ARTWORKS: "artworks",
    CAFE_ITEMS: "cafeItems",
    HOURS: "site_opening_hours",
}

IN_MEMORY = ":memory:"


class LocalMirror:
    """
    Persistent key/value cache for the site collections.

    Usage:
        mirror = LocalMirror(Path("local_data/site_mirror.db"))
        mirror.write("events", [event.to_dict() for event in events])
        stored = mirror.read("events")   # list of dicts, or None
    """

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS mirror_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """
        Initialize the mirror.

        Args:
            db_path: SQLite file (or ":memory:"); None disables the mirror
        """
        self.db_path = db_path
        self._lock = threading.Lock()
        self._connection: Optional[sqlite3.Connection] = None
        if db_path is not None:
            self._open()

    @classmethod
    def unavailable(cls) -> LocalMirror:
        """A mirror with no backing store."""
        return cls(None)

    @property
    def available(self) -> bool:
        return self._connection is not None

    def _open(self) -> None:
        try:
            if str(self.db_path) != IN_MEMORY:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(str(self.db_path), check_same_thread=False)
            connection.execute(self.SCHEMA)
            connection.commit()
        except (OSError, sqlite3.Error) as e:
            logger.warning(f"Local mirror unavailable at {self.db_path}: {e}")
            self._connection = None
            return
        self._connection = connection
        logger.info(f"Local mirror initialized at: {self.db_path}")

    # =========================================================================
    # READ / WRITE
    # =========================================================================

    def read(self, collection: str) -> Optional[Union[List[Any], dict]]:
        """
        Read the stored value for a collection.

        Returns:
            The decoded JSON value, or None when absent, corrupt or when the
            mirror is unavailable
        """
        collection = resolve_collection(collection)
        key = MIRROR_KEYS[collection]
        if not self.available:
            return None

        try:
            with self._lock:
                row = self._connection.execute(
                    "SELECT value FROM mirror_store WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Local mirror read failed for {key}: {e}")
            return None

        if row is None:
            return None

        try:
            return self._decode(collection, key, row[0])
        except LocalMirrorCorrupt as e:
            handle_error(e, show_user_message=False)
            return None

    @staticmethod
    def _decode(collection: str, key: str, raw: str):
        try:
            value = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise LocalMirrorCorrupt(f"Stored value for '{key}' is not valid JSON: {e}", key=key)

        expected = dict if collection == HOURS else list
        if not isinstance(value, expected):
            raise LocalMirrorCorrupt(
                f"Stored value for '{key}' is a {type(value).__name__}, expected {expected.__name__}",
                key=key,
            )
        return value

    def write(self, collection: str, value: Union[List[Any], dict]) -> bool:
        """
        Replace the stored value for a collection.

        Returns:
            True when stored (or when the mirror is unavailable), False on a
            storage error
        """
        collection = resolve_collection(collection)
        key = MIRROR_KEYS[collection]
        if not self.available:
            return True

        payload = json.dumps(value, ensure_ascii=False)
        try:
            with self._lock:
                self._connection.execute(
                    """
                    INSERT OR REPLACE INTO mirror_store (key, value, updated_at)
                    VALUES (?, ?, ?)
                    """,
                    (key, payload, datetime.now().isoformat()),
                )
                self._connection.commit()
        except sqlite3.Error as e:
            logger.error(f"Local mirror write failed for {key}: {e}")
            return False
        return True

    # =========================================================================
    # MAINTENANCE
    # =========================================================================

    def keys(self) -> List[str]:
        """Storage keys currently holding a value."""
        if not self.available:
            return []
        try:
            with self._lock:
                rows = self._connection.execute("SELECT key FROM mirror_store ORDER BY key").fetchall()
        except sqlite3.Error as e:
            logger.warning(f"Local mirror key listing failed: {e}")
            return []
        return [row[0] for row in rows]

    def clear(self, collection: Optional[str] = None) -> None:
        """Drop one collection's value, or everything when no collection is given."""
        if not self.available:
            return
        key = None if collection is None else MIRROR_KEYS[resolve_collection(collection)]
        try:
            with self._lock:
                if key is None:
                    self._connection.execute("DELETE FROM mirror_store")
                else:
                    self._connection.execute("DELETE FROM mirror_store WHERE key = ?", (key,))
                self._connection.commit()
        except sqlite3.Error as e:
            logger.error(f"Local mirror clear failed for {key or 'all keys'}: {e}")

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
