# =============================================================================
# venue_core/data/supabase_client.py
# Supabase Client Configuration for the Gallery Café site
# Handles database connections and CRUD operations
# =============================================================================

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional

import httpx
import streamlit as st
from postgrest.exceptions import APIError

from venue_core.api.config_manager import SiteConfig
from venue_core.errors import RemoteRejected, RemoteStoreError, RemoteUnavailable
from venue_core.logging import get_logger

from .models import ARTWORKS, CAFE_ITEMS, EVENTS, HOURS, HOURS_ROW_ID, resolve_collection

logger = get_logger(__name__)

# Collection -> remote table
REMOTE_TABLES = {
    EVENTS: "events",
    ARTWORKS: "artworks",
    CAFE_ITEMS: "cafe_items",
    HOURS: "hours",
}

# Collection -> (column, descending) used when listing
LIST_ORDERING = {
    EVENTS: ("date", False),
    ARTWORKS: ("created_at", True),
    CAFE_ITEMS: ("category", False),
}

# PostgREST / Postgres codes meaning "not allowed", i.e. an auth problem
AUTH_ERROR_CODES = {"PGRST301", "PGRST302", "42501", "401", "403"}


def get_supabase_client(url: str, key: str):
    """
    Initialize and return a Supabase client.

    Args:
        url: Project URL, e.g. "https://your-project.supabase.co"
        key: Anon key

    Returns:
        Supabase client instance or None if the credentials are rejected
    """
    from supabase import create_client, Client

    try:
        client: Client = create_client(url, key)
        return client
    except Exception as e:
        logger.error(f"Failed to initialize Supabase client: {e}")
        return None


# Global client reference for cleanup
_supabase_client = None


@st.cache_resource(ttl=3600)  # Cache for 1 hour, then refresh
def get_cached_supabase_client(url: str, key: str):
    """
    Get cached Supabase client (reused across sessions).

    Uses TTL to periodically refresh the connection and prevent stale connections.
    """
    global _supabase_client
    _supabase_client = get_supabase_client(url, key)
    return _supabase_client


def cleanup_supabase_connections() -> None:
    """
    Drop the cached client and close its HTTP session.
    Call this on application shutdown, not when a single session ends.
    """
    global _supabase_client
    get_cached_supabase_client.clear()
    if _supabase_client is None:
        return
    postgrest = getattr(_supabase_client, "postgrest", None)
    session = getattr(postgrest, "session", None)
    if session is not None:
        try:
            session.close()
        except httpx.HTTPError as e:
            logger.debug(f"Ignoring error while closing Supabase session: {e}")
    _supabase_client = None


class RemoteStoreClient:
    """
    Stateless CRUD executor over the site's Supabase tables.

    Every call either returns decoded rows or raises RemoteUnavailable
    (network, auth, not configured) or RemoteRejected (the backend refused
    the request). No retries happen here.
    """

    def __init__(self, client=None):
        """
        Args:
            client: Supabase client, or None when the backend is not configured
        """
        self.client = client

    @classmethod
    def from_config(cls, config: SiteConfig) -> RemoteStoreClient:
        if not config.has_supabase:
            logger.warning("Supabase credentials not configured; remote store disabled")
            return cls(None)
        return cls(get_cached_supabase_client(config.supabase_url, config.supabase_key))

    def is_connected(self) -> bool:
        """Check if a Supabase client is available."""
        return self.client is not None

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _table(self, collection: str, operation: str):
        if self.client is None:
            raise RemoteUnavailable(
                "Supabase is not configured",
                collection=collection,
                operation=operation,
            )
        return self.client.table(REMOTE_TABLES[collection])

    @staticmethod
    def _classify(error: APIError, collection: str, operation: str) -> RemoteStoreError:
        code = str(error.code) if error.code is not None else None
        message = error.message or str(error)
        if code in AUTH_ERROR_CODES:
            return RemoteUnavailable(
                f"Not authorized: {message}",
                collection=collection,
                operation=operation,
                details={"remote_code": code},
            )
        return RemoteRejected(
            message,
            remote_code=code,
            collection=collection,
            operation=operation,
        )

    def _execute(self, query, collection: str, operation: str) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except APIError as e:
            raise self._classify(e, collection, operation) from e
        except httpx.HTTPError as e:
            raise RemoteUnavailable(
                f"Request failed: {e}",
                collection=collection,
                operation=operation,
            ) from e
        except RuntimeError as e:
            # httpx raises this once the underlying client has been closed
            raise RemoteUnavailable(
                f"Connection closed: {e}",
                collection=collection,
                operation=operation,
            ) from e

        data = response.data
        if data is None:
            return []
        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise RemoteRejected(
                f"Malformed response of type {type(data).__name__}",
                collection=collection,
                operation=operation,
            )
        return data

    def _single(self, rows: List[Dict[str, Any]], collection: str, operation: str, what: str) -> Dict[str, Any]:
        if not rows:
            raise RemoteRejected(
                f"No row returned for {what}",
                collection=collection,
                operation=operation,
            )
        return rows[0]

    # =========================================================================
    # CRUD
    # =========================================================================

    def list(self, collection: str) -> List[Dict[str, Any]]:
        """
        Fetch every row of a collection.

        For the hours singleton this is the "main" row, as a list of zero or
        one element.
        """
        collection = resolve_collection(collection)
        query = self._table(collection, "list").select("*")

        if collection == HOURS:
            query = query.eq("id", HOURS_ROW_ID)
        else:
            column, descending = LIST_ORDERING[collection]
            query = query.order(column, desc=descending)

        rows = self._execute(query, collection, "list")
        logger.debug(f"Fetched {len(rows)} rows from {REMOTE_TABLES[collection]}")
        return rows

    def create(self, collection: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a record (without id) and return the stored row with its id.
        """
        collection = resolve_collection(collection)
        query = self._table(collection, "create").insert(dict(record))
        rows = self._execute(query, collection, "create")
        return self._single(rows, collection, "create", "insert")

    def insert_many(self, collection: str, records: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """Bulk insert; returns the stored rows."""
        collection = resolve_collection(collection)
        if not records:
            return []
        query = self._table(collection, "insert_many").insert([dict(r) for r in records])
        return self._execute(query, collection, "insert_many")

    def update(self, collection: str, record_id: str, patch: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update to one row and return the updated row.
        """
        collection = resolve_collection(collection)
        query = self._table(collection, "update").update(dict(patch)).eq("id", record_id)
        rows = self._execute(query, collection, "update")
        return self._single(rows, collection, "update", f"id {record_id}")

    def upsert(self, collection: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert or update a row keyed by its id."""
        collection = resolve_collection(collection)
        query = self._table(collection, "upsert").upsert(dict(record))
        rows = self._execute(query, collection, "upsert")
        return self._single(rows, collection, "upsert", f"id {record.get('id')}")

    def delete(self, collection: str, record_id: str) -> bool:
        """Delete one row by id."""
        collection = resolve_collection(collection)
        query = self._table(collection, "delete").delete().eq("id", record_id)
        self._execute(query, collection, "delete")
        return True

    def test_connection(self) -> Dict[str, Any]:
        """
        Test the Supabase connection and return status

        Returns:
            Dict with status and message
        """
        try:
            query = self._table(EVENTS, "test_connection").select("id").limit(1)
            self._execute(query, EVENTS, "test_connection")
        except RemoteStoreError as e:
            return {
                "status": "error",
                "message": f"Connection failed: {e.message}",
                "code": e.code,
            }
        return {
            "status": "success",
            "message": "Successfully connected to Supabase",
        }
