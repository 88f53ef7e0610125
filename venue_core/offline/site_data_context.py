# =============================================================================
# venue_core/offline/site_data_context.py
# Site Data Context - Single API for reading and editing site content
# =============================================================================
"""
SiteDataContext - the owner of the in-memory snapshot.

On start it fetches the four collections from Supabase concurrently and
falls back, per collection, to the local mirror and then to the built-in
defaults. Every mutation writes through to Supabase, keeps the local mirror
as a backup and publishes a new snapshot whether or not the remote write
succeeded.

Usage:
------
from venue_core.offline import SiteDataContext

with SiteDataContext.from_config(load_site_config()) as site:
    site.snapshot.events                      # current events
    result = site.create_cafe_item({"name": "Tea", "category": "drink",
                                    "price": 5, "description": "Hot tea"})
    result.data.id                            # server id, or a local one
    result.metadata["synced"]                 # False when only stored locally
"""

from __future__ import annotations
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from venue_core.api.config_manager import SiteConfig
from venue_core.data.default_data import default_for
from venue_core.data.models import (
    ARTWORKS,
    CAFE_ITEMS,
    COLLECTIONS,
    EVENTS,
    HOURS,
    HOURS_ROW_ID,
    RECORD_TYPES,
    Hours,
    Record,
    resolve_collection,
)
from venue_core.data.snapshot import SiteSnapshot
from venue_core.data.supabase_client import RemoteStoreClient
from venue_core.errors import (
    DataValidationError,
    LocalMirrorCorrupt,
    RemoteRejected,
    handle_error,
)
from venue_core.services.base_service import BaseService, ServiceResult

from .local_mirror import LocalMirror, MIRROR_KEYS


class CollectionState(Enum):
    """Load state of one collection."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class DataSource(Enum):
    """Where a collection's current content came from."""
    DEFAULTS = "defaults"
    MIRROR = "mirror"
    REMOTE = "remote"


SnapshotListener = Callable[[SiteSnapshot], None]


def _row_id(row: Any) -> Optional[str]:
    if isinstance(row, Mapping) and row.get("id") is not None:
        return str(row["id"])
    return None


class SiteDataContext(BaseService):
    """
    Reconciles Supabase, the local mirror and the in-memory snapshot.

    One instance is created per application session and closed on
    shutdown. Presentation code reads ``snapshot`` and calls the mutation
    methods; nothing else writes the snapshot.
    """

    def __init__(self, remote: RemoteStoreClient, mirror: LocalMirror):
        super().__init__()
        self._remote = remote
        self._mirror = mirror
        self._lock = threading.Lock()
        self._snapshot = SiteSnapshot.defaults()
        self._states: Dict[str, CollectionState] = {
            name: CollectionState.UNINITIALIZED for name in COLLECTIONS
        }
        self._sources: Dict[str, DataSource] = {
            name: DataSource.DEFAULTS for name in COLLECTIONS
        }
        self._listeners: List[SnapshotListener] = []

    @classmethod
    def from_config(cls, config: SiteConfig) -> SiteDataContext:
        """Build a context wired to the configured Supabase project and mirror."""
        mirror = LocalMirror(config.mirror_path) if config.mirror_enabled else LocalMirror.unavailable()
        return cls(RemoteStoreClient.from_config(config), mirror)

    def __enter__(self) -> SiteDataContext:
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def snapshot(self) -> SiteSnapshot:
        """The current published snapshot."""
        return self._snapshot

    @property
    def remote(self) -> RemoteStoreClient:
        return self._remote

    @property
    def mirror(self) -> LocalMirror:
        return self._mirror

    @property
    def is_ready(self) -> bool:
        return all(state is CollectionState.READY for state in self._states.values())

    @property
    def is_loading(self) -> bool:
        return any(state is CollectionState.LOADING for state in self._states.values())

    def state(self, collection: str) -> CollectionState:
        return self._states[resolve_collection(collection)]

    def source(self, collection: str) -> DataSource:
        return self._sources[resolve_collection(collection)]

    def list(self, collection: str) -> Union[List[Record], Hours]:
        """Current content of a collection; list collections come back as a copy."""
        value = self._snapshot.get(collection)
        return list(value) if isinstance(value, list) else value

    # =========================================================================
    # LISTENERS
    # =========================================================================

    def register_listener(self, callback: SnapshotListener) -> None:
        """Register a callback receiving every newly published snapshot."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unregister_listener(self, callback: SnapshotListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, snapshot: SiteSnapshot) -> None:
        for callback in list(self._listeners):
            try:
                callback(snapshot)
            except Exception as e:
                self.logger.error(f"Error in snapshot listener: {e}", exc_info=True)

    # =========================================================================
    # STARTUP
    # =========================================================================

    def start(self) -> SiteSnapshot:
        """
        Load every collection once. Later calls return the current snapshot;
        use refresh() to reload.
        """
        if self.is_ready:
            return self._snapshot
        return self.refresh()

    def refresh(self) -> SiteSnapshot:
        """Fetch all collections again and publish the result."""
        with self.log_operation("Loading site collections"):
            for name in COLLECTIONS:
                self._states[name] = CollectionState.LOADING

            # Every future settles before the pool exits; one failure never
            # cancels the others.
            with ThreadPoolExecutor(max_workers=len(COLLECTIONS), thread_name_prefix="site-load") as pool:
                futures = {name: pool.submit(self._remote.list, name) for name in COLLECTIONS}

            resolved = {
                name: self._resolve(name, self.settle(future))
                for name, future in futures.items()
            }

            with self._lock:
                changes = {}
                for name, (value, source) in resolved.items():
                    changes[name] = value
                    self._sources[name] = source
                    self._states[name] = CollectionState.READY
                self._snapshot = replace(self._snapshot, **changes)
                snapshot = self._snapshot

            for name, (value, source) in resolved.items():
                size = 7 if name == HOURS else len(value)
                self.logger.info(f"{name}: {size} entries from {source.value}")

        self._notify(snapshot)
        return snapshot

    def _resolve(self, collection: str, fetched: ServiceResult):
        """Pick remote data, else the mirror, else the defaults."""
        if fetched.success:
            parsed = self._parse(collection, fetched.data)
            if parsed.success:
                self._mirror.write(collection, self._serialize(collection, parsed.data))
                return parsed.data, DataSource.REMOTE
            self.logger.warning(f"Unusable remote {collection}: {parsed.error}")

        stored = self._mirror.read(collection)
        if stored is not None:
            parsed = self._parse(collection, stored)
            if parsed.success:
                return parsed.data, DataSource.MIRROR
            handle_error(
                LocalMirrorCorrupt(parsed.error, key=MIRROR_KEYS[collection]),
                show_user_message=False,
            )

        value = default_for(collection)
        self._mirror.write(collection, self._serialize(collection, value))
        return value, DataSource.DEFAULTS

    @staticmethod
    def _parse(collection: str, value: Any) -> ServiceResult:
        """
        Turn stored or fetched JSON into records.

        An empty list is valid content. For opening hours a missing row is
        absence, not emptiness.
        """
        try:
            if collection == HOURS:
                if isinstance(value, list):
                    if not value:
                        return ServiceResult.fail("No opening hours row", error_code="ABSENT")
                    value = value[0]
                return ServiceResult.ok(Hours.from_dict(value))
            record_type = RECORD_TYPES[collection]
            return ServiceResult.ok([record_type.from_dict(row) for row in value])
        except DataValidationError as e:
            return ServiceResult.from_exception(e)

    @staticmethod
    def _serialize(collection: str, value: Any):
        if collection == HOURS:
            return value.to_dict()
        return [record.to_dict() for record in value]

    # =========================================================================
    # WRITE-THROUGH HELPERS
    # =========================================================================

    def _publish(self, collection: str, transform: Callable[[Any], Any]) -> SiteSnapshot:
        with self._lock:
            current = getattr(self._snapshot, collection)
            self._snapshot = replace(self._snapshot, **{collection: transform(current)})
            snapshot = self._snapshot
        self._notify(snapshot)
        return snapshot

    def _mirror_apply(self, collection: str, transform: Callable[[List[Any]], List[Any]]) -> None:
        """Read-modify-write the mirror's stored sequence for a collection."""
        stored = self._mirror.read(collection)
        if stored is None:
            stored = self._serialize(collection, self._snapshot.get(collection))
        updated = transform(list(stored))
        if updated != stored:
            self._mirror.write(collection, updated)

    def _next_local_id(self, collection: str) -> str:
        """One past the largest numeric id in the mirror or the snapshot."""
        ids = [_row_id(row) for row in (self._mirror.read(collection) or [])]
        ids += [record.id for record in self._snapshot.get(collection)]
        numeric = [int(value) for value in ids if value is not None and value.isdecimal()]
        return str(max(numeric) + 1) if numeric else "1"

    @staticmethod
    def _list_collection(collection: str) -> str:
        collection = resolve_collection(collection)
        if collection == HOURS:
            raise ValueError("Opening hours are replaced as a whole with update_opening_hours()")
        return collection

    # =========================================================================
    # GENERIC MUTATIONS
    # =========================================================================

    def create(self, collection: str, payload: Mapping[str, Any]) -> ServiceResult:
        """
        Create a record.

        The remote store assigns the id when it accepts the insert. Otherwise
        the record gets the next local numeric id and lives in the mirror
        and the snapshot only; the result is still successful, with
        ``metadata["synced"]`` set to False.

        Raises:
            DataValidationError: required fields missing or malformed
        """
        collection = self._list_collection(collection)
        record_type = RECORD_TYPES[collection]
        draft = record_type.from_payload(payload)
        draft.validate()

        wire = {k: v for k, v in draft.to_dict(include_id=False).items() if v is not None}
        remote = self.call_remote(self._remote.create, collection, wire)

        record = None
        if remote.success:
            try:
                record = record_type.from_dict(remote.data)
            except DataValidationError as e:
                rejected = RemoteRejected(
                    f"Unusable row returned by insert: {e.message}",
                    collection=collection,
                    operation="create",
                )
                handle_error(rejected, show_user_message=False)
                remote = ServiceResult.from_exception(rejected)

        if record is None:
            record = draft.with_id(self._next_local_id(collection))
            self.logger.info(f"Stored {collection} record {record.id} locally only")

        row = record.to_dict()
        self._mirror_apply(collection, lambda rows: rows + [row])
        self._publish(collection, lambda records: records + [record])
        return ServiceResult.ok(record, metadata=remote.sync_metadata())

    def update(self, collection: str, record_id: str, patch: Mapping[str, Any]) -> ServiceResult:
        """
        Apply a partial update, locally first, then best-effort to the remote.

        Raises:
            DataValidationError: the patched record is invalid
        """
        collection = self._list_collection(collection)
        record_id = str(record_id)
        current = self._snapshot.find(collection, record_id)
        if current is None:
            return ServiceResult.fail(
                f"No {collection} record with id {record_id}",
                error_code="NOT_FOUND",
            )

        patch = {k: v for k, v in dict(patch).items() if k != "id"}
        updated = current.merged(patch)
        updated.validate()
        self._replace_record(collection, updated)

        full = updated.to_dict()
        wire = {k: full[k] for k in patch if k in full}
        remote = self.call_remote(self._remote.update, collection, record_id, wire)

        if remote.success:
            try:
                confirmed = RECORD_TYPES[collection].from_dict(remote.data)
            except DataValidationError as e:
                self.logger.warning(f"Ignoring unusable row returned by update: {e.message}")
            else:
                if confirmed != updated:
                    updated = confirmed
                    self._replace_record(collection, updated)

        return ServiceResult.ok(updated, metadata=remote.sync_metadata())

    def _replace_record(self, collection: str, record: Record) -> None:
        row = record.to_dict()
        self._mirror_apply(
            collection,
            lambda rows: [row if _row_id(r) == record.id else r for r in rows],
        )
        self._publish(
            collection,
            lambda records: [record if r.id == record.id else r for r in records],
        )

    def delete(self, collection: str, record_id: str) -> ServiceResult:
        """
        Remove a record from the snapshot and the mirror, then from the remote.

        Deleting an id that is already gone changes nothing and does not
        contact the remote store; ``data`` is False in that case.
        """
        collection = self._list_collection(collection)
        record_id = str(record_id)
        present = self._snapshot.find(collection, record_id) is not None

        self._mirror_apply(collection, lambda rows: [r for r in rows if _row_id(r) != record_id])
        if not present:
            self.logger.debug(f"{collection} record {record_id} already removed")
            return ServiceResult.ok(False, metadata={"synced": False, "removed": False})

        self._publish(collection, lambda records: [r for r in records if r.id != record_id])
        remote = self.call_remote(self._remote.delete, collection, record_id)
        return ServiceResult.ok(True, metadata={**remote.sync_metadata(), "removed": True})

    # =========================================================================
    # EVENTS
    # =========================================================================

    def create_event(self, event: Mapping[str, Any]) -> ServiceResult:
        return self.create(EVENTS, event)

    def update_event(self, event_id: str, patch: Mapping[str, Any]) -> ServiceResult:
        return self.update(EVENTS, event_id, patch)

    def delete_event(self, event_id: str) -> ServiceResult:
        return self.delete(EVENTS, event_id)

    # =========================================================================
    # ARTWORKS
    # =========================================================================

    def create_artwork(self, artwork: Mapping[str, Any]) -> ServiceResult:
        return self.create(ARTWORKS, artwork)

    def update_artwork(self, artwork_id: str, patch: Mapping[str, Any]) -> ServiceResult:
        return self.update(ARTWORKS, artwork_id, patch)

    def delete_artwork(self, artwork_id: str) -> ServiceResult:
        return self.delete(ARTWORKS, artwork_id)

    def toggle_artwork_featured(self, artwork_id: str, featured: bool) -> ServiceResult:
        """Set the featured flag; repeating the same value is harmless."""
        return self.update(ARTWORKS, artwork_id, {"featured": bool(featured)})

    # =========================================================================
    # CAFE ITEMS
    # =========================================================================

    def create_cafe_item(self, item: Mapping[str, Any]) -> ServiceResult:
        return self.create(CAFE_ITEMS, item)

    def update_cafe_item(self, item_id: str, patch: Mapping[str, Any]) -> ServiceResult:
        return self.update(CAFE_ITEMS, item_id, patch)

    def delete_cafe_item(self, item_id: str) -> ServiceResult:
        return self.delete(CAFE_ITEMS, item_id)

    # =========================================================================
    # OPENING HOURS
    # =========================================================================

    def update_opening_hours(self, hours: Union[Hours, Mapping[str, Any]]) -> ServiceResult:
        """
        Replace the whole week's opening hours.

        The snapshot and the mirror take the new hours even when the remote
        write fails; opening hours are locally authoritative.

        Raises:
            DataValidationError: a weekday or a field is missing
        """
        if not isinstance(hours, Hours):
            hours = Hours.from_dict(hours)

        remote = self.call_remote(
            self._remote.upsert,
            HOURS,
            {"id": HOURS_ROW_ID, **hours.to_dict()},
        )
        self._mirror.write(HOURS, hours.to_dict())
        self._publish(HOURS, lambda _: hours)
        return ServiceResult.ok(hours, metadata=remote.sync_metadata())

    # =========================================================================
    # MAINTENANCE
    # =========================================================================

    def migrate_local_to_remote(self) -> ServiceResult:
        """Push mirror-only content to Supabase, then reload on success."""
        from venue_core.offline.migration import LocalMirrorMigrator

        result = LocalMirrorMigrator(self._remote, self._mirror).migrate()
        if result.success:
            self.refresh()
        return result

    def close(self) -> None:
        """End the context's lifetime: drop listeners and close the mirror."""
        self._listeners.clear()
        self._mirror.close()
        self.logger.info("Site data context closed")
