# =============================================================================
# venue_core/offline/migration.py
# Push locally stored content to Supabase
# =============================================================================
"""
LocalMirrorMigrator - one-shot upload of mirror content to the remote store.

Used after the site has run without Supabase (local ids only): each list
collection is inserted without its ids so the backend assigns real ones,
and the opening hours singleton is upserted. Rows whose content already
exists remotely are skipped, so running the migration twice does not
duplicate records.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List

from venue_core.data.models import HOURS, HOURS_ROW_ID, LIST_COLLECTIONS, RECORD_TYPES, Hours
from venue_core.data.supabase_client import RemoteStoreClient
from venue_core.errors import DataValidationError
from venue_core.services.base_service import BaseService, ServiceResult

from .local_mirror import LocalMirror


class LocalMirrorMigrator(BaseService):
    """
    Uploads the local mirror's collections to Supabase.

    Usage:
        result = LocalMirrorMigrator(remote, mirror).migrate()
        result.data["events"]   # {"inserted": 3, "skipped": 0}
    """

    def __init__(self, remote: RemoteStoreClient, mirror: LocalMirror):
        super().__init__()
        self.remote = remote
        self.mirror = mirror

    def migrate(self) -> ServiceResult:
        """
        Migrate every collection concurrently.

        Returns:
            ServiceResult whose data maps each collection to its outcome;
            success is False when any collection failed
        """
        with self.log_operation("Migrating local mirror to Supabase"):
            if not self.remote.is_connected():
                return ServiceResult.fail(
                    "Supabase is not configured",
                    error_code="REMOTE_001",
                )

            jobs = {name: self._migrate_collection for name in LIST_COLLECTIONS}
            jobs[HOURS] = self._migrate_hours

            with ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix="site-migrate") as pool:
                futures = {name: pool.submit(job, name) for name, job in jobs.items()}

            results: Dict[str, ServiceResult] = {}
            for name, future in futures.items():
                settled = self.settle(future)
                results[name] = settled.data if settled.success else settled

        summary = {
            name: result.data if result.success else {"error": result.error, "error_code": result.error_code}
            for name, result in results.items()
        }
        failed = [name for name, result in results.items() if not result.success]
        if failed:
            return ServiceResult(
                success=False,
                data=summary,
                error=f"Migration failed for: {', '.join(failed)}",
                error_code="MIGRATION_PARTIAL",
            )
        return ServiceResult.ok(summary)

    def _migrate_collection(self, collection: str) -> ServiceResult:
        stored = self.mirror.read(collection)
        if not stored:
            return ServiceResult.ok({"inserted": 0, "skipped": 0})

        record_type = RECORD_TYPES[collection]
        try:
            local = [record_type.from_dict(row) for row in stored]
        except DataValidationError as e:
            return ServiceResult.from_exception(e)

        remote_rows = self.remote.list(collection)
        existing = []
        for row in remote_rows:
            try:
                existing.append(record_type.from_dict(row).to_dict(include_id=False))
            except DataValidationError:
                continue

        pending: List[Dict[str, Any]] = []
        for record in local:
            content = record.to_dict(include_id=False)
            if content in existing or content in pending:
                continue
            pending.append(content)

        wire = [{k: v for k, v in row.items() if v is not None} for row in pending]
        inserted = self.remote.insert_many(collection, wire)

        # Replace local ids with the server's
        self.mirror.write(collection, list(remote_rows) + list(inserted))
        self.logger.info(f"{collection}: inserted {len(inserted)}, skipped {len(local) - len(pending)}")
        return ServiceResult.ok({"inserted": len(inserted), "skipped": len(local) - len(pending)})

    def _migrate_hours(self, collection: str = HOURS) -> ServiceResult:
        stored = self.mirror.read(HOURS)
        if stored is None:
            return ServiceResult.ok({"upserted": False})
        try:
            hours = Hours.from_dict(stored)
        except DataValidationError as e:
            return ServiceResult.from_exception(e)

        self.remote.upsert(HOURS, {"id": HOURS_ROW_ID, **hours.to_dict()})
        return ServiceResult.ok({"upserted": True})
