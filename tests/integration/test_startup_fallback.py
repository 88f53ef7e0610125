# =============================================================================
# tests/integration/test_startup_fallback.py
# Integration Tests: Supabase client + SQLite mirror + data context
# =============================================================================

from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from venue_core.data.supabase_client import RemoteStoreClient
from venue_core.offline.local_mirror import LocalMirror
from venue_core.offline.migration import LocalMirrorMigrator
from venue_core.offline.site_data_context import DataSource, SiteDataContext

from tests.helpers import FakeRemoteStore, make_cafe_item, make_event


def _table(rows=None, error=None):
    """Mock of one Supabase table answering select queries"""
    table = MagicMock()
    select = table.select.return_value
    for query in (select.order.return_value, select.eq.return_value):
        if error is not None:
            query.execute.side_effect = error
        else:
            query.execute.return_value = MagicMock(data=rows)
    return table


@pytest.fixture
def flaky_supabase():
    """events unreachable, artworks forbidden, cafe items fine, no hours row"""
    tables = {
        "events": _table(error=httpx.ConnectTimeout("timed out")),
        "artworks": _table(error=APIError({"message": "JWT expired", "code": "PGRST301"})),
        "cafe_items": _table(rows=[make_cafe_item("c1", "Saffron Tea", category="drink")]),
        "hours": _table(rows=[]),
    }
    client = MagicMock()
    client.table.side_effect = lambda name: tables[name]
    return client


class TestStartupFallback:

    def test_each_collection_resolved_independently(self, flaky_supabase, tmp_path):
        mirror = LocalMirror(tmp_path / "site.db")
        mirror.write("events", [make_event("1", "Remembered Salon")])

        with SiteDataContext(RemoteStoreClient(flaky_supabase), mirror) as site:
            assert site.source("events") is DataSource.MIRROR
            assert site.source("artworks") is DataSource.DEFAULTS
            assert site.source("cafe_items") is DataSource.REMOTE
            assert site.source("hours") is DataSource.DEFAULTS

            assert [e.title for e in site.snapshot.events] == ["Remembered Salon"]
            assert len(site.snapshot.artworks) == 2
            assert [c.name for c in site.snapshot.cafe_items] == ["Saffron Tea"]

    def test_restart_without_network_reuses_mirror(self, flaky_supabase, tmp_path):
        path = tmp_path / "site.db"
        with SiteDataContext(RemoteStoreClient(flaky_supabase), LocalMirror(path)) as online:
            first = online.snapshot

        with SiteDataContext(RemoteStoreClient(None), LocalMirror(path)) as offline:
            assert offline.source("cafe_items") is DataSource.MIRROR
            assert offline.snapshot == first

    def test_offline_edits_survive_restart_and_migrate(self, tmp_path):
        path = tmp_path / "site.db"
        with SiteDataContext(RemoteStoreClient(None), LocalMirror(path)) as offline:
            created = offline.create_event({"title": "Pop-up Market", "date": "2024-10-05", "time": "09:00"})
            offline.toggle_artwork_featured("2", False)

        assert created.data.id == "4"
        assert created.metadata["synced"] is False

        # Migrate before the first online start; an empty remote is authoritative
        remote = FakeRemoteStore()
        mirror = LocalMirror(path)
        result = LocalMirrorMigrator(remote, mirror).migrate()

        assert result.success
        assert result.data["events"] == {"inserted": 4, "skipped": 0}
        assert result.data["hours"] == {"upserted": True}

        with SiteDataContext(remote, mirror) as online:
            assert online.source("events") is DataSource.REMOTE
            assert "Pop-up Market" in [e.title for e in online.snapshot.events]
            assert all(e.id.startswith("srv-") for e in online.snapshot.events)
            urban_life = [a for a in online.snapshot.artworks if a.title == "Urban Life"][0]
            assert urban_life.featured is False
