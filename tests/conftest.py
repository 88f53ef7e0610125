# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

from typing import Dict, List
from unittest.mock import MagicMock

import pytest

from venue_core.data.models import ARTWORKS, CAFE_ITEMS, EVENTS, HOURS, HOURS_ROW_ID
from venue_core.offline.local_mirror import LocalMirror
from venue_core.offline.site_data_context import SiteDataContext

from tests.helpers import (
    FakeRemoteStore,
    make_artwork,
    make_cafe_item,
    make_event,
    make_hours,
)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_events() -> List[Dict]:
    return [make_event("1", "Summer Salon"), make_event("2", "Ink Workshop")]


@pytest.fixture
def sample_artworks() -> List[Dict]:
    return [make_artwork("1", "Harbour at Dusk", featured=True), make_artwork("2", "Still Life")]


@pytest.fixture
def sample_cafe_items() -> List[Dict]:
    return [make_cafe_item("1", "Cardamom Latte", category="drink", price=14)]


@pytest.fixture
def sample_hours() -> Dict:
    return make_hours()


# =============================================================================
# REMOTE STORE FIXTURES
# =============================================================================

@pytest.fixture
def remote() -> FakeRemoteStore:
    """Reachable remote store holding no rows"""
    return FakeRemoteStore()


@pytest.fixture
def offline_remote() -> FakeRemoteStore:
    """Remote store failing every call"""
    store = FakeRemoteStore()
    store.fail()
    return store


@pytest.fixture
def populated_remote(sample_events, sample_artworks, sample_cafe_items, sample_hours) -> FakeRemoteStore:
    return FakeRemoteStore({
        EVENTS: sample_events,
        ARTWORKS: sample_artworks,
        CAFE_ITEMS: sample_cafe_items,
        HOURS: [{"id": HOURS_ROW_ID, **sample_hours}],
    })


# =============================================================================
# LOCAL MIRROR FIXTURES
# =============================================================================

@pytest.fixture
def mirror(tmp_path):
    """File-backed mirror in a temporary directory"""
    store = LocalMirror(tmp_path / "mirror.db")
    yield store
    store.close()


@pytest.fixture
def unavailable_mirror() -> LocalMirror:
    return LocalMirror.unavailable()


@pytest.fixture
def make_site(mirror):
    """Factory building a SiteDataContext over the given remote"""
    def _make(remote, local=None, start: bool = True) -> SiteDataContext:
        site = SiteDataContext(remote, local if local is not None else mirror)
        if start:
            site.start()
        return site

    return _make


# =============================================================================
# MOCK FIXTURES
# =============================================================================

@pytest.fixture
def mock_streamlit(monkeypatch):
    """Mock Streamlit for the modules that render messages or use session state"""
    mock_st = MagicMock()
    mock_st.session_state = {}

    import venue_core.errors.handlers as handlers
    import venue_core.state.session as session

    monkeypatch.setattr(handlers, "st", mock_st)
    monkeypatch.setattr(session, "st", mock_st)
    return mock_st


@pytest.fixture
def mock_supabase():
    """Mock Supabase client"""
    mock_client = MagicMock()
    mock_client.table.return_value.select.return_value.execute.return_value.data = []
    mock_client.table.return_value.insert.return_value.execute.return_value = MagicMock()
    return mock_client
