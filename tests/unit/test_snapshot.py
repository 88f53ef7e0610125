# =============================================================================
# tests/unit/test_snapshot.py
# Unit Tests for SiteSnapshot
# =============================================================================

from dataclasses import replace

from venue_core.data.models import WEEKDAYS
from venue_core.data.snapshot import SiteSnapshot


class TestSiteSnapshot:

    def test_defaults_are_complete(self):
        snapshot = SiteSnapshot.defaults()

        assert [e.id for e in snapshot.events] == ["1", "2", "3"]
        assert len(snapshot.artworks) == 2
        assert len(snapshot.cafe_items) == 5
        assert snapshot.hours.friday.close == "10:00 PM"

    def test_defaults_are_fresh_copies(self):
        first = SiteSnapshot.defaults()
        first.events[0].title = "Changed"

        assert SiteSnapshot.defaults().events[0].title == "Spring Exhibition Opening"

    def test_get_accepts_aliases(self):
        snapshot = SiteSnapshot.defaults()

        assert snapshot.get("cafeItems") is snapshot.cafe_items
        assert snapshot.get("openingHours") is snapshot.hours

    def test_find(self):
        snapshot = SiteSnapshot.defaults()

        assert snapshot.find("artworks", "2").title == "Urban Life"
        assert snapshot.find("artworks", "9") is None


class TestSnapshotDataFrames:

    def test_hours_frame_indexed_by_day(self):
        frame = SiteSnapshot.defaults().to_dataframe("hours")

        assert list(frame.index) == list(WEEKDAYS)
        assert list(frame.columns) == ["open", "close", "closed"]
        assert frame.loc["sunday", "open"] == "10:00 AM"

    def test_cafe_frame_uses_plain_categories(self):
        frame = SiteSnapshot.defaults().to_dataframe("cafe_items")

        assert list(frame.columns) == ["id", "name", "description", "price", "category", "image"]
        assert set(frame["category"]) == {"drink", "food", "dessert"}

    def test_empty_collection_keeps_columns(self):
        snapshot = replace(SiteSnapshot.defaults(), events=[])

        frame = snapshot.to_dataframe("events")

        assert frame.empty
        assert "title" in frame.columns
