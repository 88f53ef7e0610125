# =============================================================================
# venue_core/data/snapshot.py
# Immutable view of all four collections
# =============================================================================

from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from typing import List, Union

import pandas as pd

from .default_data import default_artworks, default_cafe_items, default_events, default_hours
from .models import (
    HOURS,
    RECORD_TYPES,
    WEEKDAYS,
    Artwork,
    CafeItem,
    Event,
    Hours,
    Record,
    resolve_collection,
)


@dataclass(frozen=True)
class SiteSnapshot:
    """
    The current content of the site.

    A snapshot is never modified in place: the data context publishes a new
    one for every change, so a reader always sees a consistent set.
    """
    events: List[Event]
    artworks: List[Artwork]
    cafe_items: List[CafeItem]
    hours: Hours

    @classmethod
    def defaults(cls) -> SiteSnapshot:
        return cls(
            events=default_events(),
            artworks=default_artworks(),
            cafe_items=default_cafe_items(),
            hours=default_hours(),
        )

    def get(self, collection: str) -> Union[List[Record], Hours]:
        """Collection by name or alias ("cafeItems" works too)."""
        return getattr(self, resolve_collection(collection))

    def find(self, collection: str, record_id: str):
        """Record with ``record_id`` in a list collection, or None."""
        for record in self.get(collection):
            if record.id == str(record_id):
                return record
        return None

    def to_dataframe(self, collection: str) -> pd.DataFrame:
        """
        Tabular view of one collection, for admin tables.

        Opening hours become one row per weekday, indexed by day name.
        """
        collection = resolve_collection(collection)
        if collection == HOURS:
            rows = [{"day": day, **asdict(self.hours.day(day))} for day in WEEKDAYS]
            return pd.DataFrame(rows).set_index("day")

        columns = [f.name for f in fields(RECORD_TYPES[collection])]
        return pd.DataFrame(
            [record.to_dict() for record in self.get(collection)],
            columns=columns,
        )
