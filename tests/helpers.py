# =============================================================================
# tests/helpers.py
# Row builders and an in-memory remote store shared by the test suites
# =============================================================================

import copy
import itertools
from typing import Dict, List, Optional

from venue_core.data.models import COLLECTIONS, HOURS, HOURS_ROW_ID
from venue_core.errors import RemoteRejected, RemoteUnavailable


# =============================================================================
# ROW BUILDERS
# =============================================================================

def make_event(record_id: str, title: Optional[str] = None, **extra) -> Dict:
    return {
        "id": record_id,
        "title": title or f"Event {record_id}",
        "date": "2024-07-01",
        "time": "18:00 - 20:00",
        "description": "Evening opening",
        "image": "",
        "type": "exhibition",
        "featured": False,
        **extra,
    }


def make_artwork(record_id: str, title: Optional[str] = None, **extra) -> Dict:
    return {
        "id": record_id,
        "title": title or f"Artwork {record_id}",
        "artist": "Layla Hassan",
        "medium": "Acrylic",
        "description": "",
        "image": "",
        "featured": False,
        **extra,
    }


def make_cafe_item(record_id: str, name: Optional[str] = None, **extra) -> Dict:
    return {
        "id": record_id,
        "name": name or f"Item {record_id}",
        "description": "",
        "price": 8.0,
        "category": "food",
        "image": None,
        **extra,
    }


def make_hours(open_time: str = "8:00 AM", close: str = "4:00 PM") -> Dict:
    week = {
        day: {"open": open_time, "close": close, "closed": False}
        for day in ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
    }
    week["monday"]["closed"] = True
    return week


# =============================================================================
# FAKE REMOTE STORE
# =============================================================================

class FakeRemoteStore:
    """
    In-memory stand-in for RemoteStoreClient.

    Server ids look like "srv-<n>". Failures are injected per
    (collection, operation); "*" matches any collection or operation.
    """

    def __init__(self, tables: Optional[Dict[str, List[Dict]]] = None):
        self.tables: Dict[str, List[Dict]] = {name: [] for name in COLLECTIONS}
        for name, rows in (tables or {}).items():
            self.tables[name] = copy.deepcopy(rows)
        self.failures: Dict[tuple, Exception] = {}
        self.calls: List[tuple] = []
        self.connected = True
        self._ids = itertools.count(1)

    def fail(self, collection: str = "*", operation: str = "*", error: Exception = None) -> None:
        self.failures[(collection, operation)] = error or RemoteUnavailable(
            "Connection refused", collection=collection, operation=operation
        )

    def recover(self) -> None:
        self.failures.clear()

    def calls_for(self, operation: str, collection: Optional[str] = None) -> List[tuple]:
        return [
            call for call in self.calls
            if call[0] == operation and (collection is None or call[1] == collection)
        ]

    def _check(self, collection: str, operation: str, *args) -> None:
        self.calls.append((operation, collection) + args)
        for key in ((collection, operation), (collection, "*"), ("*", operation), ("*", "*")):
            if key in self.failures:
                raise self.failures[key]

    def _new_id(self) -> str:
        return f"srv-{next(self._ids)}"

    def is_connected(self) -> bool:
        return self.connected

    def list(self, collection: str) -> List[Dict]:
        self._check(collection, "list")
        rows = self.tables[collection]
        if collection == HOURS:
            rows = [row for row in rows if row.get("id") == HOURS_ROW_ID]
        return copy.deepcopy(rows)

    def create(self, collection: str, record: Dict) -> Dict:
        self._check(collection, "create", dict(record))
        row = {**copy.deepcopy(record), "id": self._new_id()}
        self.tables[collection].append(row)
        return copy.deepcopy(row)

    def insert_many(self, collection: str, records: List[Dict]) -> List[Dict]:
        self._check(collection, "insert_many", [dict(r) for r in records])
        rows = [{**copy.deepcopy(r), "id": self._new_id()} for r in records]
        self.tables[collection].extend(rows)
        return copy.deepcopy(rows)

    def update(self, collection: str, record_id: str, patch: Dict) -> Dict:
        self._check(collection, "update", record_id, dict(patch))
        for row in self.tables[collection]:
            if str(row.get("id")) == str(record_id):
                row.update(copy.deepcopy(patch))
                return copy.deepcopy(row)
        raise RemoteRejected(f"No row returned for id {record_id}", collection=collection, operation="update")

    def upsert(self, collection: str, record: Dict) -> Dict:
        self._check(collection, "upsert", dict(record))
        rows = [row for row in self.tables[collection] if row.get("id") != record.get("id")]
        rows.append(copy.deepcopy(dict(record)))
        self.tables[collection] = rows
        return copy.deepcopy(dict(record))

    def delete(self, collection: str, record_id: str) -> bool:
        self._check(collection, "delete", record_id)
        self.tables[collection] = [
            row for row in self.tables[collection] if str(row.get("id")) != str(record_id)
        ]
        return True


