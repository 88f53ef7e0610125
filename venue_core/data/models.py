# =============================================================================
# venue_core/data/models.py
# Record types for the four site collections
# =============================================================================
"""
Typed records for events, artworks, café menu items and opening hours.

Optional fields carry explicit defaults that are resolved once in
``from_dict``; nothing downstream needs to check for missing keys. Field
names match the remote columns and the local mirror JSON unchanged.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, Union

from venue_core.errors import DataValidationError


# Collection identifiers
EVENTS = "events"
ARTWORKS = "artworks"
CAFE_ITEMS = "cafe_items"
HOURS = "hours"

LIST_COLLECTIONS: Tuple[str, ...] = (EVENTS, ARTWORKS, CAFE_ITEMS)
COLLECTIONS: Tuple[str, ...] = LIST_COLLECTIONS + (HOURS,)

# Alternative spellings used by the web front end and the local mirror
COLLECTION_ALIASES = {
    "cafeItems": CAFE_ITEMS,
    "cafe": CAFE_ITEMS,
    "openingHours": HOURS,
    "site_opening_hours": HOURS,
}

WEEKDAYS: Tuple[str, ...] = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

# Singleton id of the opening-hours row
HOURS_ROW_ID = "main"


def resolve_collection(name: str) -> str:
    """Map a collection name or alias to its canonical identifier."""
    canonical = COLLECTION_ALIASES.get(name, name)
    if canonical not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {name}")
    return canonical


def _text(data: Mapping[str, Any], key: str, collection: str, required: bool = False) -> str:
    if key not in data:
        if required:
            raise DataValidationError(f"Missing field '{key}'", field=key, collection=collection)
        return ""
    value = data[key]
    return "" if value is None else str(value)


def _optional_text(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _record_id(data: Mapping[str, Any], collection: str) -> str:
    value = data.get("id")
    if value is None or value == "":
        raise DataValidationError("Missing field 'id'", field="id", collection=collection)
    return str(value)


_TRUE_FLAGS = {"true", "1", "yes", "on"}
_FALSE_FLAGS = {"false", "0", "no", "off", ""}


def _flag(data: Mapping[str, Any], key: str, collection: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE_FLAGS | _FALSE_FLAGS:
        return value.strip().lower() in _TRUE_FLAGS
    raise DataValidationError(f"'{key}' must be a boolean", field=key, collection=collection)


class CafeCategory(str, Enum):
    """Menu sections of the café."""
    DRINK = "drink"
    FOOD = "food"
    DESSERT = "dessert"


class _Record:
    """Shared helpers for the list-collection records."""

    collection: ClassVar[str]
    required_fields: ClassVar[Tuple[str, ...]] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        raise NotImplementedError

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]):
        """Build an unsaved record (empty id) from caller-supplied fields."""
        return cls.from_dict({**payload, "id": "__new__"}).with_id("")

    def to_dict(self, include_id: bool = True) -> Dict[str, Any]:
        data = asdict(self)
        if not include_id:
            data.pop("id", None)
        return data

    def with_id(self, record_id: str):
        return replace(self, id=str(record_id))

    def merged(self, patch: Mapping[str, Any]):
        """Return a copy with ``patch`` applied; the id never changes."""
        data = {**self.to_dict(), **dict(patch), "id": self.id}
        return type(self).from_dict(data)

    def validate(self) -> None:
        """Check the fields a new record must carry."""
        for name in self.required_fields:
            if not str(getattr(self, name) or "").strip():
                raise DataValidationError(
                    f"'{name}' is required",
                    field=name,
                    collection=self.collection,
                )


@dataclass
class Event(_Record):
    id: str
    title: str
    date: str
    time: str
    description: str = ""
    image: str = ""
    type: Optional[str] = None
    featured: bool = False

    collection: ClassVar[str] = EVENTS
    required_fields: ClassVar[Tuple[str, ...]] = ("title", "date", "time")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Event:
        return cls(
            id=_record_id(data, EVENTS),
            title=_text(data, "title", EVENTS, required=True),
            date=_text(data, "date", EVENTS, required=True),
            time=_text(data, "time", EVENTS, required=True),
            description=_text(data, "description", EVENTS),
            image=_text(data, "image", EVENTS),
            type=_optional_text(data, "type"),
            featured=_flag(data, "featured", EVENTS),
        )


@dataclass
class Artwork(_Record):
    id: str
    title: str
    artist: str
    medium: Optional[str] = None
    description: str = ""
    image: str = ""
    featured: bool = False

    collection: ClassVar[str] = ARTWORKS
    required_fields: ClassVar[Tuple[str, ...]] = ("title", "artist")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Artwork:
        return cls(
            id=_record_id(data, ARTWORKS),
            title=_text(data, "title", ARTWORKS, required=True),
            artist=_text(data, "artist", ARTWORKS, required=True),
            medium=_optional_text(data, "medium"),
            description=_text(data, "description", ARTWORKS),
            image=_text(data, "image", ARTWORKS),
            featured=_flag(data, "featured", ARTWORKS),
        )


@dataclass
class CafeItem(_Record):
    id: str
    name: str
    description: str = ""
    price: float = 0.0
    category: CafeCategory = CafeCategory.DRINK
    image: Optional[str] = None

    collection: ClassVar[str] = CAFE_ITEMS
    required_fields: ClassVar[Tuple[str, ...]] = ("name",)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CafeItem:
        raw_price = data.get("price", 0)
        try:
            price = float(raw_price if raw_price is not None else 0)
        except (TypeError, ValueError):
            raise DataValidationError(
                f"Price must be numeric, got {raw_price!r}",
                field="price",
                collection=CAFE_ITEMS,
            )

        raw_category = data.get("category") or CafeCategory.DRINK.value
        try:
            category = CafeCategory(raw_category)
        except ValueError:
            raise DataValidationError(
                f"Unknown category {raw_category!r}",
                field="category",
                collection=CAFE_ITEMS,
            )

        return cls(
            id=_record_id(data, CAFE_ITEMS),
            name=_text(data, "name", CAFE_ITEMS, required=True),
            description=_text(data, "description", CAFE_ITEMS),
            price=price,
            category=category,
            image=_optional_text(data, "image"),
        )

    def to_dict(self, include_id: bool = True) -> Dict[str, Any]:
        data = super().to_dict(include_id=include_id)
        data["category"] = self.category.value
        return data

    def validate(self) -> None:
        super().validate()
        if self.price < 0:
            raise DataValidationError(
                "Price cannot be negative",
                field="price",
                collection=CAFE_ITEMS,
            )


@dataclass
class DayHours:
    open: str
    close: str
    closed: bool = False

    @classmethod
    def from_dict(cls, data: Any, day: str) -> DayHours:
        if not isinstance(data, Mapping):
            raise DataValidationError(f"Hours for {day} must be an object", field=day, collection=HOURS)
        missing = [name for name in ("open", "close", "closed") if name not in data]
        if missing:
            raise DataValidationError(
                f"Hours for {day} missing {', '.join(missing)}",
                field=day,
                collection=HOURS,
            )
        if not isinstance(data["closed"], bool):
            raise DataValidationError(f"'closed' for {day} must be a boolean", field=day, collection=HOURS)
        return cls(open=str(data["open"]), close=str(data["close"]), closed=data["closed"])


@dataclass
class Hours:
    """Weekly opening hours; every weekday is always present."""
    sunday: DayHours
    monday: DayHours
    tuesday: DayHours
    wednesday: DayHours
    thursday: DayHours
    friday: DayHours
    saturday: DayHours

    collection: ClassVar[str] = HOURS

    @classmethod
    def from_dict(cls, data: Any) -> Hours:
        if not isinstance(data, Mapping):
            raise DataValidationError("Opening hours must be an object", collection=HOURS)
        missing = [day for day in WEEKDAYS if day not in data]
        if missing:
            raise DataValidationError(
                f"Opening hours missing {', '.join(missing)}",
                collection=HOURS,
                details={"missing_days": missing},
            )
        return cls(**{day: DayHours.from_dict(data[day], day) for day in WEEKDAYS})

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {f.name: asdict(getattr(self, f.name)) for f in fields(self)}

    def day(self, name: str) -> DayHours:
        if name not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {name}")
        return getattr(self, name)


Record = Union[Event, Artwork, CafeItem]

RECORD_TYPES: Dict[str, Type[_Record]] = {
    EVENTS: Event,
    ARTWORKS: Artwork,
    CAFE_ITEMS: CafeItem,
}
