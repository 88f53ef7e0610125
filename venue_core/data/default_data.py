# =============================================================================
# venue_core/data/default_data.py
# Built-in content used when neither the remote store nor the mirror has data
# =============================================================================

from typing import Dict, List

from .models import (
    ARTWORKS,
    CAFE_ITEMS,
    EVENTS,
    HOURS,
    Artwork,
    CafeItem,
    Event,
    Hours,
)


_DEFAULT_EVENTS = [
    {
        "id": "1",
        "title": "Spring Exhibition Opening",
        "date": "2024-06-01",
        "time": "19:00 - 22:00",
        "description": "Join us for the opening night of our new spring exhibition featuring local artists.",
        "image": "/placeholder.svg?height=400&width=600&text=Spring+Exhibition",
        "type": "exhibition",
        "featured": True,
    },
    {
        "id": "2",
        "title": "Watercolor Workshop",
        "date": "2024-06-15",
        "time": "14:00 - 17:00",
        "description": "Learn watercolor techniques from professional artist Sara Ahmad.",
        "image": "/placeholder.svg?height=400&width=600&text=Watercolor+Workshop",
        "type": "workshop",
        "featured": False,
    },
    {
        "id": "3",
        "title": "Artist Talk: Modern Arabic Art",
        "date": "2024-06-22",
        "time": "18:00 - 20:00",
        "description": "A conversation with renowned artist Mohammed Al-Hawajri about contemporary Arabic art.",
        "image": "/placeholder.svg?height=400&width=600&text=Artist+Talk",
        "type": "talk",
        "featured": True,
    },
]

_DEFAULT_ARTWORKS = [
    {
        "id": "1",
        "title": "Desert Sunrise",
        "artist": "Ahmed Ali",
        "medium": "Oil on Canvas",
        "description": "A beautiful depiction of a desert sunrise with vibrant colors, "
                       "capturing the essence of the Arabian landscape at dawn.",
        "image": "/placeholder.svg?height=600&width=800&text=Desert+Sunrise",
        "featured": True,
    },
    {
        "id": "2",
        "title": "Urban Life",
        "artist": "Sara Johnson",
        "medium": "Mixed Media",
        "description": "A portrayal of modern urban life in Arab cities and its complexities, "
                       "blending traditional elements with contemporary themes.",
        "image": "/placeholder.svg?height=600&width=800&text=Urban+Life",
        "featured": True,
    },
]

_DEFAULT_CAFE_ITEMS = [
    {
        "id": "1",
        "name": "Arabic Coffee",
        "category": "drink",
        "price": 15,
        "description": "Traditional Arabic coffee with cardamom, served in a small cup.",
    },
    {
        "id": "2",
        "name": "Date Muffin",
        "category": "food",
        "price": 12,
        "description": "Freshly baked muffins made with locally sourced dates and walnuts.",
    },
    {
        "id": "3",
        "name": "Espresso",
        "category": "drink",
        "price": 10,
        "description": "Rich espresso made with our special blend of locally roasted beans.",
    },
    {
        "id": "4",
        "name": "Za'atar Manakish",
        "category": "food",
        "price": 18,
        "description": "Traditional flatbread topped with za'atar spice blend and olive oil.",
    },
    {
        "id": "5",
        "name": "Kunafa",
        "category": "dessert",
        "price": 20,
        "description": "Traditional Middle Eastern dessert made with thin noodle-like pastry, "
                       "soaked in sweet syrup.",
    },
]

_DEFAULT_HOURS = {
    "sunday": {"open": "10:00 AM", "close": "6:00 PM", "closed": False},
    "monday": {"open": "9:00 AM", "close": "5:00 PM", "closed": False},
    "tuesday": {"open": "9:00 AM", "close": "5:00 PM", "closed": False},
    "wednesday": {"open": "9:00 AM", "close": "5:00 PM", "closed": False},
    "thursday": {"open": "9:00 AM", "close": "5:00 PM", "closed": False},
    "friday": {"open": "9:00 AM", "close": "10:00 PM", "closed": False},
    "saturday": {"open": "10:00 AM", "close": "10:00 PM", "closed": False},
}


def default_events() -> List[Event]:
    return [Event.from_dict(row) for row in _DEFAULT_EVENTS]


def default_artworks() -> List[Artwork]:
    return [Artwork.from_dict(row) for row in _DEFAULT_ARTWORKS]


def default_cafe_items() -> List[CafeItem]:
    return [CafeItem.from_dict(row) for row in _DEFAULT_CAFE_ITEMS]


def default_hours() -> Hours:
    return Hours.from_dict(_DEFAULT_HOURS)


_FACTORIES = {
    EVENTS: default_events,
    ARTWORKS: default_artworks,
    CAFE_ITEMS: default_cafe_items,
    HOURS: default_hours,
}


def default_for(collection: str):
    """Fresh copy of the built-in content for ``collection``."""
    return _FACTORIES[collection]()


def default_collections() -> Dict[str, object]:
    return {name: factory() for name, factory in _FACTORIES.items()}
