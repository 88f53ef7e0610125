# =============================================================================
# venue_core/offline/__init__.py
# Offline-tolerant data layer for the Gallery Café site
# =============================================================================
"""
Offline-Tolerant Site Data

The site renders whether or not Supabase is reachable. Every collection is
resolved remote first, then from the local mirror, then from built-in
defaults, and edits made while offline are kept locally.

Architecture:
------------
┌─────────────────────────────────────────────────────────────┐
│                      SiteDataContext                        │
│           (Single API - pages and admin use this)           │
└─────────────────────────────────────────────────────────────┘
              │                              │
              ▼                              ▼
   ┌───────────────────┐          ┌───────────────────┐
   │ RemoteStoreClient │          │    LocalMirror    │
   │    (Supabase)     │          │     (SQLite)      │
   └───────────────────┘          └───────────────────┘
              ▲                              │
              └──── LocalMirrorMigrator ─────┘

Usage:
------
from venue_core.offline import SiteDataContext

site = SiteDataContext.from_config(load_site_config())
site.start()
site.snapshot.artworks
site.update_opening_hours(new_hours)
"""

from venue_core.offline.local_mirror import (
    LocalMirror,
    MIRROR_KEYS,
)

from venue_core.offline.site_data_context import (
    SiteDataContext,
    CollectionState,
    DataSource,
)

from venue_core.offline.migration import LocalMirrorMigrator

__all__ = [
    # Local Mirror
    "LocalMirror",
    "MIRROR_KEYS",
    # Reconciliation (Main API)
    "SiteDataContext",
    "CollectionState",
    "DataSource",
    # Maintenance
    "LocalMirrorMigrator",
]
