# =============================================================================
# venue_core/errors/__init__.py
# Centralized Error Handling for the Gallery Café site
# =============================================================================

from .exceptions import (
    VenueDataError,
    DataValidationError,
    RemoteStoreError,
    RemoteUnavailable,
    RemoteRejected,
    LocalMirrorCorrupt,
    ConfigurationError,
)

from .handlers import handle_error

__all__ = [
    # Exceptions
    "VenueDataError",
    "DataValidationError",
    "RemoteStoreError",
    "RemoteUnavailable",
    "RemoteRejected",
    "LocalMirrorCorrupt",
    "ConfigurationError",
    # Handlers
    "handle_error",
]
