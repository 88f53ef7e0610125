# =============================================================================
# venue_core/errors/exceptions.py
# Custom Exception Hierarchy for the Gallery Café site data layer
# =============================================================================

from typing import Optional, Dict, Any


class VenueDataError(Exception):
    """
    Base exception for all site data errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "REMOTE_001")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "VENUE_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# DATA LAYER EXCEPTIONS
# =============================================================================

class DataValidationError(VenueDataError):
    """Raised when a record fails validation checks"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        collection: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if collection:
            details["collection"] = collection

        super().__init__(
            message=message,
            code="DATA_001",
            details=details,
            **kwargs,
        )


# =============================================================================
# REMOTE STORE EXCEPTIONS
# =============================================================================

class RemoteStoreError(VenueDataError):
    """Base class for failures reported by the remote store client"""

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        operation: Optional[str] = None,
        code: str = "REMOTE_000",
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if collection:
            details["collection"] = collection
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            code=code,
            details=details,
            **kwargs,
        )


class RemoteUnavailable(RemoteStoreError):
    """Network, auth or backend outage: the request never got a usable answer"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="REMOTE_001", **kwargs)


class RemoteRejected(RemoteStoreError):
    """The backend answered but refused the request (constraint, bad payload)"""

    def __init__(self, message: str, remote_code: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if remote_code:
            details["remote_code"] = remote_code
        super().__init__(message, code="REMOTE_002", details=details, **kwargs)


# =============================================================================
# LOCAL MIRROR EXCEPTIONS
# =============================================================================

class LocalMirrorCorrupt(VenueDataError):
    """Raised when a stored mirror value cannot be parsed"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key

        super().__init__(
            message=message,
            code="MIRROR_001",
            details=details,
            **kwargs,
        )


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(VenueDataError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )
