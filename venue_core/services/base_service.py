# =============================================================================
# venue_core/services/base_service.py
# Base Service Class with Common Functionality
# =============================================================================

from __future__ import annotations
from abc import ABC
from concurrent.futures import Future
from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass

from venue_core.logging import get_logger, LogContext
from venue_core.errors import RemoteStoreError, VenueDataError, handle_error


@dataclass
class ServiceResult:
    """
    Standard result container for service operations.

    Provides consistent structure for all service method returns.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, data: Any = None, metadata: Dict[str, Any] = None) -> ServiceResult:
        """Create a successful result"""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: str = "UNKNOWN",
        metadata: Dict[str, Any] = None
    ) -> ServiceResult:
        """Create a failed result"""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata,
        )

    @classmethod
    def from_exception(cls, e: Exception) -> ServiceResult:
        """Create a failed result from an exception"""
        if isinstance(e, VenueDataError):
            return cls(
                success=False,
                error=e.message,
                error_code=e.code,
                metadata=e.details,
            )
        return cls(
            success=False,
            error=str(e),
            error_code="EXCEPTION",
        )

    def sync_metadata(self) -> Dict[str, Any]:
        """
        Describe the outcome of a remote write for a locally applied change.

        Returns:
            {"synced": True}, or {"synced": False, "error_code", "error"}
        """
        if self.success:
            return {"synced": True}
        return {"synced": False, "error_code": self.error_code, "error": self.error}


class BaseService(ABC):
    """
    Abstract base class for the site data services.

    Provides common functionality:
    - Logging
    - Remote calls whose failures become results instead of exceptions

    Usage:
        class MyService(BaseService):
            def do_something(self) -> ServiceResult:
                with self.log_operation("Loading collections"):
                    return self.call_remote(self.remote.list, "events")
    """

    def __init__(self):
        self.logger = get_logger(f"venue_core.{self.__class__.__name__}")

    def log_operation(self, operation: str) -> LogContext:
        """
        Create a logging context for an operation.

        Usage:
            with self.log_operation("Loading collections"):
                ...
        """
        return LogContext(self.logger, operation)

    def call_remote(self, func: Callable[..., Any], *args) -> ServiceResult:
        """
        Run one remote store call.

        RemoteStoreError is logged and returned as a failed result; any other
        exception propagates.
        """
        try:
            return ServiceResult.ok(func(*args))
        except RemoteStoreError as e:
            handle_error(e, show_user_message=False)
            return ServiceResult.from_exception(e)

    def settle(self, future: Future) -> ServiceResult:
        """Same as call_remote, for a call that already ran on an executor."""
        error = future.exception()
        if error is None:
            return ServiceResult.ok(future.result())
        if isinstance(error, RemoteStoreError):
            handle_error(error, show_user_message=False)
            return ServiceResult.from_exception(error)
        raise error
