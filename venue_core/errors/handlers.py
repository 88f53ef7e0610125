# =============================================================================
# venue_core/errors/handlers.py
# Error Handling Utilities for the Gallery Café site
# =============================================================================

from __future__ import annotations
import logging
from typing import Optional
import streamlit as st

from venue_core.logging import get_logger
from .exceptions import VenueDataError

logger = get_logger(__name__)


def handle_error(
    error: Exception,
    show_user_message: bool = True,
    log_error: bool = True,
    user_message: Optional[str] = None,
) -> None:
    """
    Centralized error handling function.

    Recoverable site errors are logged at WARNING, everything else at ERROR
    with the traceback attached.

    Args:
        error: The exception to handle
        show_user_message: Whether to display error to user via st.error
        log_error: Whether to log the error
        user_message: Custom message to show user (uses error message if None)
    """
    if isinstance(error, VenueDataError):
        message = user_message or error.message
        code = error.code
        details = error.details
        recoverable = error.recoverable
    else:
        message = user_message or str(error)
        code = "UNKNOWN"
        details = {}
        recoverable = False

    if log_error:
        level = logging.WARNING if recoverable else logging.ERROR
        logger.log(
            level,
            f"[{code}] {message}",
            extra={"details": details},
            exc_info=None if recoverable else error,
        )

    if show_user_message:
        if recoverable:
            st.error(f"Error: {message}")
        else:
            st.error(f"Critical Error: {message}. Please contact support.")

        if details and st.session_state.get("debug_mode", False):
            with st.expander("Error Details", expanded=False):
                st.json(details)
