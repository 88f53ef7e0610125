import streamlit as st

from venue_core.api.config_manager import SiteConfig, load_site_config
from venue_core.errors import DataValidationError, handle_error
from venue_core.logging import get_logger, setup_logging
from venue_core.offline.site_data_context import SiteDataContext

logger = get_logger(__name__)

# Session-state key holding the per-session data context
SITE_DATA_KEY = "site_data"

SESSION_DEFAULTS = {
    SITE_DATA_KEY: None,
    "debug_mode": False,
    "_logging_configured": False,
}


def init_state():
    """Initialize session state with defaults."""
    for k, v in SESSION_DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v


def get_site_data(config: SiteConfig = None) -> SiteDataContext:
    """
    Return this session's data context, creating and loading it on first use.
    """
    init_state()
    site = st.session_state[SITE_DATA_KEY]
    if site is not None:
        return site

    config = config or load_site_config()
    if not st.session_state["_logging_configured"]:
        setup_logging(level=config.log_level_value, log_to_file=config.log_to_file)
        st.session_state["_logging_configured"] = True

    site = SiteDataContext.from_config(config)
    site.start()
    st.session_state[SITE_DATA_KEY] = site
    return site


def close_site_data():
    """Close this session's data context; the shared Supabase client stays open."""
    site = st.session_state.get(SITE_DATA_KEY)
    if site is None:
        return
    site.close()
    st.session_state[SITE_DATA_KEY] = None


def run_mutation(fn, *args, **kwargs):
    """
    Run a data-context mutation from a form handler.

    Invalid input is reported to the user instead of raising; an edit kept
    only locally is flagged with a warning.
    """
    try:
        result = fn(*args, **kwargs)
    except DataValidationError as e:
        handle_error(e, user_message=f"Please check the form: {e.message}")
        return None

    if result and result.metadata and result.metadata.get("synced") is False and result.metadata.get("error_code"):
        st.warning("Saved on this device only; the online database could not be reached.")
    return result


def collection_frame(name: str):
    """DataFrame of a collection for admin tables."""
    return get_site_data().snapshot.to_dataframe(name)
