"""
Site Configuration Manager
Resolves Supabase credentials, local mirror location and logging options
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import streamlit as st

from venue_core.errors import ConfigurationError


DEFAULT_MIRROR_PATH = Path(__file__).parent.parent.parent / "local_data" / "site_mirror.db"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass
class SiteConfig:
    """Configuration for the site data layer"""
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    mirror_enabled: bool = True
    mirror_path: Path = DEFAULT_MIRROR_PATH
    log_level: str = "INFO"
    log_to_file: bool = False

    @property
    def has_supabase(self) -> bool:
        """True when both the project URL and the anon key are known"""
        return bool(self.supabase_url and self.supabase_key)

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _read_secrets() -> Dict[str, Any]:
    """
    Load the relevant Streamlit secrets tables.

    Expected secrets.toml format:
    [supabase]
    url = "https://your-project.supabase.co"
    key = "your-anon-key"

    [site]
    mirror_path = "local_data/site_mirror.db"
    mirror_enabled = true
    log_level = "INFO"
    """
    secrets: Dict[str, Any] = {}
    try:
        if hasattr(st, "secrets"):
            for section in ("supabase", "site"):
                if section in st.secrets:
                    secrets[section] = dict(st.secrets[section])
    except Exception:
        # No secrets.toml, or running outside `streamlit run`
        return {}
    return secrets


def _as_bool(value: Any, config_key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise ConfigurationError(
        f"Invalid boolean value {value!r}",
        config_key=config_key,
        expected_type="bool",
    )


def load_site_config(
    secrets: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SiteConfig:
    """
    Build the site configuration.

    Precedence: Streamlit secrets, then environment variables, then defaults.
    Missing Supabase credentials are allowed; the remote store then reports
    itself unavailable and the site runs from the local mirror.

    Args:
        secrets: Secrets tables (defaults to st.secrets)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Resolved SiteConfig
    """
    secrets = _read_secrets() if secrets is None else secrets
    environ = os.environ if environ is None else environ

    supabase = dict(secrets.get("supabase", {}))
    site = dict(secrets.get("site", {}))

    url = (
        supabase.get("url")
        or environ.get("SUPABASE_URL")
        or environ.get("NEXT_PUBLIC_SUPABASE_URL")
    )
    key = (
        supabase.get("key")
        or environ.get("SUPABASE_KEY")
        or environ.get("NEXT_PUBLIC_SUPABASE_ANON_KEY")
    )

    mirror_path = site.get("mirror_path") or environ.get("VENUE_MIRROR_PATH")
    mirror_enabled = site.get("mirror_enabled", environ.get("VENUE_MIRROR_ENABLED", True))
    log_level = str(site.get("log_level") or environ.get("VENUE_LOG_LEVEL") or "INFO").upper()
    log_to_file = site.get("log_to_file", environ.get("VENUE_LOG_TO_FILE", False))

    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(
            f"Unknown log level {log_level!r}",
            config_key="log_level",
            expected_type="DEBUG|INFO|WARNING|ERROR|CRITICAL",
        )

    return SiteConfig(
        supabase_url=url or None,
        supabase_key=key or None,
        mirror_enabled=_as_bool(mirror_enabled, "mirror_enabled"),
        mirror_path=Path(mirror_path) if mirror_path else DEFAULT_MIRROR_PATH,
        log_level=log_level,
        log_to_file=_as_bool(log_to_file, "log_to_file"),
    )
