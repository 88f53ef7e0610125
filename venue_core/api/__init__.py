"""
Configuration for the site data layer.
"""
from .config_manager import SiteConfig, load_site_config, DEFAULT_MIRROR_PATH

__all__ = ["SiteConfig", "load_site_config", "DEFAULT_MIRROR_PATH"]
