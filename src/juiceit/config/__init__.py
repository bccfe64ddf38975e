"""Configuration module."""

from juiceit.config.options import RipOptions, resolve_options
from juiceit.config.settings import Settings, get_settings

__all__ = ["RipOptions", "Settings", "get_settings", "resolve_options"]
