"""Configuration management for the text workbench."""

from .settings import PROVIDER_DEFAULTS
from .settings import Settings
from .settings import get_settings
from .settings import reset_settings

__all__ = ["PROVIDER_DEFAULTS", "Settings", "get_settings", "reset_settings"]
