"""Core app configuration, security and database."""

from profilehub.core.config import get_settings, settings

__all__ = ["get_settings", "settings"]
