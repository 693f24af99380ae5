"""Runtime configuration."""

from dealer_catalog.conf.config import Settings, get_settings, settings


__all__ = ["Settings", "get_settings", "settings"]
