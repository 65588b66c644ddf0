"""
Configuration package.

Exports the singleton settings instance for easy importing.

Usage:
    from emdb.config import settings

    print(settings.connection_url)
"""

from emdb.config.settings import Settings, settings, get_settings

__all__ = [
    "Settings",
    "settings",
    "get_settings",
]
