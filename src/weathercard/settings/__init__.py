"""Application settings management.

This package provides:
- UserSettings: user-configurable settings loaded from config.yaml
- MapSettings / ServerSettings: nested sections for the map and local server
"""

from weathercard.settings.user import MapSettings, MarkerIcons, ServerSettings, UserSettings

__all__ = ["MapSettings", "MarkerIcons", "ServerSettings", "UserSettings"]
