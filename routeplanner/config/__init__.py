"""
Route planner configuration
Handles YAML/JSON settings files and the static map style
"""

from .models import ConfigFormat, IconSpec, MapStyle, Settings
from .parser import API_KEY_ENV, SettingsParser, load_settings

__all__ = [
    "ConfigFormat",
    "IconSpec",
    "MapStyle",
    "Settings",
    "SettingsParser",
    "API_KEY_ENV",
    "load_settings",
]
