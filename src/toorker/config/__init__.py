"""Configuration helpers for the Toorker quick launcher."""

from .keybindings import DEFAULT_KEYBINDINGS, KeyBinding, KeyCombo, get_keybinding, parse_keybinding
from .settings import APP_NAME, Settings, SettingsManager

__all__ = [
    "APP_NAME",
    "DEFAULT_KEYBINDINGS",
    "KeyBinding",
    "KeyCombo",
    "Settings",
    "SettingsManager",
    "get_keybinding",
    "parse_keybinding",
]
