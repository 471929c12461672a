"""Preference storage module for echochat.

Provides an injected key-value store for UI preferences such as the theme.
"""

from .base import PreferenceStore
from .factory import create_preference_store
from .theme import THEME_KEY, ThemeMode, resolve_theme, toggle_theme

__all__ = [
    "THEME_KEY",
    "PreferenceStore",
    "ThemeMode",
    "create_preference_store",
    "resolve_theme",
    "toggle_theme",
]
