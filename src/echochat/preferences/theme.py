"""Theme preference.

The chosen theme ("light" or "dark") is stored under a single key. When
nothing valid is stored, the caller's system default wins.
"""

from enum import Enum

from .base import PreferenceStore

THEME_KEY = "chat_theme"


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


def resolve_theme(store: PreferenceStore, system_default: ThemeMode = ThemeMode.DARK) -> ThemeMode:
    """Return the stored theme, falling back to the system default."""
    stored = store.get(THEME_KEY)
    if stored in (ThemeMode.LIGHT.value, ThemeMode.DARK.value):
        return ThemeMode(stored)
    return system_default


def toggle_theme(store: PreferenceStore, current: ThemeMode) -> ThemeMode:
    """Flip the theme and persist the new choice.

    Returns:
        The new theme
    """
    new = ThemeMode.DARK if current == ThemeMode.LIGHT else ThemeMode.LIGHT
    store.set(THEME_KEY, new.value)
    return new
