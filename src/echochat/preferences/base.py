"""Abstract base class for preference stores.

This module defines the interface for small key-value preferences
(such as the color theme). The abstraction hides:
- Storage format (JSON file, in-memory dict)
- Where the data lives on disk
"""

from abc import ABC, abstractmethod
from typing import Any


class PreferenceStore(ABC):
    """Abstract key-value preference store."""

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Prefs", message)

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a stored value, or None if missing."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
