"""In-memory preference store.

Simple dict-based storage. Data is lost when the application exits.
"""

from .base import PreferenceStore


class InMemoryPreferenceStore(PreferenceStore):
    """In-memory preferences (session-only).

    Suitable for single-session use or testing.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        super().__init__()
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    @property
    def backend_type(self) -> str:
        return "memory"
