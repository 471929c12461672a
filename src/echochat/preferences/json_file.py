"""JSON file preference store.

Preferences are kept in a single JSON object on disk and rewritten on
every change. A missing or unreadable file behaves like an empty store.
"""

import json
from pathlib import Path

from .base import PreferenceStore

DEFAULT_PATH = Path.home() / ".echochat" / "preferences.json"


class JSONFilePreferenceStore(PreferenceStore):
    """Preferences persisted to a JSON file."""

    def __init__(self, path: str | Path | None = None):
        super().__init__()
        self._path = Path(path) if path else DEFAULT_PATH

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            self._debug("warning", f"Ignoring unreadable preferences file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            self._debug("warning", f"Ignoring non-object preferences file {self._path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self._debug("debug", f"Saved {key}={value} to {self._path}")

    @property
    def backend_type(self) -> str:
        return "json"
