"""Tests for preference stores and theme resolution."""
import json

import pytest

from echochat.preferences import (
    THEME_KEY,
    ThemeMode,
    create_preference_store,
    resolve_theme,
    toggle_theme,
)
from echochat.preferences.in_memory import InMemoryPreferenceStore
from echochat.preferences.json_file import JSONFilePreferenceStore


class TestFactory:
    """Tests for create_preference_store."""

    def test_memory_backend(self):
        """Test creating an in-memory store."""
        store = create_preference_store("memory")
        assert isinstance(store, InMemoryPreferenceStore)
        assert store.backend_type == "memory"

    def test_json_backend(self, tmp_path):
        """Test creating a JSON file store."""
        store = create_preference_store("json", path=tmp_path / "prefs.json")
        assert isinstance(store, JSONFilePreferenceStore)
        assert store.backend_type == "json"
        assert store.path == tmp_path / "prefs.json"

    def test_unknown_backend(self):
        """Test that unsupported backends raise."""
        with pytest.raises(ValueError, match="Unsupported preference backend"):
            create_preference_store("redis")


class TestInMemoryPreferenceStore:
    """Tests for InMemoryPreferenceStore."""

    def test_get_missing(self, memory_store):
        """Test that missing keys return None."""
        assert memory_store.get("anything") is None

    def test_set_and_get(self, memory_store):
        """Test storing a value."""
        memory_store.set("k", "v")
        assert memory_store.get("k") == "v"

    def test_initial_values_copied(self):
        """Test that initial values are not shared with the caller."""
        initial = {"k": "v"}
        store = InMemoryPreferenceStore(initial)
        store.set("k", "w")

        assert initial == {"k": "v"}


class TestJSONFilePreferenceStore:
    """Tests for JSONFilePreferenceStore."""

    def test_persists_across_instances(self, tmp_path):
        """Test that values survive a new store on the same file."""
        path = tmp_path / "nested" / "prefs.json"
        JSONFilePreferenceStore(path).set(THEME_KEY, "light")

        assert JSONFilePreferenceStore(path).get(THEME_KEY) == "light"
        assert json.loads(path.read_text()) == {THEME_KEY: "light"}

    def test_missing_file_is_empty(self, tmp_path):
        """Test that a missing file behaves like an empty store."""
        assert JSONFilePreferenceStore(tmp_path / "none.json").get(THEME_KEY) is None

    def test_corrupt_file_is_empty(self, tmp_path):
        """Test that unreadable JSON is ignored and reported."""
        path = tmp_path / "prefs.json"
        path.write_text("{not json")
        warnings = []
        store = JSONFilePreferenceStore(path)
        store.set_debug_callback(lambda level, component, msg: warnings.append((level, component)))

        assert store.get(THEME_KEY) is None
        assert warnings == [("warning", "Prefs")]

    def test_non_object_file_is_replaced(self, tmp_path):
        """Test that a JSON array is ignored and overwritten on set."""
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]")
        store = JSONFilePreferenceStore(path)

        store.set(THEME_KEY, "dark")

        assert json.loads(path.read_text()) == {THEME_KEY: "dark"}

    def test_set_keeps_other_keys(self, tmp_path):
        """Test that writing one key preserves the others."""
        path = tmp_path / "prefs.json"
        store = JSONFilePreferenceStore(path)
        store.set("a", "1")
        store.set("b", "2")

        assert store.get("a") == "1"
        assert store.get("b") == "2"


class TestTheme:
    """Tests for theme resolution and toggling."""

    def test_system_default_when_unset(self, memory_store):
        """Test falling back to the system theme."""
        assert resolve_theme(memory_store) == ThemeMode.DARK
        assert resolve_theme(memory_store, ThemeMode.LIGHT) == ThemeMode.LIGHT

    def test_stored_choice_wins(self, memory_store):
        """Test that a saved choice overrides the system theme."""
        memory_store.set(THEME_KEY, "light")
        assert resolve_theme(memory_store, ThemeMode.DARK) == ThemeMode.LIGHT

    def test_invalid_stored_value_ignored(self, memory_store):
        """Test that garbage in the store falls back to the system theme."""
        memory_store.set(THEME_KEY, "purple")
        assert resolve_theme(memory_store, ThemeMode.LIGHT) == ThemeMode.LIGHT

    def test_toggle_persists(self, memory_store):
        """Test that toggling flips and saves the theme."""
        assert toggle_theme(memory_store, ThemeMode.DARK) == ThemeMode.LIGHT
        assert memory_store.get(THEME_KEY) == "light"

        assert toggle_theme(memory_store, ThemeMode.LIGHT) == ThemeMode.DARK
        assert resolve_theme(memory_store, ThemeMode.LIGHT) == ThemeMode.DARK
