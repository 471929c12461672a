"""Factory for creating preference stores."""

from typing import Any

from .base import PreferenceStore


def create_preference_store(
    backend: str = "json",
    **kwargs: Any
) -> PreferenceStore:
    """Create a preference store.

    Args:
        backend: Backend type ("memory" or "json")
        **kwargs: Backend-specific configuration

    Returns:
        PreferenceStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryPreferenceStore
        return InMemoryPreferenceStore(**kwargs)

    elif backend == "json":
        from .json_file import JSONFilePreferenceStore
        return JSONFilePreferenceStore(**kwargs)

    raise ValueError(
        f"Unsupported preference backend: {backend}. "
        f"Supported backends: memory, json"
    )
