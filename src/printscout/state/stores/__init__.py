"""printscout registry storage backends.

This package provides RegistryStore implementations:
- InMemoryRegistryStore (from stores.memory)
- JSONFileRegistryStore (from stores.json_file)

Factory:
- create_registry_store() builds a RegistryStore from PRINTSCOUT_STORAGE_BACKEND
  and PRINTSCOUT_CACHE_DIR (default: json, ~/.cache/printscout).
"""

import os
from pathlib import Path

from printscout.state.store import RegistryStore
from printscout.state.stores.json_file import REGISTRY_FILENAME, JSONFileRegistryStore
from printscout.state.stores.memory import InMemoryRegistryStore

PRINTSCOUT_STORAGE_BACKEND_ENV = "PRINTSCOUT_STORAGE_BACKEND"
PRINTSCOUT_CACHE_DIR_ENV = "PRINTSCOUT_CACHE_DIR"
DEFAULT_CACHE_DIR = Path("~/.cache/printscout")


def default_registry_path() -> Path:
    """Return the JSON registry path from PRINTSCOUT_CACHE_DIR (or the default)."""
    cache_dir = os.environ.get(PRINTSCOUT_CACHE_DIR_ENV, "").strip()
    base = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
    return base.expanduser() / REGISTRY_FILENAME


def create_registry_store() -> RegistryStore:
    """Create a RegistryStore from environment.

    Reads PRINTSCOUT_STORAGE_BACKEND (default "json") and PRINTSCOUT_CACHE_DIR.
    Use "memory" for tests and "json" for state that survives restarts.

    Returns:
        Configured RegistryStore instance.

    Raises:
        ValueError: If PRINTSCOUT_STORAGE_BACKEND is not "json" or "memory".
    """
    backend = os.environ.get(PRINTSCOUT_STORAGE_BACKEND_ENV, "json").strip().lower()

    if backend == "memory":
        return InMemoryRegistryStore()
    if backend == "json":
        return JSONFileRegistryStore(default_registry_path())
    raise ValueError(
        f"Unknown {PRINTSCOUT_STORAGE_BACKEND_ENV}={backend!r}. Use 'json' or 'memory'."
    )


__all__ = [
    "DEFAULT_CACHE_DIR",
    "InMemoryRegistryStore",
    "JSONFileRegistryStore",
    "PRINTSCOUT_CACHE_DIR_ENV",
    "PRINTSCOUT_STORAGE_BACKEND_ENV",
    "create_registry_store",
    "default_registry_path",
]
