"""printscout state persistence.

Stores for the manual endpoint registry, and the persisted document codec.
"""

from .store import RegistryStore, parse_registry_document, render_registry_document
from .stores import (
    InMemoryRegistryStore,
    JSONFileRegistryStore,
    create_registry_store,
    default_registry_path,
)

__all__ = [
    "InMemoryRegistryStore",
    "JSONFileRegistryStore",
    "RegistryStore",
    "create_registry_store",
    "default_registry_path",
    "parse_registry_document",
    "render_registry_document",
]
