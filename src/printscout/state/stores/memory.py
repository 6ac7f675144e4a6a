"""In-memory RegistryStore implementation.

Keeps the serialized document rather than the endpoint objects, so a
save/load cycle goes through the same codec as the JSON file store.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from printscout.models.entities import Endpoint
from printscout.state.store import parse_registry_document, render_registry_document

MEMORY_LOCATION = "memory://registry"


class InMemoryRegistryStore:
    """In-memory implementation of RegistryStore.

    Useful for testing and for processes that do not need manual endpoints
    to survive a restart. Thread-safe.

    Args:
        document: Optional initial raw document text (e.g. to simulate a
            corrupted file).
    """

    def __init__(self, document: str | None = None) -> None:
        self._lock = threading.Lock()
        self._document = document

    @property
    def location(self) -> str:
        return MEMORY_LOCATION

    @property
    def document(self) -> str | None:
        """Raw document text last saved, or None."""
        with self._lock:
            return self._document

    def load(self) -> list[Endpoint]:
        with self._lock:
            document = self._document
        if document is None:
            return []
        return parse_registry_document(document, self.location)

    def save(self, endpoints: Sequence[Endpoint]) -> None:
        rendered = render_registry_document(endpoints)
        with self._lock:
            self._document = rendered


__all__ = ["InMemoryRegistryStore", "MEMORY_LOCATION"]
