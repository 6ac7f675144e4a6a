"""Registry of manually added print endpoints.

The registry is an ordered list, most recently added first, with at most
one entry per URI. It is loaded from a RegistryStore when constructed and
written back by save(). Storage failures are logged and never raised: the
in-memory list stays usable whatever happens on disk.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from printscout.discovery.listener import DiscoveryListener
from printscout.errors import RegistryStorageError
from printscout.models.entities import Endpoint
from printscout.observability.logging import get_logger
from printscout.state.store import RegistryStore

logger = get_logger(__name__)

_FOUND = "found"
_LOST = "lost"


class EndpointRegistry:
    """Ordered, deduplicated list of manual endpoints with persistence.

    While announcing, additions and removals are signalled to the listener.
    Signals are delivered after the internal lock is released, in the order
    the mutations happened.

    Args:
        store: Where the registry is loaded from and saved to.
        autoload: Load from *store* during construction (default True).

    Example:
        >>> registry = EndpointRegistry(InMemoryRegistryStore())
        >>> registry.add(Endpoint(uri="ipp://printer.local/ipp/print"))
        >>> [e.uri for e in registry]
        ['ipp://printer.local:631/ipp/print']
    """

    def __init__(self, store: RegistryStore, *, autoload: bool = True) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._endpoints: list[Endpoint] = []
        self._listener: DiscoveryListener | None = None
        self._announcing = False
        if autoload:
            self.load()

    @property
    def store(self) -> RegistryStore:
        return self._store

    @property
    def announcing(self) -> bool:
        with self._lock:
            return self._announcing

    @property
    def endpoints(self) -> tuple[Endpoint, ...]:
        """Snapshot of the registry, most recently added first."""
        with self._lock:
            return tuple(self._endpoints)

    def __len__(self) -> int:
        with self._lock:
            return len(self._endpoints)

    def __iter__(self) -> Iterator[Endpoint]:
        return iter(self.endpoints)

    def __contains__(self, endpoint: object) -> bool:
        if not isinstance(endpoint, Endpoint):
            return False
        return self.find(endpoint.uri) is not None

    def find(self, uri: str) -> Endpoint | None:
        """Return the entry with exactly this URI, or None."""
        with self._lock:
            for endpoint in self._endpoints:
                if endpoint.uri == uri:
                    return endpoint
            return None

    def start_announcing(self, listener: DiscoveryListener | None) -> None:
        """Signal future additions and removals to *listener*."""
        with self._lock:
            self._listener = listener
            self._announcing = True

    def stop_announcing(self) -> None:
        with self._lock:
            self._announcing = False
            self._listener = None

    def add(self, endpoint: Endpoint) -> None:
        """Insert *endpoint* at the front, replacing any entry with the same URI.

        Never fails. Re-adding a URI leaves one refreshed entry in first place.
        """
        with self._lock:
            signals = self._insert(endpoint)
            listener = self._listener
        self._dispatch(listener, signals)

    def remove(self, endpoint: Endpoint) -> Endpoint | None:
        """Remove the first entry whose URI path equals *endpoint*'s URI path.

        Returns:
            The removed entry, or None if nothing matched.
        """
        target_path = endpoint.path
        removed: Endpoint | None = None
        with self._lock:
            for index, existing in enumerate(self._endpoints):
                if existing.path == target_path:
                    removed = self._endpoints.pop(index)
                    break
            listener = self._listener
            announcing = self._announcing

        if removed is None:
            logger.debug("printscout.registry.remove_missed", path=target_path)
            return None
        logger.info("printscout.registry.removed", uri=removed.uri)
        if announcing:
            self._dispatch(listener, [(_LOST, removed)])
        return removed

    def load(self) -> int:
        """Rebuild the registry from the store.

        Stored records are replayed through the same insertion logic as
        add(). A missing store yields an empty registry; an unreadable or
        corrupt one is logged and also yields an empty registry. While
        announcing, entries held before the load are signalled lost.

        Returns:
            Number of endpoints in the registry after loading.
        """
        try:
            stored = self._store.load()
        except RegistryStorageError as exc:
            logger.warning(
                "printscout.registry.load_failed",
                location=exc.location,
                error_code=exc.code,
                reason=exc.reason,
            )
            stored = []

        signals: list[tuple[str, Endpoint]] = []
        with self._lock:
            if self._announcing:
                signals.extend((_LOST, existing) for existing in self._endpoints)
            self._endpoints.clear()
            # Insertion is at the front, so replay oldest first to keep stored order
            for endpoint in reversed(stored):
                signals.extend(self._insert(endpoint))
            count = len(self._endpoints)
            listener = self._listener
        self._dispatch(listener, signals)

        logger.debug("printscout.registry.loaded", location=self._store.location, count=count)
        return count

    def save(self) -> bool:
        """Write the registry to the store, replacing prior contents.

        Returns:
            True if the store accepted the write, False if it failed (logged).
        """
        snapshot = self.endpoints
        try:
            self._store.save(snapshot)
        except RegistryStorageError as exc:
            logger.warning(
                "printscout.registry.save_failed",
                location=exc.location,
                error_code=exc.code,
                reason=exc.reason,
                count=len(snapshot),
            )
            return False
        logger.debug("printscout.registry.saved", location=self._store.location, count=len(snapshot))
        return True

    def _insert(self, endpoint: Endpoint) -> list[tuple[str, Endpoint]]:
        """Insert under the lock; return the signals to dispatch."""
        signals: list[tuple[str, Endpoint]] = []
        kept: list[Endpoint] = []
        for existing in self._endpoints:
            if existing.uri == endpoint.uri:
                if self._announcing:
                    signals.append((_LOST, existing))
            else:
                kept.append(existing)
        kept.insert(0, endpoint)
        self._endpoints = kept
        if self._announcing:
            signals.append((_FOUND, endpoint))
        return signals

    @staticmethod
    def _dispatch(
        listener: DiscoveryListener | None, signals: list[tuple[str, Endpoint]]
    ) -> None:
        if listener is None:
            return
        for kind, endpoint in signals:
            if kind == _FOUND:
                listener.on_endpoint_found(endpoint)
            else:
                listener.on_endpoint_lost(endpoint.uri)


__all__ = ["EndpointRegistry"]
