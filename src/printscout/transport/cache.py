"""Capabilities caching for printscout.

CapabilitiesCache sits between discovery and a CapabilityFetcher. It
implements the callback-driven CapabilityLookup interface on top of the
fetcher's coroutine, and caches positive results per URI with TTL
expiration and LRU eviction.

Requests run as tasks on the running asyncio loop; the handler is called
from the task's completion, never synchronously from request(). After
close(), pending and new requests are answered with None.
"""

from __future__ import annotations

import asyncio
import os
import time
from collections import OrderedDict
from threading import Lock
from typing import Optional

from printscout.models.entities import Capabilities, Endpoint
from printscout.observability.logging import get_logger
from printscout.transport.lookup import CapabilitiesHandler, CapabilityFetcher

logger = get_logger(__name__)

# Default TTL in seconds (5 minutes)
DEFAULT_TTL = 300.0

# Default max cache size (number of entries)
DEFAULT_MAX_SIZE = 64

PRINTSCOUT_CAPABILITIES_TTL_ENV = "PRINTSCOUT_CAPABILITIES_TTL"


def ttl_from_env() -> float:
    """Return the cache TTL from PRINTSCOUT_CAPABILITIES_TTL (or DEFAULT_TTL).

    Raises:
        ValueError: If the variable is set but is not a non-negative number.
    """
    raw = os.environ.get(PRINTSCOUT_CAPABILITIES_TTL_ENV, "").strip()
    if not raw:
        return DEFAULT_TTL
    ttl = float(raw)
    if ttl < 0:
        raise ValueError(f"{PRINTSCOUT_CAPABILITIES_TTL_ENV} must be >= 0, got {raw!r}")
    return ttl


class CacheEntry:
    """Cache entry with TTL expiration.

    Attributes:
        capabilities: Cached capabilities
        expires_at: Monotonic timestamp when the entry expires
    """

    def __init__(self, capabilities: Capabilities, ttl: float) -> None:
        self.capabilities = capabilities
        self.expires_at = time.monotonic() + ttl

    def is_expired(self) -> bool:
        return time.monotonic() >= self.expires_at


class CapabilitiesCache:
    """Capability lookup with a thread-safe in-memory LRU cache.

    Only successful lookups are cached; a URI that did not answer is asked
    again next time.

    Example:
        >>> cache = CapabilitiesCache(fetcher, default_ttl=300.0)
        >>> cache.request(endpoint, False, on_capabilities)  # inside a running loop
    """

    def __init__(
        self,
        fetcher: CapabilityFetcher,
        default_ttl: Optional[float] = None,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> None:
        self._fetcher = fetcher
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = Lock()
        self._default_ttl = ttl_from_env() if default_ttl is None else default_ttl
        self._max_size = max_size
        self._tasks: dict[asyncio.Task[Capabilities | None], CapabilitiesHandler] = {}
        self._closed = False

    def request(self, endpoint: Endpoint, refresh: bool, handler: CapabilitiesHandler) -> None:
        """Schedule a lookup for *endpoint*; *handler* is called once when it completes.

        Must be called with a running event loop. A closed cache answers None.
        """
        loop = asyncio.get_running_loop()
        if self._closed:
            loop.call_soon(handler, None)
            return
        task = loop.create_task(self._resolve(endpoint, refresh))
        self._tasks[task] = handler
        task.add_done_callback(self._deliver)

    async def _resolve(self, endpoint: Endpoint, refresh: bool) -> Capabilities | None:
        if not refresh:
            cached = self.get(endpoint.uri)
            if cached is not None:
                logger.debug("printscout.capabilities.cache_hit", uri=endpoint.uri)
                return cached

        try:
            capabilities = await self._fetcher.fetch(endpoint)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(
                "printscout.capabilities.fetch_failed",
                uri=endpoint.uri,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return None

        if capabilities is not None:
            self.set(endpoint.uri, capabilities)
        return capabilities

    def _deliver(self, task: asyncio.Task[Capabilities | None]) -> None:
        handler = self._tasks.pop(task, None)
        if handler is None:
            # Already answered by close()
            return
        handler(None if task.cancelled() else task.result())

    def get(self, uri: str) -> Optional[Capabilities]:
        with self._lock:
            entry = self._cache.get(uri)
            if entry is None:
                return None
            if entry.is_expired():
                del self._cache[uri]
                return None
            self._cache.move_to_end(uri)
            return entry.capabilities

    def set(self, uri: str, capabilities: Capabilities, ttl: Optional[float] = None) -> None:
        if ttl is None:
            ttl = self._default_ttl
        with self._lock:
            if uri in self._cache:
                del self._cache[uri]
            elif self._max_size > 0:
                while len(self._cache) >= self._max_size:
                    self._cache.popitem(last=False)
            self._cache[uri] = CacheEntry(capabilities, ttl)

    def invalidate(self, uri: str) -> None:
        with self._lock:
            self._cache.pop(uri, None)

    def evict_on_network_change(self, uri: str) -> None:
        """Drop the cached capabilities for *uri* so the printer is checked again."""
        self.invalidate(uri)

    def clear_all(self) -> None:
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def pending(self) -> int:
        """Number of lookups still in flight."""
        return len(self._tasks)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Cancel in-flight lookups and answer their handlers with None.

        Later requests are answered with None without fetching.
        """
        self._closed = True
        pending, self._tasks = self._tasks, {}
        for task, handler in pending.items():
            task.cancel()
            task.get_loop().call_soon(handler, None)


__all__ = [
    "DEFAULT_MAX_SIZE",
    "DEFAULT_TTL",
    "PRINTSCOUT_CAPABILITIES_TTL_ENV",
    "CacheEntry",
    "CapabilitiesCache",
    "ttl_from_env",
]
