"""Capability lookup seams.

The core never talks to a printer itself. A capability lookup accepts a
provisional endpoint and later calls a handler with the printer's
capabilities, or with None when nothing answered at that URI. A
capability fetcher is the coroutine-style transport a lookup delegates to;
real deployments provide one that speaks IPP.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from printscout.models.entities import Capabilities, Endpoint

CapabilitiesHandler = Callable[[Capabilities | None], None]
"""Response handler: receives capabilities, or None for no/failed response."""


@runtime_checkable
class CapabilityLookup(Protocol):
    """Asynchronous, callback-driven capability lookup."""

    def request(self, endpoint: Endpoint, refresh: bool, handler: CapabilitiesHandler) -> None:
        """Look up capabilities for *endpoint* and call *handler* exactly once.

        Args:
            endpoint: Endpoint whose URI is queried.
            refresh: If True, bypass any cached result.
            handler: Called later with the capabilities or None.
        """
        ...


@runtime_checkable
class SupportsNetworkEviction(Protocol):
    """Lookups that cache per-address state and can drop it on demand."""

    def evict_on_network_change(self, uri: str) -> None:
        """Forget cached state for *uri* so the next request re-checks the printer."""
        ...


@runtime_checkable
class SupportsClose(Protocol):
    """Lookups that hold in-flight work and can be shut down."""

    def close(self) -> None:
        """Stop lookup work. Pending handlers still receive exactly one response."""
        ...


@runtime_checkable
class CapabilityFetcher(Protocol):
    """Transport that fetches a capability document for one endpoint."""

    async def fetch(self, endpoint: Endpoint) -> Capabilities | None:
        """Return capabilities for *endpoint*, or None if nothing answered."""
        ...


__all__ = [
    "CapabilitiesHandler",
    "CapabilityFetcher",
    "CapabilityLookup",
    "SupportsClose",
    "SupportsNetworkEviction",
]
