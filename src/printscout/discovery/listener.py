"""Observer interfaces for manual discovery.

DiscoveryListener receives announcements while a discovery session is
started. AddCallback receives the single outcome of adding a hostname.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from printscout.models.entities import Endpoint


@runtime_checkable
class DiscoveryListener(Protocol):
    """Receives endpoint announcements while discovery is announcing."""

    def on_endpoint_found(self, endpoint: Endpoint) -> None:
        """An endpoint is available (announced at start, or newly added)."""
        ...

    def on_endpoint_lost(self, uri: str) -> None:
        """The endpoint at *uri* was removed or replaced."""
        ...


@runtime_checkable
class AddCallback(Protocol):
    """Receives the outcome of add_manual_endpoint(); exactly one method is called once."""

    def on_found(self, endpoint: Endpoint, supported: bool) -> None:
        """A printer answered at one of the candidate paths.

        Args:
            endpoint: Information about the discovered printer.
            supported: True if the printer is supported (and was therefore
                added), False if it was found but not supported (and was
                therefore not added).
        """
        ...

    def on_not_found(self) -> None:
        """No candidate path answered."""
        ...


__all__ = ["AddCallback", "DiscoveryListener"]
