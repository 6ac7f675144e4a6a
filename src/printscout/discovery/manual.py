"""Manual discovery session.

ManualDiscovery manages the printers a user added by hostname. It owns the
endpoint registry, starts probe sessions for new hostnames, and announces
registry contents to a listener between start() and stop(). close() saves
the registry and abandons any probe still running.

Example:
    >>> discovery = ManualDiscovery(CapabilitiesCache(fetcher), listener=ui)
    >>> discovery.start()
    >>> result = await discovery.add_manual_endpoint_async("printer.local")
    >>> result.supported
    True
    >>> discovery.close()
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from types import TracebackType

from printscout.discovery.listener import AddCallback, DiscoveryListener
from printscout.discovery.probe import IPP_PATHS, ProbeSession
from printscout.discovery.registry import EndpointRegistry
from printscout.errors import InvalidHostnameError
from printscout.models.entities import Endpoint, ProbeResult
from printscout.models.enums import ProbeState
from printscout.observability.logging import get_logger
from printscout.state.store import RegistryStore
from printscout.state.stores import create_registry_store
from printscout.transport.lookup import CapabilityLookup, SupportsClose, SupportsNetworkEviction
from printscout.uri import build_base_uri

logger = get_logger(__name__)


class _FutureCallback:
    """AddCallback that resolves an asyncio future with a ProbeResult."""

    def __init__(self, future: asyncio.Future[ProbeResult]) -> None:
        self._future = future

    def on_found(self, endpoint: Endpoint, supported: bool) -> None:
        if not self._future.done():
            self._future.set_result(ProbeResult(endpoint=endpoint, supported=supported))

    def on_not_found(self) -> None:
        if not self._future.done():
            self._future.set_result(ProbeResult())


class ManualDiscovery:
    """Discovery source for printers added manually by hostname.

    Args:
        lookup: Capability lookup used by probe sessions. If it also supports
            ``evict_on_network_change``, cached state for each registered
            endpoint is dropped on start().
        store: Registry store; defaults to create_registry_store().
        listener: Receives announcements while started.
        paths: Candidate path suffixes tried for each hostname.
    """

    def __init__(
        self,
        lookup: CapabilityLookup,
        store: RegistryStore | None = None,
        *,
        listener: DiscoveryListener | None = None,
        paths: Sequence[str] = IPP_PATHS,
    ) -> None:
        self._lookup = lookup
        self._listener = listener
        self._paths = tuple(paths)
        self._registry = EndpointRegistry(store if store is not None else create_registry_store())
        self._probes: set[ProbeSession] = set()
        self._started = False
        self._closed = False
        logger.debug("printscout.discovery.created", count=len(self._registry))

    @property
    def registry(self) -> EndpointRegistry:
        return self._registry

    @property
    def endpoints(self) -> tuple[Endpoint, ...]:
        """Manual endpoints, most recently added first."""
        return self._registry.endpoints

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active_probes(self) -> int:
        return len(self._probes)

    def start(self) -> None:
        """Begin announcing: report every registered endpoint, then future changes."""
        if self._started:
            return
        logger.debug("printscout.discovery.start")
        self._started = True
        self._registry.start_announcing(self._listener)
        for endpoint in self._registry.endpoints:
            if isinstance(self._lookup, SupportsNetworkEviction):
                self._lookup.evict_on_network_change(endpoint.uri)
            if self._listener is not None:
                self._listener.on_endpoint_found(endpoint)

    def stop(self) -> None:
        """Stop announcing until the next start()."""
        if not self._started:
            return
        logger.debug("printscout.discovery.stop")
        self._started = False
        self._registry.stop_announcing()

    def close(self) -> None:
        """Stop, abandon running probes and save the registry.

        Abandoned probes never call their callback. A lookup that supports
        close() is closed after the probes are cancelled.
        """
        if self._closed:
            return
        self._closed = True
        self.stop()
        for probe in list(self._probes):
            probe.cancel()
        self._probes.clear()
        if isinstance(self._lookup, SupportsClose):
            self._lookup.close()
        self._registry.save()

    def __enter__(self) -> ManualDiscovery:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def add_manual_endpoint(self, hostname: str, callback: AddCallback) -> ProbeSession | None:
        """Probe *hostname* for a printer and report the outcome to *callback*.

        A supported printer is added to the registry before callback.on_found
        fires. A hostname that cannot be repaired, or any hostname after
        close(), is reported as not found.

        Returns:
            The running probe session, or None if no probe was started.
        """
        if self._closed:
            logger.warning("printscout.discovery.add_after_close", hostname=hostname)
            callback.on_not_found()
            return None
        try:
            base_uri = build_base_uri(hostname)
        except InvalidHostnameError as exc:
            logger.warning(
                "printscout.discovery.invalid_hostname",
                hostname=hostname,
                reason=exc.reason,
            )
            callback.on_not_found()
            return None

        logger.info("printscout.discovery.add", hostname=hostname, base_uri=base_uri)
        probe = ProbeSession(base_uri, self._lookup, self._registry, callback, self._paths)
        self._probes.add(probe)
        probe.add_done_callback(self._probes.discard)
        probe.start_next()
        return probe

    async def add_manual_endpoint_async(self, hostname: str) -> ProbeResult:
        """Awaitable form of add_manual_endpoint().

        Raises:
            asyncio.CancelledError: If the session is closed before the probe finishes.
        """
        future: asyncio.Future[ProbeResult] = asyncio.get_running_loop().create_future()
        probe = self.add_manual_endpoint(hostname, _FutureCallback(future))
        if probe is not None:

            def _on_done(session: ProbeSession) -> None:
                if session.state is ProbeState.CANCELLED and not future.done():
                    future.cancel()

            probe.add_done_callback(_on_done)
        return await future

    def remove_manual_endpoint(self, endpoint: Endpoint) -> Endpoint | None:
        """Remove a manual endpoint (matched on URI path).

        Returns:
            The removed endpoint, or None if nothing matched.
        """
        return self._registry.remove(endpoint)


__all__ = ["ManualDiscovery"]
