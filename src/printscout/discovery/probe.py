"""Path probe state machine for manual endpoint discovery.

A probe session takes a base URI built from a user-supplied hostname and
asks a capability lookup about each candidate path in turn, most specific
first. The first path that answers ends the session; when no path answers
the session ends as exhausted. At most one lookup is outstanding at a
time, and the caller's callback fires exactly once unless the session is
cancelled first.

Example:
    >>> session = ProbeSession("ipp://printer.local:631", lookup, registry, callback)
    >>> session.start_next()  # asks about ipp://printer.local:631/ipp/printer
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Sequence

from pydantic import ValidationError

from printscout.discovery.listener import AddCallback
from printscout.discovery.registry import EndpointRegistry
from printscout.errors import ProbeStateError
from printscout.models.entities import UNKNOWN_DISPLAY_NAME, Capabilities, Endpoint
from printscout.models.enums import ProbeState
from printscout.observability.logging import get_logger
from printscout.transport.lookup import CapabilityLookup
from printscout.uri import join_path

logger = get_logger(__name__)

IPP_PATHS: tuple[str, ...] = ("ipp/printer", "ipp/print", "ipp", "")
"""Likely paths at which a print service may be found, in probe order."""

ProbeDoneCallback = Callable[["ProbeSession"], None]


class ProbeSession:
    """Sequential capability probe over candidate paths for one base URI.

    Args:
        base_uri: Repaired base URI (scheme, host and port).
        lookup: Capability lookup used for every candidate.
        registry: Registry receiving the endpoint when a supported printer answers.
        callback: Receives the single outcome.
        paths: Candidate path suffixes in probe order.
    """

    def __init__(
        self,
        base_uri: str,
        lookup: CapabilityLookup,
        registry: EndpointRegistry,
        callback: AddCallback,
        paths: Sequence[str] = IPP_PATHS,
    ) -> None:
        self._base_uri = base_uri
        self._lookup = lookup
        self._registry = registry
        self._callback = callback
        self._paths: deque[str] = deque(paths)
        self._pending = False
        self._state = ProbeState.IDLE
        self._current_uri: str | None = None
        self._done_callbacks: list[ProbeDoneCallback] = []
        self._log = logger.bind(base_uri=base_uri)

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def state(self) -> ProbeState:
        return self._state

    @property
    def pending(self) -> bool:
        """True while a capability request is outstanding."""
        return self._pending

    @property
    def current_uri(self) -> str | None:
        """URI of the candidate most recently requested."""
        return self._current_uri

    @property
    def remaining_paths(self) -> tuple[str, ...]:
        return tuple(self._paths)

    def done(self) -> bool:
        return self._state.is_terminal()

    def add_done_callback(self, fn: ProbeDoneCallback) -> None:
        """Call *fn* with this session once it reaches a terminal state.

        Runs immediately if the session is already done. Unlike the add
        callback, done callbacks also run after cancel().
        """
        if self.done():
            fn(self)
        else:
            self._done_callbacks.append(fn)

    def start_next(self) -> None:
        """Request the next candidate path, or finish as exhausted if none remain.

        Raises:
            ProbeStateError: If a request is outstanding or the session is done.
        """
        if self.done():
            raise ProbeStateError(self._state.value, "start next candidate")
        if self._pending:
            raise ProbeStateError(self._state.value, "start next candidate with a request pending")

        if not self._paths:
            self._log.info("printscout.probe.exhausted")
            self._finish(ProbeState.EXHAUSTED)
            self._callback.on_not_found()
            return

        uri = join_path(self._base_uri, self._paths.popleft())
        candidate = Endpoint(identity=None, display_name=UNKNOWN_DISPLAY_NAME, uri=uri)
        self._current_uri = candidate.uri
        self._pending = True
        self._state = ProbeState.PROBING
        self._log.debug("printscout.probe.request", uri=candidate.uri)
        self._lookup.request(candidate, False, self.on_capabilities)

    def on_capabilities(self, capabilities: Capabilities | None) -> None:
        """Handle the lookup response for the outstanding candidate."""
        if self.done():
            self._log.debug("printscout.probe.response_dropped", state=self._state.value)
            return
        self._pending = False

        if capabilities is None:
            self._log.debug("printscout.probe.miss", uri=self._current_uri)
            self.start_next()
            return

        try:
            endpoint = Endpoint(
                identity=capabilities.uuid,
                uri=capabilities.path,
                display_name=capabilities.name or "",
                location=capabilities.location,
            )
        except ValidationError:
            self._log.warning(
                "printscout.probe.bad_capabilities_path",
                uri=self._current_uri,
                path=capabilities.path,
            )
            self.start_next()
            return

        supported = capabilities.is_supported
        self._log.info(
            "printscout.probe.found",
            uri=endpoint.uri,
            name=endpoint.display_name,
            supported=supported,
        )
        self._finish(ProbeState.FOUND)
        if supported:
            self._registry.add(endpoint)
        self._callback.on_found(endpoint, supported)

    def cancel(self) -> bool:
        """Stop probing; no outcome is reported afterwards.

        Returns:
            True if the session was cancelled, False if it had already finished.
        """
        if self.done():
            return False
        self._log.debug("printscout.probe.cancelled", pending=self._pending)
        self._pending = False
        self._paths.clear()
        self._finish(ProbeState.CANCELLED)
        return True

    def _finish(self, state: ProbeState) -> None:
        self._state = state
        callbacks, self._done_callbacks = self._done_callbacks, []
        for fn in callbacks:
            fn(self)


__all__ = ["IPP_PATHS", "ProbeSession"]
