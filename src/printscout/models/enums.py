"""Enumerations for printscout."""

from enum import Enum


class ProbeState(str, Enum):
    """Lifecycle states of a path probe session.

    A probe starts IDLE, moves to PROBING while a capability request is
    outstanding, and ends in FOUND, EXHAUSTED or CANCELLED.

    Example:
        >>> ProbeState.EXHAUSTED.is_terminal()
        True
        >>> ProbeState.PROBING.is_terminal()
        False
    """

    IDLE = "idle"
    PROBING = "probing"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"

    @classmethod
    def terminal_states(cls) -> frozenset["ProbeState"]:
        return frozenset({cls.FOUND, cls.EXHAUSTED, cls.CANCELLED})

    def is_terminal(self) -> bool:
        """Check if this state ends the probe session."""
        return self in self.terminal_states()
