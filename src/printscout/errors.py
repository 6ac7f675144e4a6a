"""printscout Error Taxonomy.

This module defines the error hierarchy for manual print endpoint
discovery, providing structured error handling with specific error codes
and context information.

Most of these errors never reach callers of the discovery session:
storage errors are raised by the state backends and caught at the registry
boundary, and hostname errors are converted to a "not found" outcome.
"""
from __future__ import annotations

from typing import Any


class PrintScoutError(Exception):
    """Base exception for all printscout errors.

    Attributes:
        code: Error code following the printscout:<area>/<reason> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidHostnameError(PrintScoutError):
    """Raised when a user-supplied hostname cannot be repaired into a base URI.

    Attributes:
        hostname: The hostname as supplied by the user
        reason: Why the hostname was rejected
    """

    def __init__(self, hostname: str, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Invalid hostname {hostname!r}: {reason}"
        super().__init__(
            code="printscout:probe/invalid_hostname",
            message=message,
            details={"hostname": hostname, "reason": reason, **(details or {})},
        )
        self.hostname = hostname
        self.reason = reason


class InvalidEndpointURIError(PrintScoutError):
    """Raised when an endpoint URI has no scheme or host."""

    def __init__(self, uri: str, details: dict[str, Any] | None = None) -> None:
        message = f"Endpoint URI must include a scheme and host: {uri!r}"
        super().__init__(
            code="printscout:endpoint/invalid_uri",
            message=message,
            details={"uri": uri, **(details or {})},
        )
        self.uri = uri


class ProbeStateError(PrintScoutError):
    """Raised when a probe session is driven from a state that does not allow it.

    This error occurs when start_next() is called while a request is still
    outstanding, or after the session reached a terminal state.

    Attributes:
        state: The current probe state
        operation: The attempted operation
    """

    def __init__(self, state: str, operation: str, details: dict[str, Any] | None = None) -> None:
        message = f"Cannot {operation} while probe is '{state}'"
        super().__init__(
            code="printscout:probe/invalid_state",
            message=message,
            details={"state": state, "operation": operation, **(details or {})},
        )
        self.state = state
        self.operation = operation


class RegistryStorageError(PrintScoutError):
    """Base class for persisted registry read/write failures."""

    def __init__(
        self,
        code: str,
        location: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=f"{reason} ({location})",
            details={"location": location, "reason": reason, **(details or {})},
        )
        self.location = location
        self.reason = reason


class RegistryLoadError(RegistryStorageError):
    """Raised by a registry store when persisted state cannot be read or parsed."""

    def __init__(self, location: str, reason: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("printscout:registry/load_failed", location, reason, details)


class RegistrySaveError(RegistryStorageError):
    """Raised by a registry store when persisted state cannot be written."""

    def __init__(self, location: str, reason: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("printscout:registry/save_failed", location, reason, details)


__all__ = [
    "InvalidEndpointURIError",
    "InvalidHostnameError",
    "PrintScoutError",
    "ProbeStateError",
    "RegistryLoadError",
    "RegistrySaveError",
    "RegistryStorageError",
]
