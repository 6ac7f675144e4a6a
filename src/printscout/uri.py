"""URI helpers for manual print endpoint discovery.

Repairs user-supplied hostnames into a base URI, builds candidate URIs from
path suffixes, and normalizes endpoint URIs so that they always carry an
explicit port.

Example:
    >>> build_base_uri("printer.local")
    'ipp://printer.local:631'
    >>> join_path("ipp://printer.local:631", "ipp/print")
    'ipp://printer.local:631/ipp/print'
    >>> normalize_uri("printer.local/ipp/printer")
    'ipp://printer.local:631/ipp/printer'
"""

from __future__ import annotations

from urllib.parse import SplitResult, urlsplit, urlunsplit

from printscout.errors import InvalidEndpointURIError, InvalidHostnameError

DEFAULT_SCHEME = "ipp"
"""Scheme used for base URIs and for capability paths that omit one."""

DEFAULT_PORT = 631
"""IPP port, used when neither the user nor the scheme supplies one."""

DEFAULT_PORTS: dict[str, int] = {
    "ipp": 631,
    "ipps": 631,
    "http": 80,
    "https": 443,
}

_SCHEME_SEPARATOR = "://"


def default_port_for(scheme: str) -> int:
    """Return the protocol default port for *scheme* (631 for unknown schemes)."""
    return DEFAULT_PORTS.get(scheme.lower(), DEFAULT_PORT)


def _format_host(host: str) -> str:
    """Bracket IPv6 literals for use in a URI authority."""
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


def _split(uri: str) -> SplitResult | None:
    try:
        parsed = urlsplit(uri)
        # Accessing .port validates it (non-numeric or out of range raises)
        parsed.port
    except ValueError:
        return None
    return parsed


def repair_hostname(hostname: str) -> tuple[str, int | None]:
    """Repair a user-supplied hostname into an authority host and optional port.

    Strips surrounding whitespace, a scheme the user may have typed, and
    anything after the first slash. Bare IPv6 literals are bracketed.

    Args:
        hostname: Hostname as typed by the user (e.g. "printer.local",
            "ipp://10.0.0.5:8631/", "fe80::1").

    Returns:
        Tuple of (host formatted for a URI authority, port or None).

    Raises:
        InvalidHostnameError: If no usable host remains after repair.
    """
    candidate = hostname.strip()
    if _SCHEME_SEPARATOR in candidate:
        candidate = candidate.split(_SCHEME_SEPARATOR, 1)[1]
    candidate = candidate.split("/", 1)[0]
    if not candidate:
        raise InvalidHostnameError(hostname, "empty hostname")
    if any(ch.isspace() for ch in candidate):
        raise InvalidHostnameError(hostname, "hostname contains whitespace")
    if candidate.count(":") >= 2 and not candidate.startswith("["):
        candidate = f"[{candidate}]"

    parsed = _split(f"//{candidate}")
    if parsed is None:
        raise InvalidHostnameError(hostname, "invalid port")
    if not parsed.hostname:
        raise InvalidHostnameError(hostname, "missing host")
    return _format_host(parsed.hostname), parsed.port


def build_base_uri(
    hostname: str,
    scheme: str = DEFAULT_SCHEME,
    port: int = DEFAULT_PORT,
) -> str:
    """Build the base URI probed for *hostname*.

    A port typed by the user wins over *port*.

    Raises:
        InvalidHostnameError: If the hostname cannot be repaired.
    """
    host, user_port = repair_hostname(hostname)
    return f"{scheme}://{host}:{user_port if user_port is not None else port}"


def join_path(base: str, path: str) -> str:
    """Append a candidate path suffix to a base URI. An empty suffix yields *base*."""
    if not path:
        return base
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def normalize_uri(uri: str, default_scheme: str = DEFAULT_SCHEME) -> str:
    """Normalize an endpoint URI so that it has a scheme and an explicit port.

    Capability documents may report their path without a scheme
    ("printer.local:631/ipp/printer"); those get *default_scheme*. A missing
    port is filled with the scheme's default. Scheme and host are lowercased.

    Raises:
        InvalidEndpointURIError: If the URI has no host or an invalid port.
    """
    text = uri.strip()
    if _SCHEME_SEPARATOR not in text:
        text = f"{default_scheme}{_SCHEME_SEPARATOR}{text}"
    parsed = _split(text)
    if parsed is None or not parsed.hostname or not parsed.scheme:
        raise InvalidEndpointURIError(uri)
    port = parsed.port if parsed.port is not None else default_port_for(parsed.scheme)
    userinfo, _, _ = parsed.netloc.rpartition("@")
    netloc = f"{_format_host(parsed.hostname)}:{port}"
    if userinfo:
        netloc = f"{userinfo}@{netloc}"
    return urlunsplit(parsed._replace(netloc=netloc))


def uri_host(uri: str) -> str:
    """Return the host of *uri* ("" when absent)."""
    parsed = _split(uri)
    return (parsed.hostname or "") if parsed is not None else ""


def uri_path(uri: str) -> str:
    """Return the path component of *uri*."""
    parsed = _split(uri)
    return parsed.path if parsed is not None else ""


__all__ = [
    "DEFAULT_PORT",
    "DEFAULT_PORTS",
    "DEFAULT_SCHEME",
    "build_base_uri",
    "default_port_for",
    "join_path",
    "normalize_uri",
    "repair_hostname",
    "uri_host",
    "uri_path",
]
