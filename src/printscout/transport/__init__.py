"""Capability lookup collaborators for printscout.

Public exports:
    CapabilityLookup: Callback-driven lookup interface used by probe sessions
    CapabilityFetcher: Coroutine transport interface a lookup delegates to
    CapabilitiesCache: CapabilityLookup with a per-URI TTL/LRU cache
"""

from printscout.transport.cache import CapabilitiesCache
from printscout.transport.lookup import (
    CapabilitiesHandler,
    CapabilityFetcher,
    CapabilityLookup,
    SupportsClose,
    SupportsNetworkEviction,
)

__all__ = [
    "CapabilitiesCache",
    "CapabilitiesHandler",
    "CapabilityFetcher",
    "CapabilityLookup",
    "SupportsClose",
    "SupportsNetworkEviction",
]
