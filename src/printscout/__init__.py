"""printscout: manual discovery of network print endpoints.

Add a printer by hostname: candidate IPP paths are probed in order through
a capability lookup, and supported printers are kept in a small registry
that survives restarts.

Example:
    >>> from printscout import CapabilitiesCache, ManualDiscovery
    >>> discovery = ManualDiscovery(CapabilitiesCache(fetcher))
    >>> result = await discovery.add_manual_endpoint_async("printer.local")
"""

__version__ = "0.1.0"

from printscout.discovery import (
    IPP_PATHS,
    AddCallback,
    DiscoveryListener,
    EndpointRegistry,
    ManualDiscovery,
    ProbeSession,
)
from printscout.errors import PrintScoutError
from printscout.models import Capabilities, Endpoint, ProbeResult, ProbeState
from printscout.transport import CapabilitiesCache, CapabilityFetcher, CapabilityLookup

__all__ = [
    "IPP_PATHS",
    "AddCallback",
    "Capabilities",
    "CapabilitiesCache",
    "CapabilityFetcher",
    "CapabilityLookup",
    "DiscoveryListener",
    "Endpoint",
    "EndpointRegistry",
    "ManualDiscovery",
    "PrintScoutError",
    "ProbeResult",
    "ProbeSession",
    "ProbeState",
    "__version__",
]
