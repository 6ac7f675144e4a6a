"""printscout discovery layer.

Manual discovery of network printers by hostname:
- registry: ordered, deduplicated, persisted list of manual endpoints
- probe: sequential capability probe over candidate paths
- manual: discovery session tying probes, registry and listener together

Public exports:
    ManualDiscovery: Discovery session for manually added printers
    EndpointRegistry: Manual endpoint registry
    ProbeSession: Path probe state machine
    IPP_PATHS: Candidate paths in probe order
    AddCallback, DiscoveryListener: Observer interfaces
"""

from printscout.discovery.listener import AddCallback, DiscoveryListener
from printscout.discovery.manual import ManualDiscovery
from printscout.discovery.probe import IPP_PATHS, ProbeSession
from printscout.discovery.registry import EndpointRegistry

__all__ = [
    "AddCallback",
    "DiscoveryListener",
    "EndpointRegistry",
    "IPP_PATHS",
    "ManualDiscovery",
    "ProbeSession",
]
