"""printscout data models.

Public exports:
    Endpoint: Manually configured printer location
    Capabilities: Capability lookup result
    ProbeResult: Outcome of probing one hostname
    ProbeState: Probe session lifecycle states
    RegistryDocument: Persisted registry layout
"""

from printscout.models.base import PrintScoutBaseModel
from printscout.models.entities import (
    UNKNOWN_DISPLAY_NAME,
    Capabilities,
    Endpoint,
    ProbeResult,
    RegistryDocument,
)
from printscout.models.enums import ProbeState

__all__ = [
    "UNKNOWN_DISPLAY_NAME",
    "Capabilities",
    "Endpoint",
    "PrintScoutBaseModel",
    "ProbeResult",
    "ProbeState",
    "RegistryDocument",
]
