"""Core entity models for manual print endpoint discovery.

- Endpoint: One manually configured printer reachable at a network location
- Capabilities: Result of a capability lookup against a candidate URI
- ProbeResult: Outcome of probing one hostname
- RegistryDocument: Persisted layout of the manual endpoint registry
"""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from printscout.errors import InvalidEndpointURIError
from printscout.models.base import PrintScoutBaseModel
from printscout.uri import normalize_uri, uri_host, uri_path

UNKNOWN_DISPLAY_NAME = "unknown"
"""Display name given to provisional endpoints while a path is probed."""


class Endpoint(PrintScoutBaseModel):
    """A printer reachable at a network location.

    The persisted field names (uuid, name, path, location) are kept as
    aliases; use ``model_dump(by_alias=True, exclude_none=True)`` to produce
    the stored record.

    Attributes:
        identity: Optional stable unique id (e.g. a urn:uuid token).
        uri: Scheme, host, explicit port and path used to reach the printer.
        display_name: Human-readable name; falls back to the URI host.
        location: Optional free-text location.

    Example:
        >>> Endpoint(uri="ipp://printer.local/ipp/print").uri
        'ipp://printer.local:631/ipp/print'
        >>> Endpoint(uri="ipp://printer.local/ipp/print").display_name
        'printer.local'
    """

    identity: str | None = Field(default=None, alias="uuid", description="Stable unique id")
    uri: str = Field(..., alias="path", description="URI including an explicit port")
    display_name: str = Field(default="", alias="name", description="Human-readable name")
    location: str | None = Field(default=None, description="Free-text location")

    @field_validator("identity")
    @classmethod
    def _empty_identity_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v

    @field_validator("uri")
    @classmethod
    def _normalize_uri(cls, v: str) -> str:
        try:
            return normalize_uri(v)
        except InvalidEndpointURIError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("display_name")
    @classmethod
    def _default_display_name(cls, v: str, info: ValidationInfo) -> str:
        if v.strip():
            return v
        uri = info.data.get("uri")
        return uri_host(uri) if uri else v

    @property
    def path(self) -> str:
        """Path component of the URI, used for removal matching."""
        return uri_path(self.uri)

    @property
    def host(self) -> str:
        return uri_host(self.uri)

    def to_record(self) -> dict[str, Any]:
        """Return the persisted JSON record for this endpoint."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Capabilities(PrintScoutBaseModel):
    """Capability lookup result for one candidate URI.

    Attributes:
        path: Resolved printer URI; may omit the scheme or port.
        uuid: Optional stable identity token reported by the printer.
        name: Optional display name reported by the printer.
        location: Optional location text reported by the printer.
        is_supported: Whether this printer can be used.
    """

    path: str = Field(..., description="Resolved printer URI")
    uuid: str | None = Field(default=None, description="Stable identity token")
    name: str | None = Field(default=None, description="Printer display name")
    location: str | None = Field(default=None, description="Printer location")
    is_supported: bool = Field(default=False, description="Whether the printer is supported")


class ProbeResult(PrintScoutBaseModel):
    """Outcome of probing one hostname.

    ``endpoint`` is None when no candidate path answered. When an endpoint
    was found, ``supported`` tells whether it was added to the registry.
    """

    endpoint: Endpoint | None = None
    supported: bool = False

    @property
    def found(self) -> bool:
        return self.endpoint is not None


class RegistryDocument(PrintScoutBaseModel):
    """Persisted registry layout: ``{"manualPrinters": [...]}``, most recent first."""

    manual_printers: list[Endpoint] = Field(
        default_factory=list,
        alias="manualPrinters",
        description="Manually added endpoints, most recently added first",
    )
