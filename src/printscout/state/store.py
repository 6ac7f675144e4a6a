"""Registry store protocol and the persisted document codec.

A registry store holds the ordered list of manually added endpoints between
process runs. Stores raise RegistryLoadError / RegistrySaveError; the
registry catches them at its load and save boundary.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from printscout.errors import RegistryLoadError
from printscout.models.entities import Endpoint
from printscout.observability.logging import get_logger

logger = get_logger(__name__)

MANUAL_PRINTERS_KEY = "manualPrinters"
"""Top-level key of the persisted registry document."""


@runtime_checkable
class RegistryStore(Protocol):
    """Protocol for registry storage implementations.

    Implementations must preserve order: ``load()`` returns endpoints in the
    order they were passed to the last ``save()``.
    """

    @property
    def location(self) -> str:
        """Human-readable location of the persisted state, for diagnostics."""
        ...

    def load(self) -> list[Endpoint]:
        """Read the persisted endpoints.

        Returns:
            Stored endpoints, most recent first. Empty when nothing was saved.

        Raises:
            RegistryLoadError: If the persisted state cannot be read or parsed.
        """
        ...

    def save(self, endpoints: Sequence[Endpoint]) -> None:
        """Replace the persisted endpoints with *endpoints*.

        Raises:
            RegistrySaveError: If the state cannot be written.
        """
        ...


def render_registry_document(endpoints: Sequence[Endpoint]) -> str:
    """Serialize endpoints to the persisted JSON document."""
    document = {MANUAL_PRINTERS_KEY: [endpoint.to_record() for endpoint in endpoints]}
    return json.dumps(document, indent=2)


def parse_registry_document(text: str, location: str) -> list[Endpoint]:
    """Parse the persisted JSON document into endpoints.

    Records that fail validation are skipped with a warning; the remaining
    records are returned in stored order.

    Raises:
        RegistryLoadError: If the text is not JSON or lacks the
            ``manualPrinters`` array.
    """
    try:
        document: Any = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, oversized integer literals and deep nesting
        raise RegistryLoadError(location, f"invalid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise RegistryLoadError(location, "document is not a JSON object")
    records = document.get(MANUAL_PRINTERS_KEY, [])
    if not isinstance(records, list):
        raise RegistryLoadError(location, f"'{MANUAL_PRINTERS_KEY}' is not an array")

    endpoints: list[Endpoint] = []
    for index, record in enumerate(records):
        try:
            endpoints.append(Endpoint.model_validate(record))
        except ValidationError as exc:
            logger.warning(
                "printscout.store.record_skipped",
                location=location,
                index=index,
                errors=exc.error_count(),
            )
    return endpoints


__all__ = [
    "MANUAL_PRINTERS_KEY",
    "RegistryStore",
    "parse_registry_document",
    "render_registry_document",
]
