"""Shared pytest fixtures for printscout tests.

This module provides common fixtures used across multiple test modules,
reducing duplication and ensuring consistency in test data.
"""

from __future__ import annotations

import pytest

from printscout.models.entities import Capabilities, Endpoint

# Load printscout.testing fixtures (mock_fetcher, manual_lookup, recording_listener, ...)
pytest_plugins = ["printscout.testing.fixtures"]

PRINTER_HOST = "printer.local"
PRINTER_URI = "ipp://printer.local:631/ipp/printer"


@pytest.fixture(autouse=True)
def _isolate_storage(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep every test away from the user's real registry file."""
    monkeypatch.setenv("PRINTSCOUT_CACHE_DIR", str(tmp_path_factory.mktemp("printscout-cache")))
    monkeypatch.delenv("PRINTSCOUT_STORAGE_BACKEND", raising=False)
    monkeypatch.delenv("PRINTSCOUT_CAPABILITIES_TTL", raising=False)


@pytest.fixture
def sample_endpoint() -> Endpoint:
    """Create a sample supported endpoint for testing."""
    return Endpoint(
        identity="urn:uuid:0b6b5a0e-1c1f-4a40-9d43-7d1b6b0c9a11",
        display_name="Office Printer",
        uri=PRINTER_URI,
        location="2nd floor",
    )


@pytest.fixture
def supported_capabilities() -> Capabilities:
    """Capabilities of a supported printer answering at ipp/printer."""
    return Capabilities(
        path="printer.local:631/ipp/printer",
        uuid="urn:uuid:0b6b5a0e-1c1f-4a40-9d43-7d1b6b0c9a11",
        name="Office Printer",
        location="2nd floor",
        is_supported=True,
    )


@pytest.fixture
def unsupported_capabilities() -> Capabilities:
    """Capabilities of a printer that answers but cannot be used."""
    return Capabilities(
        path="ipp://printer.local:631/ipp/printer",
        name="Legacy Printer",
        is_supported=False,
    )

