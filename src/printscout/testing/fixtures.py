"""Pytest fixtures for printscout tests.

Fixtures (use with pytest, e.g. ``pytest_plugins = ["printscout.testing.fixtures"]``):
    mock_fetcher: MockCapabilityFetcher with no responses.
    manual_lookup: ManualLookup driven by the test.
    recording_listener: RecordingListener.
    recording_callback: RecordingAddCallback.
    memory_store: Empty InMemoryRegistryStore.
"""

import pytest

from printscout.state.stores.memory import InMemoryRegistryStore
from printscout.testing.mocks import (
    ManualLookup,
    MockCapabilityFetcher,
    RecordingAddCallback,
    RecordingListener,
)


@pytest.fixture
def mock_fetcher() -> MockCapabilityFetcher:
    return MockCapabilityFetcher()


@pytest.fixture
def manual_lookup() -> ManualLookup:
    return ManualLookup()


@pytest.fixture
def recording_listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def recording_callback() -> RecordingAddCallback:
    return RecordingAddCallback()


@pytest.fixture
def memory_store() -> InMemoryRegistryStore:
    """Create an empty in-memory registry store, isolated per test."""
    return InMemoryRegistryStore()


__all__ = [
    "manual_lookup",
    "memory_store",
    "mock_fetcher",
    "recording_callback",
    "recording_listener",
]
