"""printscout testing utilities.

Modules:
    fixtures: Pytest fixtures (mock_fetcher, manual_lookup, recording_listener,
              recording_callback, memory_store).
    mocks: Mock capability fetcher and lookup, recording listener and callback.
"""

from printscout.testing.mocks import (
    LookupRequest,
    ManualLookup,
    MockCapabilityFetcher,
    RecordingAddCallback,
    RecordingListener,
)

__all__ = [
    "LookupRequest",
    "ManualLookup",
    "MockCapabilityFetcher",
    "RecordingAddCallback",
    "RecordingListener",
]
