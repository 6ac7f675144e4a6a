"""Tests for EndpointRegistry: ordering, deduplication, announcing and persistence."""

from __future__ import annotations

from pathlib import Path

from printscout.discovery.registry import EndpointRegistry
from printscout.errors import RegistrySaveError
from printscout.models.entities import Endpoint
from printscout.state import InMemoryRegistryStore, JSONFileRegistryStore
from printscout.testing import RecordingListener
from tests.factories import make_endpoint

A_URI = "ipp://a.local:631/ipp/print"
B_URI = "ipp://b.local:631/ipp/printer"
C_URI = "ipp://c.local:631/ipp"


class FailingStore(InMemoryRegistryStore):
    """Store whose save() always fails."""

    def save(self, endpoints) -> None:  # type: ignore[no-untyped-def]
        raise RegistrySaveError(self.location, "disk full")


class TestAdd:
    """Tests for EndpointRegistry.add."""

    def test_add_inserts_most_recent_first(self, memory_store: InMemoryRegistryStore) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI))
        registry.add(make_endpoint(B_URI))
        assert [e.uri for e in registry] == [B_URI, A_URI]

    def test_re_adding_same_uri_keeps_one_refreshed_entry(
        self, memory_store: InMemoryRegistryStore
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI, "Old"))
        registry.add(make_endpoint(B_URI))
        registry.add(make_endpoint(A_URI, "New"))

        assert [e.uri for e in registry] == [A_URI, B_URI]
        assert registry.endpoints[0].display_name == "New"
        assert len(registry) == 2

    def test_same_uri_with_and_without_default_port_is_one_entry(
        self, memory_store: InMemoryRegistryStore
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint("ipp://a.local/ipp/print"))
        registry.add(make_endpoint(A_URI))
        assert len(registry) == 1

    def test_host_case_does_not_create_a_second_entry(
        self, memory_store: InMemoryRegistryStore
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint("ipp://A.Local/ipp/print"))
        registry.add(make_endpoint("ipp://a.local:631/ipp/print"))
        registry.add(make_endpoint("ipp://A.LOCAL:631/ipp/print"))
        assert [e.uri for e in registry] == [A_URI]

    def test_add_not_announcing_is_silent(
        self, memory_store: InMemoryRegistryStore, recording_listener: RecordingListener
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.start_announcing(recording_listener)
        registry.stop_announcing()
        registry.add(make_endpoint(A_URI))
        assert recording_listener.events == []

    def test_add_while_announcing_signals_found(
        self, memory_store: InMemoryRegistryStore, recording_listener: RecordingListener
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.start_announcing(recording_listener)
        registry.add(make_endpoint(A_URI))
        assert recording_listener.events == [("found", A_URI)]

    def test_replacement_while_announcing_signals_lost_then_found(
        self, memory_store: InMemoryRegistryStore, recording_listener: RecordingListener
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI, "Old"))
        registry.start_announcing(recording_listener)
        registry.add(make_endpoint(A_URI, "New"))
        assert recording_listener.events == [("lost", A_URI), ("found", A_URI)]
        assert recording_listener.found[0].display_name == "New"

    def test_contains_and_find(self, memory_store: InMemoryRegistryStore) -> None:
        registry = EndpointRegistry(memory_store)
        endpoint = make_endpoint(A_URI)
        registry.add(endpoint)
        assert endpoint in registry
        assert make_endpoint(B_URI) not in registry
        assert "not an endpoint" not in registry
        assert registry.find(A_URI) == endpoint
        assert registry.find(B_URI) is None


class TestRemove:
    """Tests for EndpointRegistry.remove (matches on URI path)."""

    def test_remove_on_empty_registry_is_noop(self, memory_store: InMemoryRegistryStore) -> None:
        registry = EndpointRegistry(memory_store)
        assert registry.remove(make_endpoint(A_URI)) is None
        assert len(registry) == 0

    def test_remove_matches_path_component(self, memory_store: InMemoryRegistryStore) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI))
        registry.add(make_endpoint(B_URI))

        removed = registry.remove(make_endpoint("ipp://elsewhere.local:631/ipp/print"))

        assert removed is not None
        assert removed.uri == A_URI
        assert [e.uri for e in registry] == [B_URI]

    def test_remove_only_first_match(self, memory_store: InMemoryRegistryStore) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint("ipp://one.local:631/ipp/print"))
        registry.add(make_endpoint("ipp://two.local:631/ipp/print"))

        registry.remove(make_endpoint("ipp://one.local:631/ipp/print"))

        # Most recent entry with that path goes first
        assert [e.uri for e in registry] == ["ipp://one.local:631/ipp/print"]

    def test_remove_unmatched_path_is_noop(self, memory_store: InMemoryRegistryStore) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI))
        assert registry.remove(make_endpoint(C_URI)) is None
        assert len(registry) == 1

    def test_remove_while_announcing_signals_lost(
        self, memory_store: InMemoryRegistryStore, recording_listener: RecordingListener
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI))
        registry.start_announcing(recording_listener)
        registry.remove(make_endpoint(A_URI))
        assert recording_listener.events == [("lost", A_URI)]

    def test_remove_not_announcing_is_silent(
        self, memory_store: InMemoryRegistryStore, recording_listener: RecordingListener
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI))
        registry.remove(make_endpoint(A_URI))
        assert recording_listener.events == []


class TestPersistence:
    """Tests for EndpointRegistry.load / save."""

    def test_save_then_load_round_trips_order(
        self, memory_store: InMemoryRegistryStore, sample_endpoint: Endpoint
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI, "A"))
        registry.add(sample_endpoint)
        registry.add(make_endpoint(C_URI, "C"))
        assert registry.save() is True

        reloaded = EndpointRegistry(memory_store)
        assert reloaded.endpoints == registry.endpoints

    def test_round_trip_survives_repeated_restarts(self, tmp_path: Path) -> None:
        store = JSONFileRegistryStore(tmp_path / "ManualDiscovery.json")
        registry = EndpointRegistry(store)
        registry.add(make_endpoint(A_URI))
        registry.add(make_endpoint(B_URI))
        registry.save()

        for _ in range(3):
            registry = EndpointRegistry(JSONFileRegistryStore(tmp_path / "ManualDiscovery.json"))
            registry.save()

        assert [e.uri for e in registry] == [B_URI, A_URI]

    def test_load_deduplicates_stored_records(self) -> None:
        store = InMemoryRegistryStore(
            document=(
                '{"manualPrinters": ['
                f'{{"path": "{A_URI}", "name": "Newest"}},'
                f'{{"path": "{B_URI}", "name": "B"}},'
                f'{{"path": "{A_URI}", "name": "Stale"}}'
                "]}"
            )
        )
        registry = EndpointRegistry(store)
        assert [(e.uri, e.display_name) for e in registry] == [(A_URI, "Newest"), (B_URI, "B")]

    def test_corrupt_store_loads_empty(self) -> None:
        registry = EndpointRegistry(InMemoryRegistryStore(document="{{{{"))
        assert len(registry) == 0

    def test_missing_file_loads_empty(self, tmp_path: Path) -> None:
        registry = EndpointRegistry(JSONFileRegistryStore(tmp_path / "absent.json"))
        assert registry.endpoints == ()

    def test_partially_valid_document_keeps_valid_records(self) -> None:
        store = InMemoryRegistryStore(
            document=f'{{"manualPrinters": [{{"path": "{A_URI}"}}, {{"bogus": 1}}]}}'
        )
        assert [e.uri for e in EndpointRegistry(store)] == [A_URI]

    def test_save_failure_is_reported_not_raised(self) -> None:
        registry = EndpointRegistry(FailingStore())
        registry.add(make_endpoint(A_URI))
        assert registry.save() is False
        assert [e.uri for e in registry] == [A_URI]

    def test_autoload_disabled(self, memory_store: InMemoryRegistryStore) -> None:
        memory_store.save([make_endpoint(A_URI)])
        registry = EndpointRegistry(memory_store, autoload=False)
        assert len(registry) == 0
        assert registry.load() == 1

    def test_load_replaces_current_contents(self, memory_store: InMemoryRegistryStore) -> None:
        memory_store.save([make_endpoint(A_URI)])
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(B_URI))
        registry.load()
        assert [e.uri for e in registry] == [A_URI]

    def test_load_while_announcing_signals_found(
        self, memory_store: InMemoryRegistryStore, recording_listener: RecordingListener
    ) -> None:
        memory_store.save([make_endpoint(A_URI), make_endpoint(B_URI)])
        registry = EndpointRegistry(memory_store, autoload=False)
        registry.start_announcing(recording_listener)
        registry.load()
        assert recording_listener.events == [("found", B_URI), ("found", A_URI)]

    def test_load_while_announcing_signals_dropped_entries_lost(
        self, memory_store: InMemoryRegistryStore, recording_listener: RecordingListener
    ) -> None:
        registry = EndpointRegistry(memory_store)
        registry.add(make_endpoint(A_URI))
        registry.start_announcing(recording_listener)
        memory_store.save([make_endpoint(B_URI)])

        registry.load()

        assert recording_listener.events == [("lost", A_URI), ("found", B_URI)]
        assert [e.uri for e in registry] == [B_URI]

    def test_load_of_emptied_store_signals_lost(
        self, recording_listener: RecordingListener
    ) -> None:
        store = InMemoryRegistryStore()
        registry = EndpointRegistry(store)
        registry.add(make_endpoint(A_URI))
        registry.start_announcing(recording_listener)
        store.save([])
        registry.load()
        assert recording_listener.events == [("lost", A_URI)]

    def test_decoder_limits_load_empty(self) -> None:
        oversized = InMemoryRegistryStore(document='{"manualPrinters": [' + "9" * 5000 + "]}")
        nested = InMemoryRegistryStore(document="[" * 100_000 + "]" * 100_000)
        assert EndpointRegistry(oversized).endpoints == ()
        assert EndpointRegistry(nested).endpoints == ()
