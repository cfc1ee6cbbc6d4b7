"""Unit tests for the endpoint translation engine."""

import pytest

from conftest import DESTINATION, make_endpoint
from meshmirror.exceptions import ConfigurationError
from meshmirror.models.connections import ClusterNetworking, ConnectionRecord
from meshmirror.reflection.engine import (
    EndpointTranslationEngine,
    identity_translator,
    remote_endpoint_target_ref,
)


def fake_translator(addresses: list[str]) -> list[str]:
    return [f"mapped-{a}" for a in addresses]


@pytest.fixture
def engine() -> EndpointTranslationEngine:
    return EndpointTranslationEngine(DESTINATION, local_cluster="cluster-a")


def test_engine_requires_destination() -> None:
    with pytest.raises(ConfigurationError):
        EndpointTranslationEngine("")


def test_shortcut_address_emits_single_address_endpoint(
    engine, node_directory, connection_records
) -> None:
    endpoints = [make_endpoint(["10.0.1.5"], node_name="vk-cluster-c")]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert [e.addresses for e in result.endpoints] == [["10.244.0.5"]]
    assert result.shortcut_addresses == ["10.244.0.5"]
    assert result.endpoints[0].node_name == "cluster-a"


def test_mixed_endpoint_drops_non_shortcut_addresses(
    engine, node_directory, connection_records
) -> None:
    endpoints = [make_endpoint(["10.0.1.5", "10.0.9.9"], node_name="vk-cluster-c")]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert [e.addresses for e in result.endpoints] == [["10.244.0.5"]]
    assert result.shortcut_addresses == ["10.244.0.5"]


def test_each_shortcut_address_gets_its_own_endpoint(
    engine, node_directory, connection_records
) -> None:
    endpoints = [make_endpoint(["10.0.1.5", "10.0.9.9", "10.0.1.6"], node_name=None)]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert [e.addresses for e in result.endpoints] == [["10.244.0.5"], ["10.244.0.6"]]
    assert result.shortcut_addresses == ["10.244.0.5", "10.244.0.6"]


def test_non_shortcut_endpoint_uses_default_translator(
    engine, node_directory, connection_records
) -> None:
    endpoints = [make_endpoint(["10.0.9.9"], node_name="worker-1")]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert [e.addresses for e in result.endpoints] == [["mapped-10.0.9.9"]]
    assert result.shortcut_addresses == []


def test_default_translator_receives_full_address_list(
    engine, node_directory, connection_records
) -> None:
    calls = []

    def recording_translator(addresses):
        calls.append(list(addresses))
        return addresses

    endpoints = [make_endpoint(["10.0.9.9", "10.0.9.10"], node_name="worker-1")]
    engine.translate(endpoints, node_directory, connection_records, recording_translator)

    assert calls == [["10.0.9.9", "10.0.9.10"]]


def test_endpoint_on_destination_node_is_never_emitted(
    engine, node_directory, connection_records
) -> None:
    endpoints = [
        make_endpoint(["10.0.1.5"], node_name="vk-cluster-b"),
        make_endpoint(["10.0.9.9"], node_name="vk-cluster-b"),
    ]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert result.endpoints == []
    assert result.shortcut_addresses == []


def test_output_preserves_source_order(engine, node_directory, connection_records) -> None:
    endpoints = [
        make_endpoint(["10.0.9.1"], node_name="worker-1", pod="first"),
        make_endpoint(["10.0.1.2"], node_name="vk-cluster-c", pod="second"),
        make_endpoint(["10.0.9.3"], node_name=None, pod="third"),
    ]
    result = engine.translate(endpoints, node_directory, connection_records, identity_translator)

    assert [e.hostname for e in result.endpoints] == ["first", "second", "third"]
    assert [e.addresses for e in result.endpoints] == [
        ["10.0.9.1"],
        ["10.244.0.2"],
        ["10.0.9.3"],
    ]


def test_no_connection_records_means_default_path(engine, node_directory) -> None:
    endpoints = [make_endpoint(["10.0.1.5"], node_name="worker-1")]
    result = engine.translate(endpoints, node_directory, [], fake_translator)

    assert [e.addresses for e in result.endpoints] == [["mapped-10.0.1.5"]]
    assert result.shortcut_addresses == []


def test_records_of_other_clusters_are_ignored(node_directory, connection_records) -> None:
    engine = EndpointTranslationEngine("cluster-z")
    endpoints = [make_endpoint(["10.0.1.5"], node_name="worker-1")]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert [e.addresses for e in result.endpoints] == [["mapped-10.0.1.5"]]


def test_malformed_record_does_not_abort_translation(node_directory) -> None:
    records = [
        ConnectionRecord(
            name="broken",
            cluster_a=DESTINATION,
            cluster_a_networking=ClusterNetworking(
                pod_cidr="10.0.1.0/99", remapped_pod_cidr="10.244.0.0/24"
            ),
        ),
        ConnectionRecord(
            name="ok",
            cluster_b=DESTINATION,
            cluster_b_networking=ClusterNetworking(
                pod_cidr="10.0.3.0/24", remapped_pod_cidr="10.246.0.0/24"
            ),
        ),
    ]
    engine = EndpointTranslationEngine(DESTINATION)
    endpoints = [
        make_endpoint(["10.0.1.5"], node_name="worker-1", pod="broken-only"),
        make_endpoint(["10.0.3.5"], node_name="worker-1", pod="ok"),
    ]
    result = engine.translate(endpoints, node_directory, records, fake_translator)

    assert [e.addresses for e in result.endpoints] == [["mapped-10.0.1.5"], ["10.246.0.5"]]
    assert result.shortcut_addresses == ["10.246.0.5"]


def test_invalid_address_falls_back_to_default(engine, node_directory, connection_records) -> None:
    endpoints = [make_endpoint(["fd00::5"], node_name="worker-1")]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert [e.addresses for e in result.endpoints] == [["mapped-fd00::5"]]


def test_carried_fields_are_copies(engine, node_directory, connection_records) -> None:
    local = make_endpoint(["10.0.1.5", "10.0.1.6"], node_name="vk-cluster-c")
    result = engine.translate([local], node_directory, connection_records, fake_translator)
    first, second = result.endpoints

    assert first.conditions == local.conditions
    assert first.conditions is not local.conditions
    assert first.conditions is not second.conditions
    assert first.hints == local.hints
    assert first.hints is not local.hints

    first.conditions.ready = False
    first.hints.for_zones[0].name = "elsewhere"
    assert local.conditions.ready is True
    assert second.conditions.ready is True
    assert local.hints.for_zones[0].name == "zone-a"


def test_target_ref_points_at_shadow_kind(engine, node_directory, connection_records) -> None:
    local = make_endpoint(["10.0.9.9"], node_name="worker-1", pod="web-0")
    result = engine.translate([local], node_directory, connection_records, fake_translator)

    assert result.endpoints[0].target_ref.kind == "ShadowPod"
    assert result.endpoints[0].target_ref.name == "web-0"
    assert local.target_ref.kind == "Pod"


def test_remote_endpoint_target_ref_none() -> None:
    assert remote_endpoint_target_ref(None) is None


def test_duplicate_shortcut_addresses_are_recorded_once(
    engine, node_directory, connection_records
) -> None:
    endpoints = [
        make_endpoint(["10.0.1.5"], node_name="worker-1", pod="a"),
        make_endpoint(["10.0.1.5"], node_name="worker-1", pod="b"),
    ]
    result = engine.translate(endpoints, node_directory, connection_records, fake_translator)

    assert len(result.endpoints) == 2
    assert result.shortcut_addresses == ["10.244.0.5"]
