"""Unit tests for endpoint filtering."""

from conftest import DESTINATION, make_endpoint
from meshmirror.models.enums import FilterDecision
from meshmirror.reflection.filter import filter_decision, should_reflect


def test_endpoint_without_node_is_reflected(node_directory) -> None:
    endpoint = make_endpoint(["10.0.9.9"], node_name=None)
    assert filter_decision(endpoint, node_directory, DESTINATION) == FilterDecision.REFLECT_EXTERNAL
    assert should_reflect(endpoint, node_directory, DESTINATION)


def test_endpoint_owned_by_destination_is_suppressed(node_directory) -> None:
    endpoint = make_endpoint(["10.0.1.7"], node_name="vk-cluster-b")
    assert (
        filter_decision(endpoint, node_directory, DESTINATION)
        == FilterDecision.SUPPRESS_OWNED_BY_DESTINATION
    )
    assert not should_reflect(endpoint, node_directory, DESTINATION)


def test_endpoint_of_other_clusters_is_reflected(node_directory) -> None:
    for node in ("worker-1", "vk-cluster-c"):
        endpoint = make_endpoint(["10.0.9.9"], node_name=node)
        assert filter_decision(endpoint, node_directory, DESTINATION) == FilterDecision.REFLECT


def test_unknown_node_is_suppressed(node_directory) -> None:
    endpoint = make_endpoint(["10.0.9.9"], node_name="ghost")
    assert (
        filter_decision(endpoint, node_directory, DESTINATION)
        == FilterDecision.SUPPRESS_LOOKUP_FAILED
    )
    assert not should_reflect(endpoint, node_directory, DESTINATION)


def test_unlabeled_node_is_suppressed(node_directory) -> None:
    endpoint = make_endpoint(["10.0.9.9"], node_name="unlabeled")
    assert (
        filter_decision(endpoint, node_directory, DESTINATION)
        == FilterDecision.SUPPRESS_LOOKUP_FAILED
    )
