"""Pytest configuration and shared fixtures."""

import pytest

from meshmirror.directory.nodes import DEFAULT_CLUSTER_ID_LABEL, StaticNodeDirectory
from meshmirror.models.connections import ClusterNetworking, ConnectionRecord
from meshmirror.models.endpoints import (
    Endpoint,
    EndpointConditions,
    EndpointHints,
    EndpointPort,
    EndpointSlice,
    ForZone,
    ObjectMeta,
    ObjectReference,
)

DESTINATION = "cluster-b"


def make_endpoint(addresses, node_name=None, pod="pod-1", zone="zone-a") -> Endpoint:
    return Endpoint(
        addresses=list(addresses),
        conditions=EndpointConditions(ready=True, serving=True, terminating=False),
        hostname=pod,
        target_ref=ObjectReference(kind="Pod", namespace="demo", name=pod, uid=f"uid-{pod}"),
        node_name=node_name,
        zone=zone,
        hints=EndpointHints(for_zones=[ForZone(name=zone)]),
    )


@pytest.fixture
def node_directory() -> StaticNodeDirectory:
    """Nodes: one local, one virtual node per remote cluster, one unlabeled."""
    return StaticNodeDirectory(
        {
            "worker-1": {DEFAULT_CLUSTER_ID_LABEL: "cluster-a"},
            "vk-cluster-b": {DEFAULT_CLUSTER_ID_LABEL: DESTINATION},
            "vk-cluster-c": {DEFAULT_CLUSTER_ID_LABEL: "cluster-c"},
            "unlabeled": {"kubernetes.io/hostname": "unlabeled"},
        }
    )


@pytest.fixture
def connection_records() -> list[ConnectionRecord]:
    """B and C share a shortcut; cluster-a is the hub."""
    return [
        ConnectionRecord(
            name="b-c",
            cluster_a=DESTINATION,
            cluster_b="cluster-c",
            cluster_a_networking=ClusterNetworking(
                pod_cidr="10.0.1.0/24", remapped_pod_cidr="10.244.0.0/24"
            ),
            cluster_b_networking=ClusterNetworking(
                pod_cidr="10.0.2.0/24", remapped_pod_cidr="10.245.0.0/24"
            ),
        )
    ]


@pytest.fixture
def local_slice() -> EndpointSlice:
    return EndpointSlice(
        metadata=ObjectMeta(
            name="web-abcde",
            namespace="demo",
            labels={"kubernetes.io/service-name": "web", "internal": "yes"},
            annotations={"note": "keep", "secret-note": "drop"},
        ),
        endpoints=[
            make_endpoint(["10.0.1.5"], node_name="vk-cluster-c", pod="via-shortcut"),
            make_endpoint(["10.0.9.9"], node_name="worker-1", pod="via-hub"),
            make_endpoint(["10.0.1.7"], node_name="vk-cluster-b", pod="native"),
        ],
        ports=[EndpointPort(name="http", protocol="TCP", port=80)],
    )
