"""
Node directory: which cluster owns a node.

Virtual nodes carry the ID of the remote cluster they stand for in a label;
physical nodes of the local cluster carry the local cluster ID.
"""

from __future__ import annotations

from kubernetes import client
from kubernetes.client.rest import ApiException

from meshmirror.exceptions import RemoteError, ResourceLookupError
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CLUSTER_ID_LABEL = "meshmirror.io/remote-cluster-id"


def cluster_id_from_labels(
    node_name: str, labels: dict[str, str] | None, label: str = DEFAULT_CLUSTER_ID_LABEL
) -> str:
    """Read the owning cluster ID from node labels."""
    cluster_id = (labels or {}).get(label, "").strip()
    if not cluster_id:
        raise ResourceLookupError(
            f"Node {node_name} has no {label} label", node_name=node_name
        )
    return cluster_id


class KubeNodeDirectory:
    """Resolves node ownership through the API server."""

    def __init__(
        self,
        api_client: client.ApiClient,
        label: str = DEFAULT_CLUSTER_ID_LABEL,
        request_timeout: float | None = None,
    ):
        self.core_api = client.CoreV1Api(api_client)
        self.label = label
        self.request_timeout = request_timeout

    def cluster_of(self, node_name: str) -> str:
        """
        Get the ID of the cluster owning a node.

        Raises:
            ResourceLookupError: If the node does not exist or is unlabeled.
            RemoteError: For any other API failure.
        """
        try:
            node = self.core_api.read_node(
                node_name, _request_timeout=self.request_timeout
            )
        except ApiException as e:
            if e.status == 404:
                raise ResourceLookupError(
                    f"Node {node_name} not found", node_name=node_name
                ) from e
            raise RemoteError(
                f"Unable to retrieve node {node_name}: {e.reason}", status_code=e.status
            ) from e

        return cluster_id_from_labels(node_name, node.metadata.labels, self.label)


class StaticNodeDirectory:
    """Node ownership from a fixed set of node manifests (offline use)."""

    def __init__(
        self, node_labels: dict[str, dict[str, str]], label: str = DEFAULT_CLUSTER_ID_LABEL
    ):
        self.node_labels = node_labels
        self.label = label

    @classmethod
    def from_manifests(
        cls, manifests: list[dict], label: str = DEFAULT_CLUSTER_ID_LABEL
    ) -> StaticNodeDirectory:
        node_labels = {}
        for manifest in manifests:
            metadata = manifest.get("metadata") or {}
            node_labels[metadata.get("name", "")] = metadata.get("labels") or {}
        return cls(node_labels, label)

    def cluster_of(self, node_name: str) -> str:
        if node_name not in self.node_labels:
            raise ResourceLookupError(f"Node {node_name} not found", node_name=node_name)
        return cluster_id_from_labels(node_name, self.node_labels[node_name], self.label)
