"""
Endpoint filtering.

Endpoints backed by a pod the destination cluster already runs natively are
not reflected there, since that cluster's own EndpointSlice controller
already publishes them.
"""

from meshmirror.exceptions import ResourceLookupError
from meshmirror.models.endpoints import Endpoint
from meshmirror.models.enums import FilterDecision
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)


def filter_decision(
    endpoint: Endpoint, node_directory, destination_cluster: str
) -> FilterDecision:
    """
    Decide whether an endpoint is reflected into the destination cluster.

    - No node name: the endpoint is external to the cluster, reflect it.
    - Node (or its cluster ID) cannot be resolved: do not reflect. This
      favors avoiding duplicates over completeness.
    - Node owned by the destination cluster: do not reflect.
    - Otherwise (local node, or node of another remote cluster): reflect.

    Args:
        endpoint: Endpoint of the local EndpointSlice.
        node_directory: Object exposing ``cluster_of(node_name) -> str``.
        destination_cluster: Cluster the slice is reflected into.
    """
    if endpoint.node_name is None:
        logger.warning(
            "Endpoint without nodeName. The endpoint is probably external to the cluster."
        )
        return FilterDecision.REFLECT_EXTERNAL

    try:
        owner = node_directory.cluster_of(endpoint.node_name)
    except ResourceLookupError as e:
        logger.error(
            f"Not reflecting endpoint on node {endpoint.node_name} "
            f"({FilterDecision.SUPPRESS_LOOKUP_FAILED.value}): {e}"
        )
        return FilterDecision.SUPPRESS_LOOKUP_FAILED

    if owner == destination_cluster:
        logger.debug(
            f"Not reflecting endpoint on node {endpoint.node_name} "
            f"({FilterDecision.SUPPRESS_OWNED_BY_DESTINATION.value}): "
            f"pod already runs in {destination_cluster}"
        )
        return FilterDecision.SUPPRESS_OWNED_BY_DESTINATION

    return FilterDecision.REFLECT


def should_reflect(endpoint: Endpoint, node_directory, destination_cluster: str) -> bool:
    """Boolean form of :func:`filter_decision`."""
    return filter_decision(endpoint, node_directory, destination_cluster).reflected
