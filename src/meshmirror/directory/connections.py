"""
Connection directory: shortcut records between cluster pairs.

Records are listed fresh on every reflection cycle and never cached, so the
staleness window is one cycle.
"""

from __future__ import annotations

from kubernetes import client
from kubernetes.client.rest import ApiException

from meshmirror.config import ReflectorConfig
from meshmirror.exceptions import ConfigurationError, RemoteError
from meshmirror.models.connections import CidrPair, ConnectionRecord
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Directory
# =============================================================================


class KubeConnectionDirectory:
    """Lists ``ForeignClusterConnection`` custom objects from the API server."""

    def __init__(self, api_client: client.ApiClient, cfg: ReflectorConfig):
        self.custom_api = client.CustomObjectsApi(api_client)
        self.group = cfg.CONNECTION_CRD_GROUP
        self.version = cfg.CONNECTION_CRD_VERSION
        self.plural = cfg.CONNECTION_CRD_PLURAL
        self.request_timeout = cfg.KUBE_REQUEST_TIMEOUT_SECONDS

    def list_connections(self, namespace: str) -> list[ConnectionRecord]:
        """
        List the connection records of a namespace.

        Raises:
            ConfigurationError: If no record exists, so callers can tell "no
                topology configured" apart from "no shortcut applies".
            RemoteError: If the API call fails.
        """
        try:
            response = self.custom_api.list_namespaced_custom_object(
                group=self.group,
                version=self.version,
                namespace=namespace,
                plural=self.plural,
                _request_timeout=self.request_timeout,
            )
        except ApiException as e:
            raise RemoteError(
                f"Unable to list {self.plural} in namespace {namespace}: {e.reason}",
                status_code=e.status,
            ) from e

        records = [
            ConnectionRecord.from_custom_object(item)
            for item in response.get("items", [])
        ]
        if not records:
            raise ConfigurationError(
                f"No ForeignClusterConnections found in namespace {namespace}"
            )

        logger.debug(f"Listed {len(records)} connection records in {namespace}")
        return records


# =============================================================================
# Query Helpers
# =============================================================================


def cidrs_for_cluster(
    records: list[ConnectionRecord] | None, cluster_id: str
) -> list[CidrPair]:
    """
    Collect the CidrPairs of every shortcut involving a cluster.

    A record matches when the cluster is on side A or side B; side A is
    checked first and wins if both sides name the cluster. Records with no
    observed CIDR are skipped. The returned order follows the record order.

    Raises:
        ConfigurationError: If no record yields a usable pair for the cluster.
    """
    if not records:
        raise ConfigurationError("No ForeignClusterConnections found")

    pairs: list[CidrPair] = []
    for record in records:
        if record.cluster_a == cluster_id:
            networking = record.cluster_a_networking
        elif record.cluster_b == cluster_id:
            networking = record.cluster_b_networking
        else:
            continue

        if not networking.pod_cidr:
            logger.warning(
                f"ForeignClusterConnection {record.name} has no CIDR specified "
                f"for cluster {cluster_id}"
            )
            continue
        pairs.append(networking.cidr_pair())

    if not pairs:
        raise ConfigurationError(f"No valid CIDRs found for cluster name: {cluster_id}")

    return pairs
