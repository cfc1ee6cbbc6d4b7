"""
EndpointSlice reflector.

Runs one reflection cycle for a local EndpointSlice: lists the current
connection records, translates the endpoints and forges the shadow object.
"""

from __future__ import annotations

from kubernetes import client

from meshmirror.config import ReflectorConfig
from meshmirror.directory.connections import KubeConnectionDirectory
from meshmirror.directory.nodes import KubeNodeDirectory
from meshmirror.exceptions import ConfigurationError
from meshmirror.models.connections import ConnectionRecord
from meshmirror.models.endpoints import EndpointSlice, ShadowEndpointSlice
from meshmirror.reflection.engine import (
    EndpointTranslationEngine,
    EndpointTranslator,
    identity_translator,
)
from meshmirror.reflection.forge import ForgingOpts, remote_shadow_endpoint_slice
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)


class EndpointSliceReflector:
    """
    Reflects local EndpointSlices into one destination cluster.

    Args:
        engine: Translation engine bound to the destination cluster.
        connection_directory: Object exposing ``list_connections(namespace)``.
        node_directory: Object exposing ``cluster_of(node_name)``.
        connections_namespace: Namespace holding the connection records.
        translator: Default-path translator for non-shortcut endpoints.
        forging_opts: Keys excluded from propagation.
    """

    def __init__(
        self,
        engine: EndpointTranslationEngine,
        connection_directory,
        node_directory,
        connections_namespace: str = "default",
        translator: EndpointTranslator = identity_translator,
        forging_opts: ForgingOpts | None = None,
    ):
        self.engine = engine
        self.connection_directory = connection_directory
        self.node_directory = node_directory
        self.connections_namespace = connections_namespace
        self.translator = translator
        self.forging_opts = forging_opts or ForgingOpts()

    @classmethod
    def from_config(
        cls, cfg: ReflectorConfig, api_client: client.ApiClient
    ) -> EndpointSliceReflector:
        """Build a reflector talking to the API server behind ``api_client``."""
        engine = EndpointTranslationEngine(
            destination_cluster=cfg.get_cluster_name(),
            local_cluster=cfg.LOCAL_CLUSTER_ID,
        )
        return cls(
            engine=engine,
            connection_directory=KubeConnectionDirectory(api_client, cfg),
            node_directory=KubeNodeDirectory(
                api_client,
                label=cfg.REMOTE_CLUSTER_ID_LABEL,
                request_timeout=cfg.KUBE_REQUEST_TIMEOUT_SECONDS,
            ),
            connections_namespace=cfg.CONNECTIONS_NAMESPACE,
            forging_opts=ForgingOpts.from_config(cfg),
        )

    def list_connections(self) -> list[ConnectionRecord]:
        """
        Fetch the connection records for this cycle.

        A missing topology is not an error for reflection: every endpoint
        then takes the default path. API failures propagate.
        """
        try:
            return self.connection_directory.list_connections(self.connections_namespace)
        except ConfigurationError as e:
            logger.info(f"Reflecting without shortcuts: {e}")
            return []

    def reflect(
        self,
        local: EndpointSlice,
        target_namespace: str,
        remote: ShadowEndpointSlice | None = None,
    ) -> ShadowEndpointSlice:
        """
        Forge the shadow object for ``local``.

        Args:
            local: The local EndpointSlice.
            target_namespace: Namespace of the shadow object.
            remote: The current shadow object, if it already exists.
        """
        records = self.list_connections()
        result = self.engine.translate(
            local.endpoints, self.node_directory, records, self.translator
        )
        shadow = remote_shadow_endpoint_slice(
            local, remote, target_namespace, result, self.forging_opts
        )

        logger.debug(
            f"Reflected {local.metadata.name}: {len(local.endpoints)} local endpoint(s) -> "
            f"{len(result.endpoints)} remote, {len(result.shortcut_addresses)} via shortcut"
        )
        return shadow
