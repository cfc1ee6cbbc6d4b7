"""
Endpoint translation engine.

Turns the endpoints of a local EndpointSlice into the endpoints of the
shadow resource reflected into a destination cluster:

1. Endpoints whose pod already runs in the destination cluster are dropped.
2. Every address is checked against the shortcuts of the destination
   cluster. Each address that takes a shortcut becomes its own endpoint
   with the remapped address, and is recorded as final.
3. Endpoints without any shortcut address go through the default
   translator as a whole.

An endpoint with at least one shortcut address emits only its shortcut
endpoints; its remaining addresses are dropped.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from meshmirror.directory.connections import cidrs_for_cluster
from meshmirror.exceptions import AddressFormatError, ConfigurationError
from meshmirror.models.connections import CidrPair, ConnectionRecord
from meshmirror.models.endpoints import Endpoint, ObjectReference, TranslationResult
from meshmirror.reflection.filter import should_reflect
from meshmirror.reflection.shortcut import resolve_shortcut
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)

# Translates local endpoint addresses into the addresses used remotely
EndpointTranslator = Callable[[list[str]], list[str]]


def identity_translator(addresses: list[str]) -> list[str]:
    """Keep addresses as they are; the IPAM remap happens at reconcile time."""
    return list(addresses)


def remote_kind(kind: str) -> str:
    """Kind of the shadow counterpart of a resource kind."""
    return f"Shadow{kind}"


def remote_endpoint_target_ref(ref: ObjectReference | None) -> ObjectReference | None:
    """Copy of the endpoint target reference, pointing at the shadow kind."""
    if ref is None:
        return None
    remote = ref.model_copy(deep=True)
    if remote.kind:
        remote.kind = remote_kind(remote.kind)
    return remote


class EndpointTranslationEngine:
    """
    Translates endpoints for one destination cluster.

    The engine holds no state beyond its configuration, so one instance can
    serve concurrent reflection cycles.

    Args:
        destination_cluster: Cluster the endpoints are reflected into.
        local_cluster: Node name set on every emitted endpoint.
    """

    def __init__(self, destination_cluster: str, local_cluster: str = "local"):
        if not destination_cluster:
            raise ConfigurationError("Destination cluster name must not be empty")
        self.destination_cluster = destination_cluster
        self.local_cluster = local_cluster

    def cidr_pairs(self, connection_records: list[ConnectionRecord] | None) -> list[CidrPair]:
        """Shortcut CidrPairs of the destination cluster, empty if none apply."""
        try:
            return cidrs_for_cluster(connection_records, self.destination_cluster)
        except ConfigurationError as e:
            logger.warning(f"No shortcuts towards {self.destination_cluster}: {e}")
            return []

    def translate(
        self,
        local_endpoints: Iterable[Endpoint],
        node_directory,
        connection_records: list[ConnectionRecord] | None,
        default_translator: EndpointTranslator = identity_translator,
    ) -> TranslationResult:
        """
        Translate local endpoints for the destination cluster.

        Args:
            local_endpoints: Endpoints of the local EndpointSlice.
            node_directory: Object exposing ``cluster_of(node_name) -> str``.
            connection_records: Current shortcut records.
            default_translator: Applied to the full address list of endpoints
                with no shortcut address.

        Returns:
            TranslationResult with the emitted endpoints and shortcut addresses.
        """
        pairs = self.cidr_pairs(connection_records)
        result = TranslationResult()

        for local in local_endpoints:
            if not should_reflect(local, node_directory, self.destination_cluster):
                # Natively present in the destination cluster, or unresolvable
                continue

            shortcut_endpoints = []
            for address in local.addresses:
                try:
                    remapped = resolve_shortcut(address, pairs)
                except AddressFormatError as e:
                    logger.error(f"Unable to resolve shortcut for address {address}: {e}")
                    continue

                if remapped is None:
                    continue

                shortcut_endpoints.append(self._forge_endpoint(local, [remapped]))
                result.add_shortcut_address(remapped)

            if shortcut_endpoints:
                if len(shortcut_endpoints) < len(local.addresses):
                    logger.warning(
                        f"Endpoint {self._describe(local)} mixes shortcut and "
                        f"non-shortcut addresses; only the "
                        f"{len(shortcut_endpoints)} shortcut address(es) are reflected"
                    )
                result.endpoints.extend(shortcut_endpoints)
                continue

            result.endpoints.append(
                self._forge_endpoint(local, default_translator(list(local.addresses)))
            )

        return result

    def _forge_endpoint(self, local: Endpoint, addresses: list[str]) -> Endpoint:
        return Endpoint(
            addresses=addresses,
            conditions=local.conditions.model_copy(deep=True),
            hostname=local.hostname,
            target_ref=remote_endpoint_target_ref(local.target_ref),
            node_name=self.local_cluster,
            zone=local.zone,
            hints=local.hints.model_copy(deep=True) if local.hints else None,
        )

    @staticmethod
    def _describe(endpoint: Endpoint) -> str:
        if endpoint.target_ref and endpoint.target_ref.name:
            return endpoint.target_ref.name
        return ",".join(endpoint.addresses)
