"""
ShadowEndpointSlice reconciliation.

Runs on the destination side, independently of the forge pass. Every
address of the shadow object is mapped through the IPAM service, except the
ones listed in the shortcut label: those were already remapped at forge time
and are final.

Reconciliations of the same shadow object never overlap within a process;
different objects are reconciled concurrently.
"""

from __future__ import annotations

import asyncio
from collections.abc import Collection

from meshmirror.exceptions import RemoteError, RemoteTimeoutError
from meshmirror.models.endpoints import Endpoint, EndpointSlice, ObjectMeta, ShadowEndpointSlice
from meshmirror.reflection.forge import remote_endpoint_slice_ports
from meshmirror.reflection.labels import SHORTCUT_ADDRESSES_LABEL, parse_shortcut_label
from meshmirror.utils.logger import format_traceback, get_logger

logger = get_logger(__name__)


async def map_endpoints_with_configuration(
    endpoints: list[Endpoint],
    cluster_id: str,
    shortcut_addresses: Collection[str],
    mapper,
) -> list[Endpoint]:
    """
    Map the addresses of the endpoints through the default address mapper.

    Args:
        endpoints: Endpoints of the shadow object; left untouched.
        cluster_id: Cluster the addresses are mapped for.
        shortcut_addresses: Final addresses that must not be mapped again.
        mapper: Object exposing ``async map_address(address, cluster_id)``.

    Returns:
        Copies of the endpoints with mapped addresses.

    Raises:
        RemoteError: On the first mapping failure; nothing is returned.
    """
    mapped_endpoints = []
    for endpoint in endpoints:
        mapped = endpoint.model_copy(deep=True)
        for i, address in enumerate(mapped.addresses):
            if address in shortcut_addresses:
                logger.debug(f"Skipping translation for shortcut address {address}")
                continue
            mapped.addresses[i] = await mapper.map_address(address, cluster_id)
        mapped_endpoints.append(mapped)
    return mapped_endpoints


def forge_endpoint_slice(shadow: ShadowEndpointSlice, endpoints: list[Endpoint]) -> EndpointSlice:
    """
    Build the destination EndpointSlice of a shadow object.

    The shortcut label belongs to the shadow object only and is not copied.
    """
    labels = dict(shadow.metadata.labels)
    labels.pop(SHORTCUT_ADDRESSES_LABEL, None)

    return EndpointSlice(
        metadata=ObjectMeta(
            name=shadow.metadata.name,
            namespace=shadow.metadata.namespace,
            labels=labels,
            annotations=dict(shadow.metadata.annotations),
        ),
        address_type=shadow.spec.template.address_type,
        endpoints=endpoints,
        ports=remote_endpoint_slice_ports(shadow.spec.template.ports),
    )


class ShadowEndpointSliceReconciler:
    """
    Reconciles ShadowEndpointSlices into EndpointSlices.

    Args:
        mapper: Default address mapper (e.g. IPAMClient).
        cluster_id: Cluster the addresses are mapped for.
        deadline: Seconds allowed for mapping one object; None for no limit.
    """

    def __init__(self, mapper, cluster_id: str, deadline: float | None = None):
        self.mapper = mapper
        self.cluster_id = cluster_id
        self.deadline = deadline
        # Only keys with a reconcile running or waiting have an entry
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def _acquire_slot(self, key: str) -> asyncio.Lock:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        return lock

    def _release_slot(self, key: str) -> None:
        self._lock_users[key] -= 1
        if self._lock_users[key] == 0:
            del self._lock_users[key]
            del self._locks[key]

    async def reconcile(self, shadow: ShadowEndpointSlice) -> EndpointSlice:
        """
        Compute the EndpointSlice for a shadow object.

        Raises:
            RemoteTimeoutError: If mapping exceeded the deadline.
            RemoteError: If the mapper failed; the caller should re-queue.
        """
        name = f"{shadow.metadata.namespace}/{shadow.metadata.name}"
        lock = self._acquire_slot(name)
        try:
            async with lock:
                return await self._reconcile_locked(shadow, name)
        finally:
            self._release_slot(name)

    async def _reconcile_locked(self, shadow: ShadowEndpointSlice, name: str) -> EndpointSlice:
        shortcut_addresses = parse_shortcut_label(shadow.metadata.labels)

        try:
            endpoints = await asyncio.wait_for(
                map_endpoints_with_configuration(
                    shadow.spec.template.endpoints,
                    self.cluster_id,
                    shortcut_addresses,
                    self.mapper,
                ),
                timeout=self.deadline,
            )
        except asyncio.TimeoutError as e:
            raise RemoteTimeoutError(
                f"Mapping addresses of {name} exceeded {self.deadline}s"
            ) from e
        except RemoteError as e:
            logger.error(f"Failed to map addresses of {name}: {e}")
            logger.debug(format_traceback(e))
            raise

        logger.info(
            f"Reconciled {name}: {len(endpoints)} endpoint(s), "
            f"{len(shortcut_addresses)} shortcut address(es) kept as is"
        )
        return forge_endpoint_slice(shadow, endpoints)
