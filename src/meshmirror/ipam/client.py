"""
IPAM service client, the default address mapper.

Every call is a network round-trip and may fail or time out; failures are
surfaced as RemoteError (RemoteTimeoutError for deadlines) so that the
reconciliation loop can re-queue the resource.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from meshmirror.exceptions import RemoteError, RemoteTimeoutError
from meshmirror.models.requests import MapAddressRequest, MapAddressResponse
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)


class IPAMClient:
    """
    Async client for the IPAM service.

    Usage:
        async with IPAMClient("http://ipam:6000") as ipam:
            mapped = await ipam.map_address("10.0.9.9", "cluster-b")

    Args:
        base_url: Base URL of the IPAM service.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (used to stub the service).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> IPAMClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def map_address(self, address: str, cluster_id: str) -> str:
        """
        Map a local address for a cluster.

        Args:
            address: Address of the local EndpointSlice.
            cluster_id: Cluster the address must be reachable from.

        Returns:
            The mapped address.

        Raises:
            RemoteTimeoutError: If the request timed out.
            RemoteError: For any other failure, including malformed replies.
        """
        payload = MapAddressRequest(cluster_id=cluster_id, address=address)

        try:
            response = await self._client.post(
                "/api/ipam/map", json=payload.model_dump(mode="json")
            )
            response.raise_for_status()
            mapped = MapAddressResponse.model_validate(response.json())

        except httpx.TimeoutException as e:
            logger.warning(f"IPAM request timed out mapping {address}: {e}")
            raise RemoteTimeoutError(f"IPAM timed out mapping {address}") from e

        except httpx.HTTPStatusError as e:
            logger.warning(
                f"IPAM rejected mapping of {address}: {e.response.status_code} - "
                f"{e.response.text}"
            )
            raise RemoteError(
                f"IPAM returned HTTP {e.response.status_code} for {address}",
                status_code=e.response.status_code,
            ) from e

        except httpx.RequestError as e:
            logger.warning(f"Failed to reach IPAM at {self.base_url}: {e}")
            raise RemoteError(f"Network error mapping {address}: {e}") from e

        except (ValueError, ValidationError) as e:
            raise RemoteError(f"Malformed IPAM response for {address}: {e}") from e

        logger.debug(f"IPAM mapped {address} -> {mapped.address} for {cluster_id}")
        return mapped.address
