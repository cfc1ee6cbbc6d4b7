"""
Pydantic models for the IPAM service API.

The IPAM service is the hub-path authority: given an address of the local
cluster and the cluster it must be reachable from, it returns the address
to publish there.
"""

from pydantic import BaseModel, Field


class MapAddressRequest(BaseModel):
    """Request body for ``POST /api/ipam/map``."""

    cluster_id: str = Field(..., description="Cluster the address is mapped for")
    address: str = Field(..., description="Local address to map")


class MapAddressResponse(BaseModel):
    """Response body of ``POST /api/ipam/map``."""

    address: str = Field(..., description="Mapped address")
    cluster_id: str | None = Field(default=None, description="Echo of the cluster ID")
