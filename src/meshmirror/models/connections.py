"""
Connection records between cluster pairs.

A ``ForeignClusterConnection`` custom object describes a direct shortcut
between two clusters. For each side it carries the pod CIDR of the peer as
seen by the hub cluster (``podCIDR``) and the CIDR to remap into when the
shortcut is used (``remappedPodCIDR``).

Example: B and C share a shortcut, A is the hub. The reflector that
reflects into B gets the pod CIDR of C as seen by A, and the reflector that
reflects into C gets the pod CIDR of B as seen by A.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from meshmirror.models.endpoints import KubeModel


@dataclass(frozen=True)
class CidrPair:
    """
    The two ranges involved in a shortcut remap.

    Attributes:
        observed_cidr: Pod range of the peer as seen by the hub. Addresses in
            this range take the shortcut.
        shortcut_cidr: Range the addresses are relocated into.
    """

    observed_cidr: str
    shortcut_cidr: str

    def __str__(self) -> str:
        return f"{self.observed_cidr} -> {self.shortcut_cidr}"


class ClusterNetworking(KubeModel):
    """Networking block of one side of a connection record."""

    pod_cidr: str = Field(default="", alias="podCIDR")
    remapped_pod_cidr: str = Field(default="", alias="remappedPodCIDR")

    def cidr_pair(self) -> CidrPair:
        return CidrPair(
            observed_cidr=self.pod_cidr, shortcut_cidr=self.remapped_pod_cidr
        )


class ConnectionRecord(KubeModel):
    """A shortcut between ``cluster_a`` and ``cluster_b``."""

    name: str = ""
    cluster_a: str = ""
    cluster_b: str = ""
    cluster_a_networking: ClusterNetworking = Field(default_factory=ClusterNetworking)
    cluster_b_networking: ClusterNetworking = Field(default_factory=ClusterNetworking)

    @classmethod
    def from_custom_object(cls, obj: dict) -> ConnectionRecord:
        """
        Build a record from a ``ForeignClusterConnection`` custom object.

        Args:
            obj: The object as returned by the Kubernetes API (or loaded
                from a manifest).

        Returns:
            ConnectionRecord instance
        """
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}
        return cls(
            name=(obj.get("metadata") or {}).get("name", ""),
            cluster_a=spec.get("foreignClusterA", ""),
            cluster_b=spec.get("foreignClusterB", ""),
            cluster_a_networking=ClusterNetworking.model_validate(
                status.get("foreignClusterANetworking") or {}
            ),
            cluster_b_networking=ClusterNetworking.model_validate(
                status.get("foreignClusterBNetworking") or {}
            ),
        )
