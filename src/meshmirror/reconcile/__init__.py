"""
Destination-side reconciliation of ShadowEndpointSlices.
"""

from meshmirror.reconcile.shadow import (
    ShadowEndpointSliceReconciler,
    forge_endpoint_slice,
    map_endpoints_with_configuration,
)

__all__ = [
    "ShadowEndpointSliceReconciler",
    "forge_endpoint_slice",
    "map_endpoints_with_configuration",
]
