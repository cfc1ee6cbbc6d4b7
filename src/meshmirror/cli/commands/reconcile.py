"""Reconciliation of ShadowEndpointSlice manifests against the IPAM service."""

import asyncio
from typing import Annotated

import typer
from pydantic import ValidationError

from meshmirror.cli.manifests import load_single_manifest
from meshmirror.cli.output import print_error, print_manifest
from meshmirror.config import config
from meshmirror.exceptions import MeshMirrorError
from meshmirror.ipam.client import IPAMClient
from meshmirror.models.endpoints import EndpointSlice, ShadowEndpointSlice
from meshmirror.reconcile.shadow import ShadowEndpointSliceReconciler

app = typer.Typer(help="Reconciliation commands")


async def _reconcile(shadow: ShadowEndpointSlice, cluster_id: str, ipam_url: str) -> EndpointSlice:
    async with IPAMClient(ipam_url, timeout=config.IPAM_TIMEOUT_SECONDS) as ipam:
        reconciler = ShadowEndpointSliceReconciler(
            ipam, cluster_id, deadline=config.RECONCILE_DEADLINE_SECONDS
        )
        return await reconciler.reconcile(shadow)


@app.command("run")
def run_reconcile(
    shadow_file: Annotated[str, typer.Argument(help="ShadowEndpointSlice manifest")],
    cluster_id: Annotated[
        str, typer.Option("--cluster-id", "-c", help="Cluster the addresses are mapped for")
    ],
    ipam_url: Annotated[
        str | None,
        typer.Option("--ipam-url", help="IPAM service URL", envvar="MESHMIRROR_IPAM_URL"),
    ] = None,
):
    """Map the addresses of a shadow object and print the resulting EndpointSlice."""
    try:
        shadow = ShadowEndpointSlice.model_validate(load_single_manifest(shadow_file))
        endpoint_slice = asyncio.run(
            _reconcile(shadow, cluster_id, ipam_url or config.get_ipam_url())
        )
    except (MeshMirrorError, ValidationError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_manifest(endpoint_slice.to_manifest())
