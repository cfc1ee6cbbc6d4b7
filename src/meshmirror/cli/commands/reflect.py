"""Reflection of EndpointSlices, from manifest files or the live cluster."""

from typing import Annotated

import typer
from kubernetes import client
from kubernetes.client.rest import ApiException
from pydantic import ValidationError

from meshmirror.cli.manifests import load_manifests, load_single_manifest
from meshmirror.cli.output import print_error, print_manifest
from meshmirror.config import config
from meshmirror.directory.kube import load_api_client
from meshmirror.directory.nodes import StaticNodeDirectory
from meshmirror.exceptions import ConfigurationError, MeshMirrorError, RemoteError
from meshmirror.models.connections import ConnectionRecord
from meshmirror.models.endpoints import EndpointSlice
from meshmirror.reflection.engine import EndpointTranslationEngine
from meshmirror.reflection.forge import ForgingOpts
from meshmirror.reflection.reflector import EndpointSliceReflector

app = typer.Typer(help="Reflection commands")


class ManifestConnectionDirectory:
    """Connection records read from a manifest file."""

    def __init__(self, records: list[ConnectionRecord]):
        self.records = records

    def list_connections(self, namespace: str) -> list[ConnectionRecord]:
        if not self.records:
            raise ConfigurationError("No ForeignClusterConnections found")
        return self.records


@app.command("translate")
def translate(
    slice_file: Annotated[str, typer.Argument(help="Local EndpointSlice manifest")],
    cluster: Annotated[
        str | None,
        typer.Option("--cluster", "-c", help="Destination cluster (default: from config)"),
    ] = None,
    connections: Annotated[
        str | None,
        typer.Option("--connections", help="ForeignClusterConnection manifest file"),
    ] = None,
    nodes: Annotated[
        str | None, typer.Option("--nodes", help="Node manifest file")
    ] = None,
    namespace: Annotated[
        str | None, typer.Option("--namespace", "-n", help="Target namespace")
    ] = None,
):
    """Forge the ShadowEndpointSlice of a local EndpointSlice."""
    try:
        destination = cluster or config.get_cluster_name()
        local = EndpointSlice.model_validate(load_single_manifest(slice_file))

        records = []
        if connections:
            records = [
                ConnectionRecord.from_custom_object(o) for o in load_manifests(connections)
            ]
        node_directory = StaticNodeDirectory.from_manifests(
            load_manifests(nodes) if nodes else [], label=config.REMOTE_CLUSTER_ID_LABEL
        )

        reflector = EndpointSliceReflector(
            engine=EndpointTranslationEngine(destination, config.LOCAL_CLUSTER_ID),
            connection_directory=ManifestConnectionDirectory(records),
            node_directory=node_directory,
            connections_namespace=config.CONNECTIONS_NAMESPACE,
            forging_opts=ForgingOpts.from_config(config),
        )
        shadow = reflector.reflect(
            local, target_namespace=namespace or local.metadata.namespace or "default"
        )
    except (MeshMirrorError, ValidationError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_manifest(shadow.to_manifest())


@app.command("live")
def reflect_live(
    namespace: Annotated[str, typer.Argument(help="Namespace of the local EndpointSlice")],
    name: Annotated[str, typer.Argument(help="Name of the local EndpointSlice")],
    target_namespace: Annotated[
        str | None, typer.Option("--target-namespace", "-t", help="Target namespace")
    ] = None,
):
    """Forge the ShadowEndpointSlice of an EndpointSlice read from the cluster."""
    try:
        api_client = load_api_client(config)
        discovery_api = client.DiscoveryV1Api(api_client)
        try:
            obj = discovery_api.read_namespaced_endpoint_slice(
                name, namespace, _request_timeout=config.KUBE_REQUEST_TIMEOUT_SECONDS
            )
        except ApiException as e:
            raise RemoteError(
                f"Unable to read EndpointSlice {namespace}/{name}: {e.reason}",
                status_code=e.status,
            ) from e

        local = EndpointSlice.model_validate(api_client.sanitize_for_serialization(obj))
        reflector = EndpointSliceReflector.from_config(config, api_client)
        shadow = reflector.reflect(local, target_namespace=target_namespace or namespace)
    except (MeshMirrorError, ValidationError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_manifest(shadow.to_manifest())
