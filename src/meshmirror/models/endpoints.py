"""
Pydantic models for EndpointSlice-shaped resources.

These mirror the ``discovery.k8s.io/v1`` wire format (camelCase keys) closely
enough to round-trip manifests read from the Kubernetes API or from YAML
files, while exposing snake_case attributes to Python code.

Model Categories:
    - Endpoint building blocks: conditions, hints, object references
    - Resources: EndpointSlice and its shadow counterpart
    - Translation output: TranslationResult
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Base Model
# =============================================================================


class KubeModel(BaseModel):
    """Base model accepting both camelCase (wire) and snake_case (Python) keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_manifest(self) -> dict:
        """Dump to a Kubernetes-style dict (camelCase, no null fields)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Endpoint Models
# =============================================================================


class EndpointConditions(KubeModel):
    """Readiness conditions of an endpoint."""

    ready: bool | None = None
    serving: bool | None = None
    terminating: bool | None = None


class ForZone(KubeModel):
    """A zone an endpoint should be consumed from."""

    name: str


class EndpointHints(KubeModel):
    """Topology hints of an endpoint."""

    for_zones: list[ForZone] = Field(default_factory=list)


class ObjectReference(KubeModel):
    """Reference to the object backing an endpoint (usually a Pod)."""

    kind: str | None = None
    namespace: str | None = None
    name: str | None = None
    uid: str | None = None
    api_version: str | None = None
    resource_version: str | None = None
    field_path: str | None = None


class Endpoint(KubeModel):
    """A single addressable backend (e.g. one pod) of a service."""

    addresses: list[str] = Field(default_factory=list)
    conditions: EndpointConditions = Field(default_factory=EndpointConditions)
    hostname: str | None = None
    target_ref: ObjectReference | None = None
    node_name: str | None = None
    zone: str | None = None
    hints: EndpointHints | None = None


class EndpointPort(KubeModel):
    """A port exposed by the endpoints of a slice."""

    name: str | None = None
    protocol: str | None = None
    port: int | None = None
    app_protocol: str | None = None


# =============================================================================
# Resource Models
# =============================================================================


class ObjectMeta(KubeModel):
    """The subset of object metadata that reflection cares about."""

    name: str = ""
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class EndpointSlice(KubeModel):
    """A ``discovery.k8s.io/v1`` EndpointSlice."""

    api_version: str = "discovery.k8s.io/v1"
    kind: str = "EndpointSlice"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    address_type: str = "IPv4"
    endpoints: list[Endpoint] = Field(default_factory=list)
    ports: list[EndpointPort] = Field(default_factory=list)


class EndpointSliceTemplate(KubeModel):
    """The EndpointSlice content carried by a shadow resource."""

    address_type: str = "IPv4"
    endpoints: list[Endpoint] = Field(default_factory=list)
    ports: list[EndpointPort] = Field(default_factory=list)


class ShadowEndpointSliceSpec(KubeModel):
    template: EndpointSliceTemplate = Field(default_factory=EndpointSliceTemplate)


class ShadowEndpointSlice(KubeModel):
    """The reflected copy of an EndpointSlice handed to the destination cluster."""

    api_version: str = "offloading.meshmirror.io/v1beta1"
    kind: str = "ShadowEndpointSlice"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ShadowEndpointSliceSpec = Field(default_factory=ShadowEndpointSliceSpec)


# =============================================================================
# Translation Output
# =============================================================================


@dataclass
class TranslationResult:
    """
    Output of a translation pass.

    Attributes:
        endpoints: Translated endpoints, in source endpoint order.
        shortcut_addresses: Addresses already remapped through a shortcut,
            in discovery order and without duplicates. These are final and
            must never reach the default address mapper.
    """

    endpoints: list[Endpoint] = field(default_factory=list)
    shortcut_addresses: list[str] = field(default_factory=list)

    def add_shortcut_address(self, address: str) -> None:
        if address not in self.shortcut_addresses:
            self.shortcut_addresses.append(address)
