"""
Forging of ShadowEndpointSlice resources from local EndpointSlices.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from meshmirror.config import ReflectorConfig
from meshmirror.models.endpoints import (
    EndpointPort,
    EndpointSlice,
    EndpointSliceTemplate,
    ObjectMeta,
    ShadowEndpointSlice,
    ShadowEndpointSliceSpec,
    TranslationResult,
)
from meshmirror.reflection.labels import apply_shortcut_label

# Label identifying the manager of an EndpointSlice
LABEL_MANAGED_BY = "endpointslice.kubernetes.io/managed-by"

# The manager associated with the reflected EndpointSlices
ENDPOINT_SLICE_MANAGED_BY = "endpointslice.reflection.meshmirror.io"


@dataclass
class ForgingOpts:
    """Label and annotation keys that are never propagated to remote objects."""

    labels_not_reflected: list[str] = field(default_factory=list)
    annotations_not_reflected: list[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, cfg: ReflectorConfig) -> ForgingOpts:
        return cls(
            labels_not_reflected=list(cfg.LABELS_NOT_REFLECTED),
            annotations_not_reflected=list(cfg.ANNOTATIONS_NOT_REFLECTED),
        )


def endpoint_slice_labels() -> dict[str, str]:
    """Labels assigned to the reflected EndpointSlices."""
    return {LABEL_MANAGED_BY: ENDPOINT_SLICE_MANAGED_BY}


def is_managed_by_reflection(meta: ObjectMeta) -> bool:
    """Whether the object is managed by the reflection logic."""
    return all(meta.labels.get(k) == v for k, v in endpoint_slice_labels().items())


def filter_not_reflected(values: dict[str, str], keys: list[str]) -> dict[str, str]:
    return {k: v for k, v in values.items() if k not in keys}


def remote_object_meta(local: ObjectMeta, remote: ObjectMeta) -> ObjectMeta:
    """Metadata of a remote object: remote identity, local labels and annotations."""
    return ObjectMeta(
        name=remote.name,
        namespace=remote.namespace,
        labels=dict(local.labels),
        annotations=dict(local.annotations),
    )


def remote_endpoint_slice_object_meta(
    local: ObjectMeta, remote: ObjectMeta, opts: ForgingOpts
) -> ObjectMeta:
    meta = remote_object_meta(local, remote)
    meta.labels = filter_not_reflected(
        {**meta.labels, **endpoint_slice_labels()}, opts.labels_not_reflected
    )
    meta.annotations = filter_not_reflected(meta.annotations, opts.annotations_not_reflected)
    return meta


def remote_endpoint_slice_ports(ports: list[EndpointPort]) -> list[EndpointPort]:
    """Copies of the local ports, so the source object is never aliased."""
    return [port.model_copy(deep=True) for port in ports]


def remote_shadow_endpoint_slice(
    local: EndpointSlice,
    remote: ShadowEndpointSlice | None,
    target_namespace: str,
    result: TranslationResult,
    opts: ForgingOpts | None = None,
) -> ShadowEndpointSlice:
    """
    Forge the remote ShadowEndpointSlice for a local EndpointSlice.

    Args:
        local: The local EndpointSlice.
        remote: The current remote object, or None if not yet created.
        target_namespace: Namespace of the remote object.
        result: Output of the translation engine for ``local.endpoints``.
        opts: Keys excluded from propagation.

    Returns:
        The desired state of the remote object, with the shortcut addresses
        recorded in its labels.
    """
    opts = opts or ForgingOpts()
    if remote is None:
        remote_meta = ObjectMeta(name=local.metadata.name, namespace=target_namespace)
    else:
        remote_meta = remote.metadata

    meta = remote_endpoint_slice_object_meta(local.metadata, remote_meta, opts)
    meta.labels = apply_shortcut_label(meta.labels, result.shortcut_addresses)

    return ShadowEndpointSlice(
        metadata=meta,
        spec=ShadowEndpointSliceSpec(
            template=EndpointSliceTemplate(
                address_type=local.address_type,
                endpoints=result.endpoints,
                ports=remote_endpoint_slice_ports(local.ports),
            )
        ),
    )
