"""
Shortcut address label.

The forge pass records the addresses it already remapped through a shortcut
as one comma-separated label value on the shadow resource. The reconcile
pass reads it back and leaves those addresses alone. The label is the only
state shared between the two passes.
"""

from collections.abc import Iterable

# Kubernetes label values are limited to 63 characters of [A-Za-z0-9._-], which
# a comma-joined list of more than one address does not satisfy; the API server
# rejects such values on apply.
SHORTCUT_ADDRESSES_LABEL = "meshmirror.io/shortcut-addresses"


def format_shortcut_label(addresses: Iterable[str]) -> str:
    return ",".join(addresses)


def apply_shortcut_label(labels: dict[str, str], addresses: list[str]) -> dict[str, str]:
    """
    Return a copy of ``labels`` carrying the shortcut addresses.

    With no addresses the label is removed, so a value left over from a
    previous cycle does not outlive the shortcut.
    """
    updated = dict(labels)
    if addresses:
        updated[SHORTCUT_ADDRESSES_LABEL] = format_shortcut_label(addresses)
    else:
        updated.pop(SHORTCUT_ADDRESSES_LABEL, None)
    return updated


def parse_shortcut_label(labels: dict[str, str] | None) -> set[str]:
    """Addresses recorded on a resource; empty when the label is absent."""
    value = (labels or {}).get(SHORTCUT_ADDRESSES_LABEL, "")
    return {item.strip() for item in value.split(",") if item.strip()}
