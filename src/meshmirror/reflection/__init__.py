"""
Endpoint reflection: filtering, shortcut remapping and shadow forging.
"""

from meshmirror.reflection.engine import (
    EndpointTranslationEngine,
    EndpointTranslator,
    identity_translator,
)
from meshmirror.reflection.filter import filter_decision, should_reflect
from meshmirror.reflection.labels import (
    SHORTCUT_ADDRESSES_LABEL,
    apply_shortcut_label,
    parse_shortcut_label,
)
from meshmirror.reflection.shortcut import (
    ip_belongs_to_cidr,
    remap_address_using_cidr,
    resolve_shortcut,
)

__all__ = [
    # Engine
    "EndpointTranslationEngine",
    "EndpointTranslator",
    "identity_translator",
    # Filter
    "filter_decision",
    "should_reflect",
    # Labels
    "SHORTCUT_ADDRESSES_LABEL",
    "apply_shortcut_label",
    "parse_shortcut_label",
    # Shortcuts
    "ip_belongs_to_cidr",
    "remap_address_using_cidr",
    "resolve_shortcut",
]
