"""
Enumeration types for meshmirror.

This module defines the enumeration types shared across the reflection,
reconciliation and CLI layers.
"""

from enum import Enum


# =============================================================================
# Reflection Enums
# =============================================================================


class FilterDecision(str, Enum):
    """
    Outcome of the endpoint filter.

    The two suppression causes are kept apart so that an endpoint hidden
    because the destination already runs its pod can be told apart from one
    hidden because its node could not be resolved.
    """

    REFLECT = "reflect"  # Node owned by another cluster (or the local one)
    REFLECT_EXTERNAL = "reflect_external"  # No node name, external endpoint
    SUPPRESS_OWNED_BY_DESTINATION = "suppress_owned_by_destination"
    SUPPRESS_LOOKUP_FAILED = "suppress_lookup_failed"

    @property
    def reflected(self) -> bool:
        return self in (FilterDecision.REFLECT, FilterDecision.REFLECT_EXTERNAL)


# =============================================================================
# Configuration Enums
# =============================================================================


class LogLevel(str, Enum):
    """
    Logging verbosity levels.

    Levels (from most to least verbose):
        - FULL: Complete trace with detailed stack information
        - DEBUG: Debug messages and above
        - INFO: Informational messages and above
        - WARNING: Only warnings and errors
    """

    FULL = "full"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
