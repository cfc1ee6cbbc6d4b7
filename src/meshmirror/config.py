"""
Reflector configuration for meshmirror.

This module defines the configuration dataclass for the reflection and
reconciliation components, providing a centralized place for all
configurable parameters.

Configuration can be modified at runtime by importing the global config
instance and updating its attributes, or loaded from ``MESHMIRROR_*``
environment variables with :meth:`ReflectorConfig.from_env`.

Usage:
    from meshmirror.config import config

    config.IPAM_URL = "http://ipam.liqo.svc:8080"
    config.LOG_LEVEL = LogLevel.DEBUG
"""

import os
from dataclasses import dataclass, field, fields

from meshmirror.directory.identity import cluster_name_from_namespace
from meshmirror.exceptions import ConfigurationError
from meshmirror.models.enums import LogLevel

ENV_PREFIX = "MESHMIRROR_"


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class ReflectorConfig:
    """
    Reflector configuration.

    Attributes:
        POD_NAMESPACE: Namespace the reflector runs in. The destination
            cluster name is derived from it.
        CLUSTER_NAME: Explicit destination cluster name; overrides the
            namespace convention when set.
        IPAM_URL: Base URL of the IPAM service used by reconciliation.
        LOG_LEVEL: Logging verbosity level.
    """

    # -------------------------------------------------------------------------
    # Identity Configuration
    # -------------------------------------------------------------------------

    POD_NAMESPACE: str = ""
    TENANT_NAMESPACE_PREFIX: str = "liqo-tenant-"
    CLUSTER_NAME: str = ""
    # Node name given to reflected endpoints (addresses are final on this side)
    LOCAL_CLUSTER_ID: str = "local"

    # -------------------------------------------------------------------------
    # Topology Configuration
    # -------------------------------------------------------------------------

    CONNECTIONS_NAMESPACE: str = "default"
    CONNECTION_CRD_GROUP: str = "networking.meshmirror.io"
    CONNECTION_CRD_VERSION: str = "v1beta1"
    CONNECTION_CRD_PLURAL: str = "foreignclusterconnections"
    REMOTE_CLUSTER_ID_LABEL: str = "meshmirror.io/remote-cluster-id"

    # -------------------------------------------------------------------------
    # Kubernetes Client Configuration
    # -------------------------------------------------------------------------

    KUBECONFIG: str = ""
    IN_CLUSTER: bool = True
    KUBE_REQUEST_TIMEOUT_SECONDS: float = 10.0

    # -------------------------------------------------------------------------
    # IPAM Configuration
    # -------------------------------------------------------------------------

    IPAM_URL: str = "http://127.0.0.1:6000"
    IPAM_TIMEOUT_SECONDS: float = 10.0
    # Deadline for mapping all addresses of one resource
    RECONCILE_DEADLINE_SECONDS: float = 30.0

    # -------------------------------------------------------------------------
    # Forging Configuration
    # -------------------------------------------------------------------------

    LABELS_NOT_REFLECTED: list[str] = field(default_factory=list)
    ANNOTATIONS_NOT_REFLECTED: list[str] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Logging Configuration
    # -------------------------------------------------------------------------

    LOG_LEVEL: LogLevel = LogLevel.INFO
    LOG_FILE: str = ""

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def get_cluster_name(self) -> str:
        """
        Get the name of the cluster this process reflects into.

        Returns:
            CLUSTER_NAME if set, otherwise the name derived from POD_NAMESPACE.

        Raises:
            ConfigurationError: If no name can be derived.
        """
        if self.CLUSTER_NAME:
            return self.CLUSTER_NAME

        name = cluster_name_from_namespace(
            self.POD_NAMESPACE, self.TENANT_NAMESPACE_PREFIX
        )
        if not name:
            raise ConfigurationError(
                f"Cannot derive cluster name from namespace {self.POD_NAMESPACE!r} "
                f"(expected prefix {self.TENANT_NAMESPACE_PREFIX!r}); "
                f"set {ENV_PREFIX}CLUSTER_NAME explicitly"
            )
        return name

    def get_ipam_url(self) -> str:
        """Get the IPAM base URL without a trailing slash."""
        return self.IPAM_URL.rstrip("/")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ReflectorConfig":
        """
        Build a configuration from environment variables.

        Each attribute is read from ``MESHMIRROR_<NAME>``; POD_NAMESPACE is
        also read unprefixed (as injected by the downward API). List values
        are comma-separated.
        """
        environ = os.environ if environ is None else environ
        cfg = cls()

        if "POD_NAMESPACE" in environ:
            cfg.POD_NAMESPACE = environ["POD_NAMESPACE"]

        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name)
            if raw is None:
                continue
            current = getattr(cfg, f.name)
            if isinstance(current, bool):
                value = raw.strip().lower() in ("1", "true", "yes", "on")
            elif isinstance(current, LogLevel):
                value = LogLevel(raw.strip().lower())
            elif isinstance(current, float):
                value = float(raw)
            elif isinstance(current, list):
                value = [item.strip() for item in raw.split(",") if item.strip()]
            else:
                value = raw
            setattr(cfg, f.name, value)

        return cfg


# =============================================================================
# Global Instance
# =============================================================================

# Global config instance - modify before starting the reflector
config = ReflectorConfig()
