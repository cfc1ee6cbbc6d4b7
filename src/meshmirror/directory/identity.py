"""Cluster identity derived from the tenant namespace naming convention."""

from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TENANT_PREFIX = "liqo-tenant-"


def cluster_name_from_namespace(
    namespace: str, prefix: str = DEFAULT_TENANT_PREFIX
) -> str:
    """
    Strip the tenant prefix from a namespace to get the cluster name.

    ``liqo-tenant-cluster-b`` -> ``cluster-b``. A namespace that does not
    follow the convention yields an empty string; callers must treat that
    as a configuration error.
    """
    if namespace and len(namespace) > len(prefix) and namespace.startswith(prefix):
        return namespace[len(prefix) :]

    logger.warning(f"Could not extract cluster name from namespace: {namespace!r}")
    return ""
