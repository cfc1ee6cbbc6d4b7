"""Exception classes for meshmirror."""


class MeshMirrorError(Exception):
    """Base exception for reflection and reconciliation operations."""

    pass


class ConfigurationError(MeshMirrorError):
    """Missing or malformed topology records, or an unusable cluster identity."""

    pass


class AddressFormatError(MeshMirrorError):
    """Non-IPv4 address or CIDR, or CIDRs with mismatched prefix lengths."""

    def __init__(self, message: str, address: str | None = None, cidr: str | None = None):
        self.address = address
        self.cidr = cidr
        super().__init__(message)


class ResourceLookupError(MeshMirrorError):
    """A node or connection record could not be resolved."""

    def __init__(self, message: str, node_name: str | None = None):
        self.node_name = node_name
        super().__init__(message)


class RemoteError(MeshMirrorError):
    """
    A remote collaborator (IPAM service, Kubernetes API) failed.

    The surrounding reconciliation loop is expected to re-queue the resource.
    """

    retryable = True

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteTimeoutError(RemoteError):
    """A remote call exceeded its deadline."""

    pass
