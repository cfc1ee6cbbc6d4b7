from meshmirror.ipam.client import IPAMClient

__all__ = ["IPAMClient"]
