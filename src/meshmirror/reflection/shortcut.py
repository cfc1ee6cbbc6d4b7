"""
Shortcut detection and CIDR remapping.

An address that belongs to the observed pod range of a peer reachable through
a shortcut is relocated into the shortcut range: the network bits come from
the shortcut CIDR and the host bits are kept from the original address.

Example:
    10.0.1.5 in 10.0.1.0/24, shortcut 10.244.0.0/24 -> 10.244.0.5

Only IPv4 is supported. Anything else raises AddressFormatError rather than
being reported as a non-match.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable

from meshmirror.exceptions import AddressFormatError
from meshmirror.models.connections import CidrPair
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Parsing
# =============================================================================


def parse_ipv4_address(address: str) -> ipaddress.IPv4Address:
    """Parse an IPv4 address, raising AddressFormatError otherwise."""
    try:
        ip = ipaddress.ip_address(address.strip())
    except (ValueError, AttributeError) as e:
        raise AddressFormatError(
            f"Invalid IP address: {address!r}", address=address
        ) from e

    if ip.version != 4:
        raise AddressFormatError(
            f"Only IPv4 addresses are supported, got {address}", address=address
        )
    return ip


def parse_ipv4_network(cidr: str) -> ipaddress.IPv4Network:
    """
    Parse an IPv4 CIDR, raising AddressFormatError otherwise.

    Host bits set in the CIDR string are tolerated (``10.0.1.7/24`` is read
    as ``10.0.1.0/24``).
    """
    try:
        network = ipaddress.ip_network(cidr.strip(), strict=False)
    except (ValueError, AttributeError) as e:
        raise AddressFormatError(f"Invalid CIDR: {cidr!r} - {e}", cidr=cidr) from e

    if network.version != 4:
        raise AddressFormatError(
            f"Only IPv4 CIDRs are supported, got {cidr}", cidr=cidr
        )
    return network


# =============================================================================
# Primitives
# =============================================================================


def ip_belongs_to_cidr(address: str, cidr: str) -> bool:
    """Check whether the given IPv4 address belongs to the given CIDR."""
    ip = parse_ipv4_address(address)
    network = parse_ipv4_network(cidr)
    return ip in network


def remap_address_using_cidr(address: str, cidr: str) -> str:
    """
    Relocate an address into the given network, keeping its host bits.

    For each octet: ``(network[i] & mask[i]) | (address[i] & ~mask[i])``.

    Args:
        address: IPv4 address to remap.
        cidr: Target network in CIDR notation.

    Returns:
        The remapped address.
    """
    ip = parse_ipv4_address(address)
    network = parse_ipv4_network(cidr)

    mask = int(network.netmask)
    remapped = (int(network.network_address) & mask) | (int(ip) & ~mask & 0xFFFFFFFF)
    return str(ipaddress.IPv4Address(remapped))


# =============================================================================
# Resolver
# =============================================================================


def _match_pair(address: str, pair: CidrPair) -> str | None:
    observed = parse_ipv4_network(pair.observed_cidr)
    if parse_ipv4_address(address) not in observed:
        return None

    shortcut = parse_ipv4_network(pair.shortcut_cidr)
    if observed.prefixlen != shortcut.prefixlen:
        raise AddressFormatError(
            f"Prefix length mismatch between observed CIDR {pair.observed_cidr} "
            f"and shortcut CIDR {pair.shortcut_cidr}",
            address=address,
            cidr=pair.shortcut_cidr,
        )

    return remap_address_using_cidr(address, pair.shortcut_cidr)


def resolve_shortcut(address: str, cidr_pairs: Iterable[CidrPair]) -> str | None:
    """
    Find the shortcut an address belongs to and return its remapped form.

    Pairs are tried in the given order and the first match wins. A pair
    that cannot be evaluated (malformed or non-IPv4 CIDR, mismatched prefix
    lengths) counts as a non-match for that pair only; if no later pair
    matches, the first such error is raised.

    Args:
        address: IPv4 address of an endpoint.
        cidr_pairs: CidrPairs applicable to the destination cluster.

    Returns:
        The remapped address, or None when no shortcut applies.

    Raises:
        AddressFormatError: If the address is not IPv4, or a pair failed and
            no other pair matched.
    """
    parse_ipv4_address(address)

    first_error: AddressFormatError | None = None
    for pair in cidr_pairs:
        try:
            remapped = _match_pair(address, pair)
        except AddressFormatError as e:
            logger.error(f"Unable to check address {address} against {pair}: {e}")
            if first_error is None:
                first_error = e
            continue

        if remapped is not None:
            logger.info(f"Address ({address}) is from a shortcut! Remapped to: {remapped}")
            return remapped

    if first_error is not None:
        raise first_error
    return None
