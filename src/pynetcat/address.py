from __future__ import annotations

import ipaddress

# RFC 1918 only; ipaddress' is_private also covers link-local, documentation
# and reserved blocks, which are rejected here.
_PRIVATE_V4 = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
)
_SHARED_V4 = ipaddress.ip_network("100.64.0.0/10")


def _is_valid_v4(address: str) -> bool:
    ip = ipaddress.IPv4Address(address)
    if ip.is_multicast:
        return False
    return (
        ip.is_global
        or ip in _SHARED_V4
        or any(ip in net for net in _PRIVATE_V4)
        or ip.is_loopback
    )


def _is_valid_v6(address: str) -> bool:
    ip = ipaddress.IPv6Address(address)
    if ip.is_multicast or ip.ipv4_mapped is not None:
        return False
    return ip.is_global or ip.is_loopback


def is_valid_address(address: str, version: int) -> bool:
    """Return True if ``address`` is a usable endpoint literal for ``version``.

    Accepts global, shared, private and loopback IPv4 addresses, and global or
    loopback IPv6 addresses. Never raises.
    """
    if not isinstance(address, str):
        return False
    try:
        if version == 4:
            return _is_valid_v4(address)
        if version == 6:
            return _is_valid_v6(address)
    except ValueError:
        return False
    return False
