"""Local network interface enumeration backed by psutil."""

import socket

import psutil

from hubwatch.core.address import InterfaceAddress

_FAMILIES = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}


def psutil_interfaces() -> list[InterfaceAddress]:
    """Return the IP addresses bound to local interfaces, in psutil's order."""
    addresses: list[InterfaceAddress] = []
    for name, entries in psutil.net_if_addrs().items():
        for entry in entries:
            family = _FAMILIES.get(entry.family)
            if family is None:
                # Link-layer (MAC) addresses
                continue
            addresses.append(InterfaceAddress(interface=name, family=family, address=entry.address))
    return addresses
