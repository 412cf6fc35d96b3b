"""Interface addresses and link state."""

from __future__ import annotations

import socket
from typing import Optional

import psutil

from tilebar.util import warn


def _address(interface: str, family: int) -> Optional[str]:
    try:
        addresses = psutil.net_if_addrs()
    except OSError as exc:
        warn(f"getifaddrs: {exc}")
        return None
    for addr in addresses.get(interface, ()):
        if addr.family == family and addr.address:
            return addr.address
    return None


def ipv4(interface: str) -> Optional[str]:
    """Return the first IPv4 address of ``interface``."""
    return _address(interface, socket.AF_INET)


def ipv6(interface: str) -> Optional[str]:
    """Return the first IPv6 address of ``interface``."""
    return _address(interface, socket.AF_INET6)


def up(interface: str) -> Optional[str]:
    """Return 'up' or 'down' for ``interface``, or None if it does not exist."""
    try:
        stats = psutil.net_if_stats()
    except OSError as exc:
        warn(f"getifaddrs: {exc}")
        return None
    entry = stats.get(interface)
    if entry is None:
        return None
    return "up" if entry.isup else "down"