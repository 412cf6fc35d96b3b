"""Receive and transmit rates of a network interface."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from tilebar.util import PathLike, fmt_human, read_int

NET_CLASS = "/sys/class/net"

_DIRECTIONS = ("rx", "tx")


class NetSpeed:
    """Callable that reports bytes per second since its previous call.

    ``direction`` is 'rx' or 'tx'; ``interval`` is the update interval in
    milliseconds. The first successful reading only records a sample.
    """

    def __init__(self, direction: str, interval: int = 1000, root: PathLike = NET_CLASS) -> None:
        if direction not in _DIRECTIONS:
            raise ValueError(f"direction must be 'rx' or 'tx', not {direction!r}")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.direction = direction
        self.interval = interval
        self.root = Path(root)
        self._bytes = 0

    def __call__(self, interface: str) -> Optional[str]:
        previous = self._bytes
        path = self.root / interface / "statistics" / f"{self.direction}_bytes"
        current = read_int(path)
        if current is None:
            return None
        self._bytes = current
        if previous == 0:
            return None
        return fmt_human((current - previous) * 1000 // self.interval, 1024)