"""Physical memory and swap usage from the kernel's meminfo table."""

from __future__ import annotations

from typing import Dict, Optional

from tilebar.util import PathLike, fmt_human, meminfo_field, read_text

MEMINFO = "/proc/meminfo"

_RAM_KEYS = ("MemTotal:", "MemFree:", "Buffers:", "Cached:", "Shmem:", "SReclaimable:")


def _fields(path: PathLike, *keys: str) -> Optional[Dict[str, int]]:
    """Return the named meminfo fields in kB, or None if any is missing."""
    text = read_text(path)
    if text is None:
        return None
    values = {}
    for key in keys:
        value = meminfo_field(text, key)
        if value is None:
            return None
        values[key] = value
    return values


def _ram_used_kb(path: PathLike) -> Optional[tuple]:
    fields = _fields(path, *_RAM_KEYS)
    if fields is None:
        return None
    used = (
        fields["MemTotal:"]
        - fields["MemFree:"]
        - fields["Buffers:"]
        - fields["Cached:"]
        - fields["SReclaimable:"]
        + fields["Shmem:"]
    )
    return fields["MemTotal:"], used


def ram_free(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the amount of free memory."""
    fields = _fields(path, "MemFree:")
    return None if fields is None else fmt_human(fields["MemFree:"] * 1024, 1024)


def ram_perc(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the share of memory in use, in percent."""
    result = _ram_used_kb(path)
    if result is None:
        return None
    total, used = result
    if total == 0:
        return None
    return str(100 * used // total)


def ram_total(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the total amount of memory."""
    fields = _fields(path, "MemTotal:")
    return None if fields is None else fmt_human(fields["MemTotal:"] * 1024, 1024)


def ram_used(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the amount of memory in use, not counting buffers and caches."""
    result = _ram_used_kb(path)
    if result is None:
        return None
    return fmt_human(result[1] * 1024, 1024)


def _swap(path: PathLike, *names: str) -> Optional[Dict[str, int]]:
    fields = _fields(path, *(f"{name}:" for name in names))
    if fields is None:
        return None
    return {key.rstrip(":"): value for key, value in fields.items()}


def swap_free(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the amount of free swap."""
    swap = _swap(path, "SwapFree")
    return None if swap is None else fmt_human(swap["SwapFree"] * 1024, 1024)


def swap_perc(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the share of swap in use, in percent."""
    swap = _swap(path, "SwapTotal", "SwapFree", "SwapCached")
    if swap is None or swap["SwapTotal"] == 0:
        return None
    used = swap["SwapTotal"] - swap["SwapFree"] - swap["SwapCached"]
    return str(int(100 * used / swap["SwapTotal"]))


def swap_total(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the total amount of swap."""
    swap = _swap(path, "SwapTotal")
    return None if swap is None else fmt_human(swap["SwapTotal"] * 1024, 1024)


def swap_used(unused: Optional[str] = None, path: PathLike = MEMINFO) -> Optional[str]:
    """Return the amount of swap in use, not counting cached pages."""
    swap = _swap(path, "SwapTotal", "SwapFree", "SwapCached")
    if swap is None:
        return None
    used = swap["SwapTotal"] - swap["SwapFree"] - swap["SwapCached"]
    return fmt_human(used * 1024, 1024)