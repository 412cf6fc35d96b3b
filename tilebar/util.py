"""Shared helpers for status components: formatting, file scanning, warnings."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def warn(message: str) -> None:
    """Write a diagnostic line to standard error."""
    print(message, file=sys.stderr)


def fmt_human(num: float, base: int) -> str:
    """Scale ``num`` by ``base`` and format it with one decimal and a unit prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base!r}") from None
    scaled = float(num)
    prefix = prefixes[0]
    for prefix in prefixes:
        if scaled < base or prefix == prefixes[-1]:
            break
        scaled /= base
    return f"{scaled:.1f} {prefix}"


def read_text(path: PathLike) -> Optional[str]:
    """Return the contents of ``path``, or None (with a warning) if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            return fp.read()
    except OSError as exc:
        warn(f"fopen '{path}': {exc.strerror or exc}")
        return None


def read_int(path: PathLike) -> Optional[int]:
    """Return the integer at the start of ``path``, or None if there is none."""
    text = read_text(path)
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def meminfo_field(text: str, key: str) -> Optional[int]:
    """Return the number following ``key`` on the first line that starts with it."""
    for line in text.splitlines():
        if line.startswith(key):
            match = _LEADING_INT.match(line[len(key):])
            return int(match.group(1)) if match else None
    return None