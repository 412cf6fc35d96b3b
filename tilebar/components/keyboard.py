"""Keyboard lock indicators and keymap layout names."""

from __future__ import annotations

import re
from typing import Optional

_FMT_LIMIT = 4
_INVALID_SYMBOLS = ("evdev", "inet", "pc", "base")
_SEPARATORS = re.compile(r"[+:_]")


def format_indicators(fmt: str, led_mask: int) -> str:
    """Render caps ('c') and num ('n') lock state from ``led_mask`` as ``fmt`` asks.

    A letter followed by '?' appears, case kept, only while its lock is on;
    otherwise the letter always appears, upper case when on and lower when off.
    Only the first four characters of ``fmt`` are used.
    """
    fmt = fmt[:_FMT_LIMIT]
    out = []
    for i, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        togglecase = i + 1 >= len(fmt) or fmt[i + 1] != "?"
        isset = bool(led_mask & (1 << (key == "n")))
        if togglecase:
            out.append(key.upper() if isset else key)
        elif isset:
            out.append(char)
    return "".join(out)


def _valid_layout_or_variant(symbol: str) -> bool:
    return not symbol.startswith(_INVALID_SYMBOLS)


def get_layout(symbols: str, group: int) -> Optional[str]:
    """Return the layout of keyboard group ``group`` from an XKB symbols name."""
    layout = None
    found = 0
    for token in filter(None, _SEPARATORS.split(symbols)):
        if found > group:
            break
        if not _valid_layout_or_variant(token):
            continue
        if len(token) == 1 and token.isdigit():
            continue
        layout = token
        found += 1
    return layout