"""Battery level, charging state and remaining time from the power-supply class."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from tilebar.util import PathLike, read_int, read_text

POWER_SUPPLY = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}

_STATE_RE = re.compile(r"[a-zA-Z ]{1,12}")


def _read_state(base: Path) -> Optional[str]:
    text = read_text(base / "status")
    if text is None:
        return None
    match = _STATE_RE.match(text)
    return match.group(0) if match else None


def _pick(base: Path, *names: str) -> Optional[Path]:
    for name in names:
        candidate = base / name
        if os.access(candidate, os.R_OK):
            return candidate
    return None


def battery_perc(bat: str, root: PathLike = POWER_SUPPLY) -> Optional[str]:
    """Return the battery capacity in percent."""
    capacity = read_int(Path(root) / bat / "capacity")
    return None if capacity is None else str(capacity)


def battery_state(bat: str, root: PathLike = POWER_SUPPLY) -> Optional[str]:
    """Return '+', '-', 'o' or '?' for the battery's charging state."""
    state = _read_state(Path(root) / bat)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, root: PathLike = POWER_SUPPLY) -> Optional[str]:
    """Return the remaining time as 'Hh Mm' while discharging, '' otherwise."""
    base = Path(root) / bat
    state = _read_state(base)
    if state is None:
        return None

    charge_path = _pick(base, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge_now = read_int(charge_path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(base, "current_now", "power_now")
    if current_path is None:
        return None
    current_now = read_int(current_path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"