"""Size-hint handling and the tiling and monocle arrangements."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from tilebar.wm.model import SYMBOL_SIZE, Client, Layout, Monitor

Geometry = Tuple[int, int, int, int]


def default_layouts() -> List[Layout]:
    """Return the configured layouts; the first one is the default."""
    return [
        Layout("[ TILE ]", "tile"),
        Layout("[ FLOATING ]", None),
        Layout("[ MONOCLE ]", "monocle"),
    ]


def _trunc_mod(value: int, divisor: int) -> int:
    """Remainder with the sign of ``value``, as integer division truncating to zero gives."""
    return int(math.fmod(value, divisor))


def _div(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0:
        return math.nan
    return math.inf if numerator > 0 else -math.inf


@dataclass
class Arranger:
    """Places clients on monitors for a screen of the given size.

    ``bar_height`` is also the smallest width and height a client may take.
    With ``resize_hints`` off, tiled clients ignore their size hints.
    """

    screen_width: int
    screen_height: int
    bar_height: int
    resize_hints: bool = True

    def _layouts(self) -> Dict[str, Callable[[Monitor], None]]:
        return {"tile": self.tile, "monocle": self.monocle}

    def apply_size_hints(
        self, client: Client, x: int, y: int, w: int, h: int, interact: bool
    ) -> Geometry:
        """Return the geometry ``client`` may take when asked for the given one.

        With ``interact`` the client is kept on the screen, otherwise inside
        its monitor's window area.
        """
        monitor = client.monitor
        if monitor is None:
            raise ValueError("client has no monitor")
        w = max(1, w)
        h = max(1, h)
        if interact:
            if x > self.screen_width:
                x = self.screen_width - client.width
            if y > self.screen_height:
                y = self.screen_height - client.height
            if x + w + 2 * client.bw < 0:
                x = 0
            if y + h + 2 * client.bw < 0:
                y = 0
        else:
            if x >= monitor.wx + monitor.ww:
                x = monitor.wx + monitor.ww - client.width
            if y >= monitor.wy + monitor.wh:
                y = monitor.wy + monitor.wh - client.height
            if x + w + 2 * client.bw <= monitor.wx:
                x = monitor.wx
            if y + h + 2 * client.bw <= monitor.wy:
                y = monitor.wy
        h = max(h, self.bar_height)
        w = max(w, self.bar_height)

        if self.resize_hints or client.is_floating or monitor.layout.arrange is None:
            hints = client.hints
            client.hints_valid = True
            # ICCCM 4.1.2.3: base size counts as minimum when the two agree
            base_is_min = hints.basew == hints.minw and hints.baseh == hints.minh
            if not base_is_min:
                w -= hints.basew
                h -= hints.baseh
            if hints.mina > 0 and hints.maxa > 0:
                if hints.maxa < _div(w, h):
                    w = int(h * hints.maxa + 0.5)
                elif hints.mina < _div(h, w):
                    h = int(w * hints.mina + 0.5)
            if base_is_min:
                w -= hints.basew
                h -= hints.baseh
            if hints.incw:
                w -= _trunc_mod(w, hints.incw)
            if hints.inch:
                h -= _trunc_mod(h, hints.inch)
            w = max(w + hints.basew, hints.minw)
            h = max(h + hints.baseh, hints.minh)
            if hints.maxw:
                w = min(w, hints.maxw)
            if hints.maxh:
                h = min(h, hints.maxh)
        return x, y, w, h

    def resize(
        self, client: Client, x: int, y: int, w: int, h: int, interact: bool = False
    ) -> bool:
        """Move and resize ``client`` within its hints; return whether it changed."""
        geometry = self.apply_size_hints(client, x, y, w, h, interact)
        if geometry == (client.x, client.y, client.w, client.h):
            return False
        client.old_x, client.old_y, client.old_w, client.old_h = (
            client.x,
            client.y,
            client.w,
            client.h,
        )
        client.x, client.y, client.w, client.h = geometry
        return True

    def tile(self, monitor: Monitor) -> None:
        """Stack master clients on the left and the rest on the right."""
        tiled = monitor.tiled()
        n = len(tiled)
        if n == 0:
            return
        if n > monitor.nmaster:
            master_width = int(monitor.ww * monitor.mfact) if monitor.nmaster else 0
        else:
            master_width = monitor.ww
        master_y = stack_y = 0
        for i, client in enumerate(tiled):
            if i < monitor.nmaster:
                h = (monitor.wh - master_y) // (min(n, monitor.nmaster) - i)
                self.resize(
                    client,
                    monitor.wx,
                    monitor.wy + master_y,
                    master_width - 2 * client.bw,
                    h - 2 * client.bw,
                    False,
                )
                if master_y + client.height < monitor.wh:
                    master_y += client.height
            else:
                h = (monitor.wh - stack_y) // (n - i)
                self.resize(
                    client,
                    monitor.wx + master_width,
                    monitor.wy + stack_y,
                    monitor.ww - master_width - 2 * client.bw,
                    h - 2 * client.bw,
                    False,
                )
                if stack_y + client.height < monitor.wh:
                    stack_y += client.height

    def monocle(self, monitor: Monitor) -> None:
        """Give every tiled client the whole window area."""
        visible = sum(1 for c in monitor.clients if c.is_visible())
        if visible > 0:
            monitor.symbol = f"[{visible}]"[:SYMBOL_SIZE]
        for client in monitor.tiled():
            self.resize(
                client,
                monitor.wx,
                monitor.wy,
                monitor.ww - 2 * client.bw,
                monitor.wh - 2 * client.bw,
                False,
            )

    def arrange(self, monitor: Monitor) -> None:
        """Refit floating clients and run the monitor's layout."""
        layout = monitor.layout
        arrange_fn: Optional[Callable[[Monitor], None]] = None
        if layout.arrange is not None:
            try:
                arrange_fn = self._layouts()[layout.arrange]
            except KeyError:
                raise ValueError(f"unknown layout function {layout.arrange!r}") from None
        for client in monitor.stack:
            if not client.is_visible():
                continue
            if (layout.arrange is None or client.is_floating) and not client.is_fullscreen:
                self.resize(client, client.x, client.y, client.w, client.h, False)
        monitor.symbol = layout.symbol[:SYMBOL_SIZE]
        if arrange_fn is not None:
            arrange_fn(monitor)