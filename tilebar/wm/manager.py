"""Window manager core: managing clients, focus, monitors and input classification."""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

from tilebar.wm.layout import Arranger, default_layouts
from tilebar.wm.model import (
    BROKEN,
    Client,
    Layout,
    Monitor,
    Rule,
    apply_rules,
    dir_to_monitor,
)

Screen = Tuple[int, int, int, int]

BORDER_PX = 2
TAGS = ("1", "2", "3", "4", "5", "6", "7", "8", "9")

DEFAULT_RULES = (
    Rule(window_class="Gimp", tags=0, is_floating=True, monitor=-1),
    Rule(window_class="Firefox", tags=1 << 8, is_floating=False, monitor=-1),
)

# X modifier masks
SHIFT_MASK = 1 << 0
LOCK_MASK = 1 << 1
CONTROL_MASK = 1 << 2
MOD1_MASK = 1 << 3
MOD2_MASK = 1 << 4
MOD3_MASK = 1 << 5
MOD4_MASK = 1 << 6
MOD5_MASK = 1 << 7

_MODIFIERS = (
    SHIFT_MASK | CONTROL_MASK | MOD1_MASK | MOD2_MASK | MOD3_MASK | MOD4_MASK | MOD5_MASK
)

# X protocol error codes
BAD_WINDOW = 3
BAD_MATCH = 8
BAD_DRAWABLE = 9
BAD_ACCESS = 10

# X protocol request codes
X_CONFIGURE_WINDOW = 12
X_GRAB_BUTTON = 28
X_GRAB_KEY = 33
X_SET_INPUT_FOCUS = 42
X_COPY_AREA = 62
X_POLY_SEGMENT = 66
X_POLY_FILL_RECTANGLE = 70
X_POLY_TEXT8 = 74

_IGNORABLE = frozenset(
    {
        (X_SET_INPUT_FOCUS, BAD_MATCH),
        (X_POLY_TEXT8, BAD_DRAWABLE),
        (X_POLY_FILL_RECTANGLE, BAD_DRAWABLE),
        (X_POLY_SEGMENT, BAD_DRAWABLE),
        (X_CONFIGURE_WINDOW, BAD_MATCH),
        (X_GRAB_BUTTON, BAD_ACCESS),
        (X_GRAB_KEY, BAD_ACCESS),
        (X_COPY_AREA, BAD_DRAWABLE),
    }
)


class Click(IntEnum):
    """Where a mouse button was pressed."""

    TAG_BAR = 0
    LT_SYMBOL = 1
    STATUS_TEXT = 2
    WIN_TITLE = 3
    CLIENT_WIN = 4
    ROOT_WIN = 5


def clean_mask(mask: int, numlock_mask: int) -> int:
    """Strip Num Lock, Caps Lock and non-modifier bits from ``mask``."""
    return mask & ~(numlock_mask | LOCK_MASK) & _MODIFIERS


def classify_bar_click(
    x: int,
    tag_widths: Sequence[int],
    symbol_width: int,
    status_width: int,
    bar_width: int,
) -> Tuple[Click, int]:
    """Classify a click at ``x`` on the bar; tag clicks also return the tag's mask."""
    total = 0
    for index, width in enumerate(tag_widths):
        total += width
        if x < total:
            return Click.TAG_BAR, 1 << index
    if x < total + symbol_width:
        return Click.LT_SYMBOL, 0
    if x > bar_width - status_width:
        return Click.STATUS_TEXT, 0
    return Click.WIN_TITLE, 0


def is_ignorable_error(request_code: int, error_code: int) -> bool:
    """True for X errors caused by windows vanishing under the manager."""
    return error_code == BAD_WINDOW or (request_code, error_code) in _IGNORABLE


class WindowManager:
    """Manages clients across monitors without talking to a display server."""

    def __init__(
        self,
        width: int,
        height: int,
        bar_height: int,
        layouts: Optional[Sequence[Layout]] = None,
        rules: Optional[Sequence[Rule]] = None,
    ) -> None:
        self.layouts: List[Layout] = list(default_layouts() if layouts is None else layouts)
        if not self.layouts:
            raise ValueError("at least one layout is required")
        self.rules: List[Rule] = list(DEFAULT_RULES if rules is None else rules)
        self.width = width
        self.height = height
        self.bar_height = bar_height
        self.tags = TAGS
        self.border_px = BORDER_PX
        self.arranger = Arranger(width, height, bar_height)
        self.monitors: List[Monitor] = []
        self.selected: Optional[Monitor] = None
        self.update_geometry(None)

    def _create_monitor(self) -> Monitor:
        return Monitor(self.layouts, num_tags=len(self.tags))

    def _resize_client(self, client: Client, x: int, y: int, w: int, h: int) -> None:
        client.old_x, client.old_y, client.old_w, client.old_h = (
            client.x,
            client.y,
            client.w,
            client.h,
        )
        client.x, client.y, client.w, client.h = x, y, w, h

    def find_client(self, window: int) -> Optional[Client]:
        """Return the client managing ``window``, if any."""
        for monitor in self.monitors:
            for client in monitor.clients:
                if client.window == window:
                    return client
        return None

    def manage(
        self,
        window: int,
        x: int,
        y: int,
        w: int,
        h: int,
        window_class: Optional[str] = None,
        instance: Optional[str] = None,
        name: str = "",
        transient_for: Optional[int] = None,
    ) -> Client:
        """Start managing ``window`` and return its client."""
        if self.find_client(window) is not None:
            raise ValueError(f"window {window} is already managed")
        client = Client(window=window, name=name or BROKEN, x=x, y=y, w=w, h=h)
        client.old_x, client.old_y, client.old_w, client.old_h = x, y, w, h

        parent = self.find_client(transient_for) if transient_for is not None else None
        if parent is not None:
            client.monitor = parent.monitor
            client.tags = parent.tags
        else:
            client.monitor = self.selected
            apply_rules(client, self.rules, self.monitors, window_class, instance)

        monitor = client.monitor
        if client.x + client.width > monitor.wx + monitor.ww:
            client.x = monitor.wx + monitor.ww - client.width
        if client.y + client.height > monitor.wy + monitor.wh:
            client.y = monitor.wy + monitor.wh - client.height
        client.x = max(client.x, monitor.wx)
        client.y = max(client.y, monitor.wy)
        client.bw = self.border_px

        if not client.is_floating:
            client.is_floating = client.old_state = (
                transient_for is not None or client.is_fixed
            )
        monitor.attach(client)
        monitor.sel = client
        self.arrange(monitor)
        self.focus(None)
        return client

    def unmanage(self, window: int) -> Optional[Client]:
        """Stop managing ``window``; return its client, or None if it was unknown."""
        client = self.find_client(window)
        if client is None:
            return None
        monitor = client.monitor
        monitor.detach(client)
        self.focus(None)
        self.arrange(monitor)
        return client

    def focus(self, client: Optional[Client]) -> Optional[Client]:
        """Focus ``client``, or the most recent visible client when it cannot be."""
        if client is None or not client.is_visible():
            client = next((c for c in self.selected.stack if c.is_visible()), None)
        if client is not None:
            self.selected = client.monitor
            self.selected.select(client)
        else:
            self.selected.sel = None
        return client

    def focus_monitor(self, direction: int) -> Monitor:
        """Select the next or previous monitor and return the selected one."""
        if len(self.monitors) < 2:
            return self.selected
        target = dir_to_monitor(self.monitors, self.selected, direction)
        if target is self.selected:
            return self.selected
        self.selected = target
        self.focus(None)
        return self.selected

    def tag_monitor(self, direction: int) -> None:
        """Send the selected client to the next or previous monitor."""
        if self.selected.sel is None or len(self.monitors) < 2:
            return
        target = dir_to_monitor(self.monitors, self.selected, direction)
        self.send_to_monitor(self.selected.sel, target)

    def send_to_monitor(self, client: Client, monitor: Monitor) -> None:
        """Move ``client`` to ``monitor``, giving it the tags that monitor shows."""
        if client.monitor is monitor:
            return
        client.monitor.detach(client)
        client.tags = monitor.tags
        monitor.attach(client)
        self.focus(None)
        self.arrange(None)

    def update_geometry(self, screens: Optional[Sequence[Screen]]) -> bool:
        """Match monitors to ``screens`` (x, y, w, h); None means one full screen.

        Return whether any monitor changed.
        """
        dirty = False
        if screens:
            unique: List[Screen] = []
            for screen in screens:
                screen = tuple(screen)
                if screen not in unique:
                    unique.append(screen)
            old_count = len(self.monitors)
            for _ in range(old_count, len(unique)):
                self.monitors.append(self._create_monitor())
            for index, (monitor, (sx, sy, sw, sh)) in enumerate(zip(self.monitors, unique)):
                if index >= old_count or (monitor.mx, monitor.my, monitor.mw, monitor.mh) != (
                    sx,
                    sy,
                    sw,
                    sh,
                ):
                    dirty = True
                    monitor.num = index
                    monitor.mx = monitor.wx = sx
                    monitor.my = monitor.wy = sy
                    monitor.mw = monitor.ww = sw
                    monitor.mh = monitor.wh = sh
                    monitor.update_bar_pos(self.bar_height)
            while len(self.monitors) > len(unique):
                removed = self.monitors.pop()
                first = self.monitors[0]
                for client in list(removed.clients):
                    dirty = True
                    removed.detach(client)
                    first.attach(client)
                if removed is self.selected:
                    self.selected = first
        else:
            if not self.monitors:
                self.monitors.append(self._create_monitor())
            first = self.monitors[0]
            if first.mw != self.width or first.mh != self.height:
                dirty = True
                first.mw = first.ww = self.width
                first.mh = first.wh = self.height
                first.update_bar_pos(self.bar_height)

        if dirty or self.selected is None:
            self.selected = self.monitors[0]
        if dirty:
            for monitor in self.monitors:
                for client in monitor.clients:
                    if client.is_fullscreen:
                        self._resize_client(client, monitor.mx, monitor.my, monitor.mw, monitor.mh)
            self.focus(None)
            self.arrange(None)
        return dirty

    def set_fullscreen(self, client: Client, fullscreen: bool) -> None:
        """Cover the client's whole monitor, or restore its earlier geometry."""
        if fullscreen and not client.is_fullscreen:
            client.is_fullscreen = True
            client.old_state = client.is_floating
            client.old_bw = client.bw
            client.bw = 0
            client.is_floating = True
            monitor = client.monitor
            self._resize_client(client, monitor.mx, monitor.my, monitor.mw, monitor.mh)
        elif not fullscreen and client.is_fullscreen:
            client.is_fullscreen = False
            client.is_floating = client.old_state
            client.bw = client.old_bw
            client.x, client.y, client.w, client.h = (
                client.old_x,
                client.old_y,
                client.old_w,
                client.old_h,
            )
            self._resize_client(client, client.x, client.y, client.w, client.h)
            self.arrange(client.monitor)

    def arrange(self, monitor: Optional[Monitor]) -> None:
        """Lay out ``monitor``, or every monitor when it is None."""
        targets = self.monitors if monitor is None else [monitor]
        for target in targets:
            self.arranger.arrange(target)