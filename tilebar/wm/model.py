"""Window-manager state: clients, monitors, tags, rules and layouts."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

DEFAULT_MFACT = 0.55
DEFAULT_NMASTER = 1
MFACT_MIN = 0.05
MFACT_MAX = 0.95
MAX_TAGS = 31
SYMBOL_SIZE = 15
BROKEN = "broken"
LOCK_FULLSCREEN = True

Pair = Tuple[int, int]


def _ratio(numerator: int, denominator: int) -> float:
    if denominator:
        return numerator / denominator
    return math.inf if numerator > 0 else 0.0


@dataclass(frozen=True)
class SizeHints:
    """ICCCM normal size hints of a client, with absent values as zero."""

    basew: int = 0
    baseh: int = 0
    incw: int = 0
    inch: int = 0
    maxw: int = 0
    maxh: int = 0
    minw: int = 0
    minh: int = 0
    mina: float = 0.0
    maxa: float = 0.0

    @classmethod
    def from_normal_hints(
        cls,
        base: Optional[Pair] = None,
        minimum: Optional[Pair] = None,
        increment: Optional[Pair] = None,
        maximum: Optional[Pair] = None,
        aspect: Optional[Tuple[Pair, Pair]] = None,
    ) -> "SizeHints":
        """Build hints from the fields a window sets; base and minimum stand in for each other."""
        basew, baseh = base or minimum or (0, 0)
        minw, minh = minimum or base or (0, 0)
        incw, inch = increment or (0, 0)
        maxw, maxh = maximum or (0, 0)
        if aspect is not None:
            (min_x, min_y), (max_x, max_y) = aspect
            mina = _ratio(min_y, min_x)
            maxa = _ratio(max_x, max_y)
        else:
            mina = maxa = 0.0
        return cls(basew, baseh, incw, inch, maxw, maxh, minw, minh, mina, maxa)

    @property
    def is_fixed(self) -> bool:
        """True when the window cannot be resized at all."""
        return bool(
            self.maxw and self.maxh and self.maxw == self.minw and self.maxh == self.minh
        )


@dataclass(frozen=True, eq=False)
class Layout:
    """A layout symbol and the name of its arrange function; None means floating."""

    symbol: str
    arrange: Optional[str] = None


@dataclass(frozen=True)
class Rule:
    """Matches windows by substrings of class, instance and title."""

    window_class: Optional[str] = None
    instance: Optional[str] = None
    title: Optional[str] = None
    tags: int = 0
    is_floating: bool = False
    monitor: int = -1

    def matches(self, window_class: str, instance: str, title: str) -> bool:
        """True when every given pattern occurs in the matching property."""
        return (
            (self.title is None or self.title in title)
            and (self.window_class is None or self.window_class in window_class)
            and (self.instance is None or self.instance in instance)
        )


@dataclass(eq=False)
class Client:
    """A managed top-level window."""

    window: int
    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    old_x: int = 0
    old_y: int = 0
    old_w: int = 0
    old_h: int = 0
    bw: int = 0
    old_bw: int = 0
    tags: int = 0
    hints: SizeHints = field(default_factory=SizeHints)
    hints_valid: bool = False
    is_floating: bool = False
    is_urgent: bool = False
    never_focus: bool = False
    old_state: bool = False
    is_fullscreen: bool = False
    monitor: Optional["Monitor"] = field(default=None, repr=False)

    @property
    def width(self) -> int:
        """Width including both borders."""
        return self.w + 2 * self.bw

    @property
    def height(self) -> int:
        """Height including both borders."""
        return self.h + 2 * self.bw

    @property
    def is_fixed(self) -> bool:
        return self.hints.is_fixed

    def is_visible(self) -> bool:
        """True when the client carries a tag its monitor is showing."""
        return self.monitor is not None and bool(self.tags & self.monitor.tags)


class Monitor:
    """One screen: its geometry, tag views, layouts and client lists.

    ``clients`` is in tiling order and ``stack`` in focus order, most recent first.
    """

    def __init__(
        self,
        layouts: Sequence[Layout],
        num: int = 0,
        mfact: float = DEFAULT_MFACT,
        nmaster: int = DEFAULT_NMASTER,
        show_bar: bool = True,
        top_bar: bool = True,
        num_tags: int = 9,
    ) -> None:
        if not layouts:
            raise ValueError("at least one layout is required")
        if not 0 < num_tags <= MAX_TAGS:
            raise ValueError(f"number of tags must be between 1 and {MAX_TAGS}")
        self.num = num
        self.mfact = mfact
        self.nmaster = nmaster
        self.show_bar = show_bar
        self.top_bar = top_bar
        self.num_tags = num_tags
        self.bar_y = 0
        self.mx = self.my = self.mw = self.mh = 0
        self.wx = self.wy = self.ww = self.wh = 0
        self.seltags = 0
        self.sellt = 0
        self.tagset = [1, 1]
        self.layouts: List[Layout] = [layouts[0], layouts[1 % len(layouts)]]
        self.symbol = layouts[0].symbol[:SYMBOL_SIZE]
        self.clients: List[Client] = []
        self.stack: List[Client] = []
        self.sel: Optional[Client] = None
        self.bar_window: Optional[int] = None

    def __repr__(self) -> str:
        return (
            f"Monitor(num={self.num}, geometry=({self.mx}, {self.my}, {self.mw}, {self.mh}), "
            f"clients={len(self.clients)})"
        )

    @property
    def tag_mask(self) -> int:
        return (1 << self.num_tags) - 1

    @property
    def tags(self) -> int:
        """The tag set currently shown."""
        return self.tagset[self.seltags]

    @property
    def layout(self) -> Layout:
        """The layout in use."""
        return self.layouts[self.sellt]

    def attach(self, client: Client) -> None:
        """Put ``client`` at the head of the client list and the focus stack."""
        client.monitor = self
        self.clients.insert(0, client)
        self.stack.insert(0, client)

    def detach(self, client: Client) -> None:
        """Remove ``client``; if it was selected, select the next visible one."""
        self.clients.remove(client)
        self.stack.remove(client)
        if client is self.sel:
            self.sel = next((c for c in self.stack if c.is_visible()), None)

    def select(self, client: Client) -> None:
        """Make ``client`` the selected client and move it to the top of the stack."""
        if client.monitor is not self:
            raise ValueError("client belongs to another monitor")
        self.stack.remove(client)
        self.stack.insert(0, client)
        client.is_urgent = False
        self.sel = client

    def refocus(self) -> Optional[Client]:
        """Select the most recently focused visible client, if there is one."""
        candidate = next((c for c in self.stack if c.is_visible()), None)
        if candidate is None:
            self.sel = None
        else:
            self.select(candidate)
        return self.sel

    def tiled(self) -> List[Client]:
        """Visible, non-floating clients in tiling order."""
        return [c for c in self.clients if not c.is_floating and c.is_visible()]

    def view(self, mask: int) -> bool:
        """Show the tags in ``mask``; zero swaps back to the previous view."""
        mask &= self.tag_mask
        if mask == self.tags:
            return False
        self.seltags ^= 1
        if mask:
            self.tagset[self.seltags] = mask
        self.refocus()
        return True

    def toggle_view(self, mask: int) -> bool:
        """Add or remove tags from the view; the view never becomes empty."""
        newtagset = self.tags ^ (mask & self.tag_mask)
        if not newtagset:
            return False
        self.tagset[self.seltags] = newtagset
        self.refocus()
        return True

    def tag(self, mask: int) -> bool:
        """Give the selected client exactly the tags in ``mask``."""
        mask &= self.tag_mask
        if self.sel is None or not mask:
            return False
        self.sel.tags = mask
        self.refocus()
        return True

    def toggle_tag(self, mask: int) -> bool:
        """Flip tags of the selected client; a client always keeps one tag."""
        if self.sel is None:
            return False
        newtags = self.sel.tags ^ (mask & self.tag_mask)
        if not newtags:
            return False
        self.sel.tags = newtags
        self.refocus()
        return True

    def set_mfact(self, delta: float) -> bool:
        """Change the master area factor; values above 1.0 set it to ``delta - 1``."""
        if self.layout.arrange is None:
            return False
        factor = delta + self.mfact if delta < 1.0 else delta - 1.0
        if factor < MFACT_MIN or factor > MFACT_MAX:
            return False
        self.mfact = factor
        return True

    def inc_nmaster(self, delta: int) -> bool:
        """Change the number of master clients, never below zero."""
        self.nmaster = max(self.nmaster + delta, 0)
        return True

    def set_layout(self, layout: Optional[Layout] = None) -> Layout:
        """Switch to ``layout``, or back to the previous layout when it is None or current."""
        if layout is None or layout is not self.layout:
            self.sellt ^= 1
        if layout is not None:
            self.layouts[self.sellt] = layout
        self.symbol = self.layout.symbol[:SYMBOL_SIZE]
        return self.layout

    def focus_stack(self, direction: int) -> Optional[Client]:
        """Select the next (direction > 0) or previous visible client, wrapping around."""
        sel = self.sel
        if sel is None or (sel.is_fullscreen and LOCK_FULLSCREEN):
            return None
        index = self.clients.index(sel)
        if direction > 0:
            after = self.clients[index + 1:]
            candidates = [c for c in after if c.is_visible()] or [
                c for c in self.clients if c.is_visible()
            ]
            target = candidates[0] if candidates else None
        else:
            before = [c for c in self.clients[:index] if c.is_visible()]
            if not before:
                before = [c for c in self.clients[index:] if c.is_visible()]
            target = before[-1] if before else None
        if target is not None:
            self.select(target)
        return target

    def zoom(self) -> Optional[Client]:
        """Move the selected tiled client to the master area, or swap with the next one."""
        client = self.sel
        if self.layout.arrange is None or client is None or client.is_floating:
            return None
        tiled = self.tiled()
        if tiled and client is tiled[0]:
            if len(tiled) < 2:
                return None
            client = tiled[1]
        self.clients.remove(client)
        self.clients.insert(0, client)
        self.select(client)
        return client

    def intersect(self, x: int, y: int, w: int, h: int) -> int:
        """Area of the rectangle that lies inside the window area."""
        width = max(0, min(x + w, self.wx + self.ww) - max(x, self.wx))
        height = max(0, min(y + h, self.wy + self.wh) - max(y, self.wy))
        return width * height

    def update_bar_pos(self, bar_height: int) -> None:
        """Recompute the window area and bar position from the screen geometry."""
        self.wy = self.my
        self.wh = self.mh
        if self.show_bar:
            self.wh -= bar_height
            self.bar_y = self.wy if self.top_bar else self.wy + self.wh
            self.wy = self.wy + bar_height if self.top_bar else self.wy
        else:
            self.bar_y = -bar_height


def apply_rules(
    client: Client,
    rules: Sequence[Rule],
    monitors: Sequence[Monitor],
    window_class: Optional[str],
    instance: Optional[str],
) -> None:
    """Set floating state, tags and monitor of ``client`` from matching rules.

    The client must already be on a monitor; a missing class or instance
    matches as the word 'broken'.
    """
    if client.monitor is None:
        raise ValueError("client has no monitor")
    window_class = window_class if window_class is not None else BROKEN
    instance = instance if instance is not None else BROKEN
    client.is_floating = False
    tags = 0
    for rule in rules:
        if rule.matches(window_class, instance, client.name):
            client.is_floating = rule.is_floating
            tags |= rule.tags
            target = next((m for m in monitors if m.num == rule.monitor), None)
            if target is not None:
                client.monitor = target
    monitor = client.monitor
    client.tags = tags & monitor.tag_mask or monitor.tags


def rect_to_monitor(
    monitors: Sequence[Monitor], selected: Monitor, x: int, y: int, w: int, h: int
) -> Monitor:
    """Return the monitor that overlaps the rectangle most, ``selected`` if none does."""
    best, area = selected, 0
    for monitor in monitors:
        overlap = monitor.intersect(x, y, w, h)
        if overlap > area:
            best, area = monitor, overlap
    return best


def dir_to_monitor(monitors: Sequence[Monitor], selected: Monitor, direction: int) -> Monitor:
    """Return the next (direction > 0) or previous monitor, wrapping around."""
    index = list(monitors).index(selected)
    if direction > 0:
        return monitors[(index + 1) % len(monitors)]
    return monitors[index - 1]