import pytest

from tilebar.wm.model import (
    DEFAULT_MFACT,
    Client,
    Layout,
    Monitor,
    Rule,
    SizeHints,
    apply_rules,
    dir_to_monitor,
    rect_to_monitor,
)

TILE = Layout("[]=", "tile")
FLOAT = Layout("><>", None)
MONOCLE = Layout("[M]", "monocle")
LAYOUTS = [TILE, FLOAT, MONOCLE]


def make_monitor(num=0, x=0, y=0, w=800, h=600):
    m = Monitor(LAYOUTS, num=num)
    m.mx = m.wx = x
    m.my = m.wy = y
    m.mw = m.ww = w
    m.mh = m.wh = h
    return m


def populate(m, count, tags=1):
    clients = [Client(window=i + 1, tags=tags) for i in range(count)]
    for c in clients:
        m.attach(c)
    return clients


def test_is_visible_follows_monitor_tags():
    m = make_monitor()
    c1, c2 = populate(m, 2)
    c2.tags = 1 << 3
    assert c1.is_visible()
    assert not c2.is_visible()
    assert not Client(window=9, tags=1).is_visible()


def test_attach_puts_client_at_head():
    m = make_monitor()
    c1, c2 = populate(m, 2)
    assert m.clients == [c2, c1]
    assert m.stack == [c2, c1]
    assert c1.monitor is m


def test_detach_selects_next_visible():
    m = make_monitor()
    c1, c2 = populate(m, 2)
    m.select(c2)
    m.detach(c2)
    assert m.sel is c1
    assert m.clients == [c1]
    with pytest.raises(ValueError):
        m.detach(c2)


def test_select_rejects_foreign_client():
    m = make_monitor()
    with pytest.raises(ValueError):
        m.select(Client(window=5))


def test_view_and_swap_back():
    m = make_monitor()
    assert not m.view(1)
    assert m.view(1 << 2)
    assert m.tags == 1 << 2
    assert m.view(0)
    assert m.tags == 1


def test_view_ignores_bits_beyond_tags():
    m = make_monitor()
    assert not m.view(1 | (1 << 20))


def test_toggle_view_never_empties():
    m = make_monitor()
    assert not m.toggle_view(1)
    assert m.toggle_view(1 << 1)
    assert m.tags == 1 | (1 << 1)


def test_tag_moves_selected_client_out_of_view():
    m = make_monitor()
    (c,) = populate(m, 1)
    m.select(c)
    assert m.tag(1 << 4)
    assert c.tags == 1 << 4
    assert m.sel is None
    assert not m.tag(1 << 20)


def test_toggle_tag_keeps_one_tag():
    m = make_monitor()
    (c,) = populate(m, 1)
    m.select(c)
    assert not m.toggle_tag(1)
    assert m.toggle_tag(1 << 1)
    assert c.tags == 1 | (1 << 1)


def test_set_mfact_relative_absolute_and_limits():
    m = make_monitor()
    assert m.set_mfact(0.05)
    assert m.mfact == pytest.approx(DEFAULT_MFACT + 0.05)
    assert m.set_mfact(1.3)
    assert m.mfact == pytest.approx(1.3 - 1.0)
    assert not m.set_mfact(0.9)
    assert not m.set_mfact(-0.5)


def test_set_mfact_ignored_when_floating():
    m = make_monitor()
    m.set_layout(FLOAT)
    assert not m.set_mfact(0.05)
    assert m.mfact == DEFAULT_MFACT


def test_inc_nmaster_clamps_at_zero():
    m = make_monitor()
    m.inc_nmaster(-5)
    assert m.nmaster == 0
    m.inc_nmaster(2)
    assert m.nmaster == 2


def test_set_layout_toggles_previous():
    m = make_monitor()
    assert m.set_layout(MONOCLE) is MONOCLE
    assert m.symbol == MONOCLE.symbol
    assert m.set_layout() is TILE
    assert m.set_layout() is MONOCLE
    assert m.set_layout(MONOCLE) is MONOCLE


def test_set_layout_truncates_symbol():
    m = make_monitor()
    m.set_layout(Layout("X" * 30, "tile"))
    assert m.symbol == "X" * 15


def test_focus_stack_wraps_both_ways():
    m = make_monitor()
    c1, c2, c3 = populate(m, 3)
    m.select(c3)
    assert m.focus_stack(1) is c2
    assert m.focus_stack(1) is c1
    assert m.focus_stack(1) is c3
    assert m.focus_stack(-1) is c1
    assert m.sel is c1
    assert m.stack[0] is c1


def test_focus_stack_skips_hidden_and_locks_fullscreen():
    m = make_monitor()
    c1, c2, c3 = populate(m, 3)
    c2.tags = 1 << 5
    m.select(c3)
    assert m.focus_stack(1) is c1
    c1.is_fullscreen = True
    assert m.focus_stack(1) is None


def test_zoom_swaps_master():
    m = make_monitor()
    c1, c2 = populate(m, 2)
    m.select(c1)
    assert m.zoom() is c1
    assert m.clients[0] is c1
    assert m.zoom() is c2
    assert m.clients[0] is c2
    assert m.sel is c2


def test_zoom_ignores_floating_and_single():
    m = make_monitor()
    (c,) = populate(m, 1)
    m.select(c)
    assert m.zoom() is None
    c.is_floating = True
    assert m.zoom() is None


def test_tiled_excludes_floating_and_hidden():
    m = make_monitor()
    c1, c2, c3 = populate(m, 3)
    c1.is_floating = True
    c2.tags = 1 << 2
    assert m.tiled() == [c3]


def test_intersect():
    m = make_monitor()
    assert m.intersect(10, 20, 30, 40) == 30 * 40
    assert m.intersect(900, 0, 10, 10) == 0


def test_update_bar_pos():
    m = make_monitor(h=600)
    m.update_bar_pos(20)
    assert (m.wy, m.wh, m.bar_y) == (20, 600 - 20, 0)
    m.top_bar = False
    m.update_bar_pos(20)
    assert (m.wy, m.bar_y) == (0, 600 - 20)
    m.show_bar = False
    m.update_bar_pos(20)
    assert (m.wh, m.bar_y) == (600, -20)


def test_apply_rules_from_config():
    m = make_monitor()
    rules = [
        Rule("Gimp", None, None, 0, True, -1),
        Rule("Firefox", None, None, 1 << 8, False, -1),
    ]
    gimp = Client(window=1, monitor=m)
    apply_rules(gimp, rules, [m], "Gimp", "gimp")
    assert gimp.is_floating
    assert gimp.tags == m.tags
    fox = Client(window=2, monitor=m)
    apply_rules(fox, rules, [m], "Firefox", "Navigator")
    assert fox.tags == 1 << 8
    assert not fox.is_floating


def test_apply_rules_broken_class_and_monitor():
    m0, m1 = make_monitor(0), make_monitor(1, x=800)
    m1.tagset[0] = 1 << 3
    rules = [Rule(None, "rok", None, 0, False, 1)]
    c = Client(window=3, monitor=m0)
    apply_rules(c, rules, [m0, m1], None, None)
    assert c.monitor is m1
    assert c.tags == 1 << 3


def test_apply_rules_needs_monitor():
    with pytest.raises(ValueError):
        apply_rules(Client(window=1), [], [], "a", "b")


def test_rect_to_monitor():
    m0, m1 = make_monitor(0), make_monitor(1, x=800)
    assert rect_to_monitor([m0, m1], m0, 700, 0, 300, 100) is m1
    assert rect_to_monitor([m0, m1], m1, 5000, 5000, 10, 10) is m1


def test_dir_to_monitor_wraps():
    ms = [make_monitor(i) for i in range(3)]
    assert dir_to_monitor(ms, ms[2], 1) is ms[0]
    assert dir_to_monitor(ms, ms[0], -1) is ms[2]
    assert dir_to_monitor(ms, ms[1], -1) is ms[0]


def test_size_hints_fallbacks_and_fixed():
    hints = SizeHints.from_normal_hints(minimum=(400, 400), maximum=(400, 400))
    assert (hints.basew, hints.baseh) == (400, 400)
    assert hints.is_fixed
    hints = SizeHints.from_normal_hints(base=(10, 20), increment=(7, 13))
    assert (hints.minw, hints.minh) == (10, 20)
    assert (hints.incw, hints.inch) == (7, 13)
    assert not hints.is_fixed
    assert not Client(window=1, hints=hints).is_fixed


def test_size_hints_aspect():
    hints = SizeHints.from_normal_hints(aspect=((2, 1), (4, 2)))
    assert hints.mina == pytest.approx(1 / 2)
    assert hints.maxa == pytest.approx(4 / 2)


def test_monitor_rejects_bad_config():
    with pytest.raises(ValueError):
        Monitor([])
    with pytest.raises(ValueError):
        Monitor(LAYOUTS, num_tags=32)


def test_single_layout_used_for_both_slots():
    m = Monitor([TILE])
    assert m.layouts[0] is TILE and m.layouts[1] is TILE