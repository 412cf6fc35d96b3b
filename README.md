# tilebar

`tilebar` is a library with two parts:

* **components** that read single fields for a status line from a Linux
  system: battery, memory and swap, network addresses and link state,
  network throughput, keyboard indicators and layout names, and the
  wireless network name and signal;
* a **model of a dynamic tiling window manager**: clients, monitors,
  tags, rules, size hints, and the tile, floating and monocle layouts.
  The model drives no display; it computes geometry and tracks focus.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Helpers (`tilebar.util`)

* `fmt_human(num, base)` scales a number by 1000 or 1024 and formats it
  with one decimal and a unit prefix; any other base raises `ValueError`.
* `read_text(path)` and `read_int(path)` read a file, or the integer at
  its start, and return `None` (writing a warning to standard error)
  when the file cannot be read.
* `meminfo_field(text, key)` returns the number after `key` in a
  meminfo-style table.
* `warn(message)` writes a line to standard error.

```python
from tilebar.util import fmt_human

fmt_human(1536, 1024)   # "1.5 Ki"
```

## Components (`tilebar.components`)

Each component returns a string, or `None` when the value cannot be read.

| module | callables | argument |
|---|---|---|
| `battery` | `battery_perc`, `battery_state`, `battery_remaining` | battery name such as `BAT0`; `root` defaults to `/sys/class/power_supply` |
| `memory` | `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` | unused; `path` defaults to `/proc/meminfo` |
| `network` | `ipv4`, `ipv6`, `up` | interface name |
| `netspeeds` | `NetSpeed("rx")`, `NetSpeed("tx")` | interface name; the first reading only records a sample |
| `keyboard` | `format_indicators(fmt, led_mask)`, `get_layout(symbols, group)` | format such as `c?n?` and an LED mask; an XKB symbols name and a group |
| `wifi` | `wifi_essid`, `wifi_perc`, class `Nl80211` | interface name |

`battery_state` returns `+` while charging, `-` while discharging, `o`
when full or not charging, and `?` otherwise. `battery_remaining`
returns `"Hh Mm"` while discharging and an empty string otherwise.
`wifi.rssi_to_perc` maps a dBm level onto 0..100 and `wifi.find_attr`
picks an attribute out of a netlink payload.

```python
from tilebar.components.battery import battery_perc
from tilebar.components.memory import ram_perc
from tilebar.components.netspeeds import NetSpeed

rx = NetSpeed("rx", interval=1000)
print(battery_perc("BAT0"), ram_perc(), rx("eth0"))
```

## Window-manager model (`tilebar.wm`)

* `tilebar.wm.model`: `Client`, `Monitor`, `Rule`, `Layout`,
  `SizeHints`, and `apply_rules`, `rect_to_monitor`, `dir_to_monitor`.
  A `Monitor` has `view`, `toggle_view`, `tag`, `toggle_tag`,
  `set_mfact`, `inc_nmaster`, `set_layout`, `focus_stack` and `zoom`.
* `tilebar.wm.layout`: `Arranger` applies size hints and runs the
  `tile` and `monocle` layouts; `default_layouts()` returns the three
  layouts, tiling first.
* `tilebar.wm.manager`: `WindowManager` manages and unmanages clients,
  moves focus and clients between monitors, sets fullscreen and matches
  monitors to screen geometries. `clean_mask`, `classify_bar_click` and
  `is_ignorable_error` classify modifier masks, bar clicks and X errors.

```python
from tilebar.wm.layout import default_layouts
from tilebar.wm.manager import WindowManager

wm = WindowManager(1920, 1080, 20, default_layouts(), [])
first = wm.manage(1, 0, 0, 640, 480, "St", "st", "term", None)
second = wm.manage(2, 0, 0, 640, 480, "St", "st", "term", None)
print(wm.selected.tiled())
```

## What it does not do

* There is no command-line program and no update loop: nothing builds a
  whole status line or writes it out on an interval. Use the components
  from your own code.
* There are no components for date and time, CPU, disk, files, host,
  user, temperature, command output or mixer volume.
* The window-manager model does not connect to an X server, draw a bar,
  grab keys or start programs.