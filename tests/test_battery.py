import pytest

from tilebar.components.battery import battery_perc, battery_remaining, battery_state


@pytest.fixture
def bat(tmp_path):
    path = tmp_path / "BAT0"
    path.mkdir()
    return path


def test_perc(tmp_path, bat):
    (bat / "capacity").write_text("87\n")
    assert battery_perc("BAT0", tmp_path) == "87"


def test_perc_missing(tmp_path):
    assert battery_perc("BAT9", tmp_path) is None


@pytest.mark.parametrize(
    "status,symbol",
    [
        ("Charging\n", "+"),
        ("Discharging\n", "-"),
        ("Full\n", "o"),
        ("Not charging\n", "o"),
        ("Unknown\n", "?"),
    ],
)
def test_state(tmp_path, bat, status, symbol):
    (bat / "status").write_text(status)
    assert battery_state("BAT0", tmp_path) == symbol


def test_state_missing(tmp_path, bat):
    assert battery_state("BAT0", tmp_path) is None


def test_remaining_charging_is_empty(tmp_path, bat):
    (bat / "status").write_text("Charging\n")
    (bat / "charge_now").write_text("5000\n")
    assert battery_remaining("BAT0", tmp_path) == ""


def test_remaining_discharging(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    (bat / "charge_now").write_text("5000\n")
    (bat / "current_now").write_text("2000\n")
    assert battery_remaining("BAT0", tmp_path) == "2h 30m"


def test_remaining_uses_energy_and_power(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    (bat / "energy_now").write_text("3000\n")
    (bat / "power_now").write_text("1000\n")
    assert battery_remaining("BAT0", tmp_path) == "3h 0m"


def test_remaining_zero_current(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    (bat / "charge_now").write_text("5000\n")
    (bat / "current_now").write_text("0\n")
    assert battery_remaining("BAT0", tmp_path) is None


def test_remaining_no_charge_file(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    assert battery_remaining("BAT0", tmp_path) is None