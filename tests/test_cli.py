from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import PLAYER, TV, FakeDriver
from cecbus import cli
from cecbus.core.model import RawFrame

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))


def _use_driver(monkeypatch: pytest.MonkeyPatch, driver: FakeDriver) -> FakeDriver:
    monkeypatch.setattr(cli, "PythonCecDriver", lambda: driver)
    return driver


def test_devices_command(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_driver(monkeypatch, FakeDriver(devices={0: dict(TV), 4: dict(PLAYER)}))
    result = runner.invoke(cli.app, ["devices"])
    assert result.exit_code == 0
    assert " 0 TV: TV phys=0.0.0.0 power=on vendor=Samsung" in result.stdout
    assert " 4 Playback: Shield" in result.stdout
    assert "vendor=<unknown> (active source)" in result.stdout


def test_devices_command_empty_bus(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_driver(monkeypatch, FakeDriver())
    result = runner.invoke(cli.app, ["devices"])
    assert result.exit_code == 0
    assert "No active CEC devices found" in result.stdout


def test_key_command(monkeypatch: pytest.MonkeyPatch) -> None:
    driver = _use_driver(monkeypatch, FakeDriver())
    result = runner.invoke(cli.app, ["key", "Playback1", "volume-up"])
    assert result.exit_code == 0
    assert "Sent key 0x41 (VolumeUp) to Playback" in result.stdout
    assert [call[0] for call in driver.calls if call[0].startswith("key")] == ["key_press", "key_release"]
    assert driver.closed


def test_key_command_bad_key_is_clean(monkeypatch: pytest.MonkeyPatch) -> None:
    driver = _use_driver(monkeypatch, FakeDriver())
    result = runner.invoke(cli.app, ["key", "TV", "Jump"])
    assert result.exit_code == 1
    assert "Error: Unknown key name 'Jump'" in result.stderr
    assert "Traceback" not in result.stdout
    assert not [call for call in driver.calls if call[0] == "key_press"]


def test_open_failure_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_driver(monkeypatch, FakeDriver())
    result = runner.invoke(cli.app, ["devices", "--adapter", "usb-cec"])
    assert result.exit_code == 1
    assert "Error: Could not open CEC adapter 'usb-cec'" in result.stderr


def test_config_file_option(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    driver = _use_driver(monkeypatch, FakeDriver())
    config = tmp_path / "cec.yaml"
    config.write_text("adapter: ttyACM\ndevice_name: living-room\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["--config", str(config), "devices"])
    assert result.exit_code == 0
    assert ("init_session", "living-room") in driver.calls
    assert ("open_adapter", "/dev/ttyACM0") in driver.calls


def test_keycode_lookup() -> None:
    result = runner.invoke(cli.app, ["keycode", "Mute"])
    assert result.exit_code == 0
    assert "Mute: 0x43" in result.stdout

    result = runner.invoke(cli.app, ["keycode", "Jump"])
    assert result.exit_code == 1


def test_address_lookup() -> None:
    result = runner.invoke(cli.app, ["address", "unregistered"])
    assert result.exit_code == 0
    assert "Broadcast: 15" in result.stdout

    result = runner.invoke(cli.app, ["address", "Fridge"])
    assert result.exit_code == 1
    assert "Unknown logical address name 'Fridge'" in result.stderr


def test_vendor_lookup() -> None:
    result = runner.invoke(cli.app, ["vendor", "0x0000F0"])
    assert result.exit_code == 0
    assert "0x0000F0: Samsung" in result.stdout

    result = runner.invoke(cli.app, ["vendor", "0x123456"])
    assert "0x123456: <unknown>" in result.stdout


def test_monitor_prints_events(monkeypatch: pytest.MonkeyPatch) -> None:
    frame = RawFrame(initiator=4, destination=15, opcode=0x82, opcode_set=True, parameters=b"\x10\x00")
    _use_driver(monkeypatch, FakeDriver(frames_on_open=(frame,), keys_on_open=(0x44,)))
    result = runner.invoke(cli.app, ["monitor", "--count", "2", "--timeout", "2"])
    assert result.exit_code == 0
    assert "command Playback -> Broadcast: ACTIVE_SOURCE [10 00]" in result.stdout
    assert "key 0x44 Play" in result.stdout


def test_monitor_stops_at_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_driver(monkeypatch, FakeDriver())
    result = runner.invoke(cli.app, ["monitor", "--timeout", "0.05"])
    assert result.exit_code == 0
    assert result.stdout == ""
