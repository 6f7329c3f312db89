from __future__ import annotations

import pytest

from conftest import PLAYER, TV, FakeDriver
from cecbus.core.connection import open_connection
from cecbus.core.directory import scan_devices
from cecbus.core.errors import DriverCommandError
from cecbus.core.model import Device


def test_empty_bus_lists_nothing() -> None:
    connection = open_connection("RPI", "cecbus", driver=FakeDriver())
    assert connection.list() == {}


def test_single_tv_is_keyed_by_logical_name(driver: FakeDriver) -> None:
    connection = open_connection("RPI", "cecbus", driver=driver)
    assert connection.list() == {
        "TV": Device(
            logical_address=0,
            physical_address="0.0.0.0",
            osd_name="TV",
            power_status="on",
            active_source=False,
            vendor="Samsung",
        )
    }


def test_unknown_vendor_is_blank() -> None:
    driver = FakeDriver(devices={0: dict(TV), 4: dict(PLAYER)})
    devices = scan_devices(open_connection("RPI", "cecbus", driver=driver))
    assert set(devices) == {"TV", "Playback"}
    assert devices["Playback"].vendor == ""
    assert devices["Playback"].active_source is True


def test_each_scan_queries_again() -> None:
    driver = FakeDriver(devices={0: dict(TV)})
    connection = open_connection("RPI", "cecbus", driver=driver)
    first = connection.list()
    driver.devices[0]["power_status"] = "standby"
    second = connection.list()
    assert first["TV"].power_status == "on"
    assert second["TV"].power_status == "standby"


def test_query_failure_propagates() -> None:
    driver = FakeDriver(devices={0: dict(TV)}, fail_on="get_vendor_id")
    connection = open_connection("RPI", "cecbus", driver=driver)
    with pytest.raises(DriverCommandError):
        connection.list()
