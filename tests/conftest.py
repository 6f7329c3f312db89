from __future__ import annotations

import time
from typing import Any

import pytest

from cecbus.core.errors import AdapterNotFoundError, DriverCommandError
from cecbus.core.model import AdapterDescriptor, RawFrame


class FakeDriver:
    def __init__(
        self,
        *,
        adapters: tuple[str, ...] = ("RPI", "/dev/ttyACM0"),
        devices: dict[int, dict[str, Any]] | None = None,
        fail_on: str | None = None,
        frames_on_open: tuple[RawFrame, ...] = (),
        keys_on_open: tuple[int, ...] = (),
    ) -> None:
        self.adapters = adapters
        self.devices = devices or {}
        self.fail_on = fail_on
        self.frames_on_open = frames_on_open
        self.keys_on_open = keys_on_open
        self.callbacks: Any = None
        self.calls: list[tuple[Any, ...]] = []
        self.closed = False

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise DriverCommandError(f"{name} failed")

    def init_session(self, callbacks: Any, device_name: str) -> str:
        self._maybe_fail("init_session")
        self.callbacks = callbacks
        self.calls.append(("init_session", device_name))
        return "session"

    def find_adapter(self, session: str, name_pattern: str) -> AdapterDescriptor:
        for adapter in self.adapters:
            if name_pattern.lower() in adapter.lower():
                return AdapterDescriptor(name=adapter, path=adapter)
        raise AdapterNotFoundError(f"No CEC adapter matches '{name_pattern}'")

    def open_adapter(self, session: str, adapter: AdapterDescriptor) -> None:
        self._maybe_fail("open_adapter")
        self.calls.append(("open_adapter", adapter.name))
        for frame in self.frames_on_open:
            self.callbacks.on_command_received(frame)
        for code in self.keys_on_open:
            self.callbacks.on_key_pressed(code, 0)

    def close_session(self, session: str) -> None:
        self.closed = True

    def key_press(self, session: str, address: int, code: int) -> None:
        self._maybe_fail("key_press")
        self.calls.append(("key_press", address, code, time.monotonic()))

    def key_release(self, session: str, address: int) -> None:
        self._maybe_fail("key_release")
        self.calls.append(("key_release", address, time.monotonic()))

    def get_active_devices(self, session: str) -> list[bool]:
        return [address in self.devices for address in range(16)]

    def get_physical_address(self, session: str, address: int) -> str:
        return self.devices[address]["physical_address"]

    def get_osd_name(self, session: str, address: int) -> str:
        return self.devices[address]["osd_name"]

    def get_power_status(self, session: str, address: int) -> str:
        return self.devices[address]["power_status"]

    def is_active_source(self, session: str, address: int) -> bool:
        return self.devices[address]["active_source"]

    def get_vendor_id(self, session: str, address: int) -> int:
        self._maybe_fail("get_vendor_id")
        return self.devices[address]["vendor_id"]


TV = {
    "physical_address": "0.0.0.0",
    "osd_name": "TV",
    "power_status": "on",
    "active_source": False,
    "vendor_id": 0x0000F0,
}

PLAYER = {
    "physical_address": "1.0.0.0",
    "osd_name": "Shield",
    "power_status": "on",
    "active_source": True,
    "vendor_id": 0x123456,
}


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver(devices={0: dict(TV)})
