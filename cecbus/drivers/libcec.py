"""Driver implementation on top of the ``cec`` (python-cec) libcec binding."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import ModuleType
from typing import Any

from cecbus.core.errors import AdapterNotFoundError, DriverCommandError, DriverInitError
from cecbus.core.model import AdapterDescriptor, RawFrame, format_physical_address
from cecbus.core.tables import ADDRESS_COUNT, USER_CONTROL_PRESSED, USER_CONTROL_RELEASE
from cecbus.drivers.base import DriverCallbacks

LOGGER = logging.getLogger(__name__)

# libcec log levels as passed to EVENT_LOG callbacks.
_LIBCEC_LOG_LEVELS = {
    1: "error",
    2: "warning",
    4: "notice",
    8: "traffic",
    16: "debug",
}


class _Session:
    def __init__(self, module: ModuleType, callbacks: DriverCallbacks, device_name: str) -> None:
        self.module = module
        self.callbacks = callbacks
        self.device_name = device_name
        self.handler: Any = None


def frame_from_binding(cmd: Mapping[str, Any]) -> RawFrame:
    return RawFrame(
        initiator=int(cmd.get("initiator", 0)),
        destination=int(cmd.get("destination", 0)),
        ack=bool(cmd.get("ack", False)),
        eom=bool(cmd.get("eom", True)),
        opcode=int(cmd.get("opcode", 0xFD)),
        opcode_set=bool(cmd.get("opcode_set", False)),
        parameters=bytes(cmd.get("parameters", b"") or b""),
        transmit_timeout=int(cmd.get("transmit_timeout", 1000)),
    )


class PythonCecDriver:
    def __init__(self, module: ModuleType | None = None) -> None:
        self._module = module

    def _load_module(self) -> ModuleType:
        if self._module is not None:
            return self._module
        try:
            import cec  # type: ignore
        except Exception as exc:  # pragma: no cover - import failure path
            raise DriverInitError(
                "libcec driver requires the 'cec' Python binding. Install the 'libcec' extra and retry."
            ) from exc
        self._module = cec
        return cec

    def init_session(self, callbacks: DriverCallbacks, device_name: str) -> _Session:
        module = self._load_module()
        session = _Session(module, callbacks, device_name)

        def _handler(event: int, *args: Any) -> None:
            if event == module.EVENT_LOG:
                level, _, message = args
                callbacks.on_log_message(str(message), _LIBCEC_LOG_LEVELS.get(int(level), "info"))
            elif event == module.EVENT_KEYPRESS:
                key, duration = args
                callbacks.on_key_pressed(int(key), int(duration))
            elif event == module.EVENT_COMMAND:
                callbacks.on_command_received(frame_from_binding(args[0]))

        try:
            module.add_callback(_handler, module.EVENT_LOG | module.EVENT_KEYPRESS | module.EVENT_COMMAND)
        except Exception as exc:
            raise DriverInitError(f"Could not register libcec callbacks: {exc}") from exc
        session.handler = _handler
        return session

    def find_adapter(self, session: _Session, name_pattern: str) -> AdapterDescriptor:
        try:
            adapters = list(session.module.list_adapters())
        except Exception as exc:
            raise AdapterNotFoundError(f"Adapter enumeration failed: {exc}") from exc
        for adapter in adapters:
            if name_pattern.lower() in str(adapter).lower():
                return AdapterDescriptor(name=str(adapter), path=str(adapter))
        available = ", ".join(str(a) for a in adapters) or "<none>"
        raise AdapterNotFoundError(f"No CEC adapter matches '{name_pattern}'. Available: {available}")

    def open_adapter(self, session: _Session, adapter: AdapterDescriptor) -> None:
        # The binding announces itself under its own OSD name.
        LOGGER.debug("Requested OSD name %r is not configurable through python-cec", session.device_name)
        try:
            session.module.init(adapter.path)
        except Exception as exc:
            raise DriverInitError(f"Could not open adapter {adapter.name}: {exc}") from exc

    def close_session(self, session: _Session) -> None:
        if session.handler is None:
            return
        try:
            session.module.remove_callback(
                session.handler,
                session.module.EVENT_LOG | session.module.EVENT_KEYPRESS | session.module.EVENT_COMMAND,
            )
        except Exception as exc:
            raise DriverCommandError(f"Could not remove libcec callbacks: {exc}") from exc
        finally:
            session.handler = None

    def _transmit(self, session: _Session, address: int, opcode: int, parameters: bytes = b"") -> None:
        try:
            ok = session.module.transmit(address, opcode, parameters)
        except Exception as exc:
            raise DriverCommandError(f"Transmit of opcode 0x{opcode:02X} to {address} failed: {exc}") from exc
        if ok is False:
            raise DriverCommandError(f"Transmit of opcode 0x{opcode:02X} to {address} was not acknowledged")

    def key_press(self, session: _Session, address: int, code: int) -> None:
        self._transmit(session, address, USER_CONTROL_PRESSED, bytes([code]))

    def key_release(self, session: _Session, address: int) -> None:
        self._transmit(session, address, USER_CONTROL_RELEASE)

    def get_active_devices(self, session: _Session) -> list[bool]:
        try:
            present = session.module.list_devices()
        except Exception as exc:
            raise DriverCommandError(f"Device enumeration failed: {exc}") from exc
        return [address in present for address in range(ADDRESS_COUNT)]

    def _device(self, session: _Session, address: int) -> Any:
        try:
            return session.module.Device(address)
        except Exception as exc:
            raise DriverCommandError(f"Could not query device {address}: {exc}") from exc

    def get_physical_address(self, session: _Session, address: int) -> str:
        return format_physical_address(self._device(session, address).physical_address)

    def get_osd_name(self, session: _Session, address: int) -> str:
        return str(self._device(session, address).osd_string)

    def get_power_status(self, session: _Session, address: int) -> str:
        return "on" if self._device(session, address).is_on() else "standby"

    def is_active_source(self, session: _Session, address: int) -> bool:
        return bool(self._device(session, address).is_active())

    def get_vendor_id(self, session: _Session, address: int) -> int:
        return int(self._device(session, address).vendor)
