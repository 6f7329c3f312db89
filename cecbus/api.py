"""Stable public API for building tooling on top of cecbus.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from cecbus.core.config_loader import LoadedConfig, load_config
from cecbus.core.connection import Connection, ConnectionState, open_connection
from cecbus.core.dispatch import EventKind
from cecbus.core.errors import (
    AdapterNotFoundError,
    CecError,
    ConfigLoadError,
    ConfigValidationError,
    ConnectionStateError,
    DriverCommandError,
    DriverError,
    DriverInitError,
    InvalidAddressError,
    MalformedKeySpecError,
    OpenFailedError,
    UnknownNameError,
)
from cecbus.core.model import (
    CecConfig,
    Command,
    Device,
    HexString,
    KeyEvent,
    KeyResult,
    KeySpec,
    LogMessage,
    NumericCode,
    RawFrame,
    SymbolicName,
)
from cecbus.core.resolver import (
    logical_address_to_name,
    name_to_key_code,
    name_to_logical_address,
    vendor_id_to_name,
)
from cecbus.drivers.base import BusDriver, DriverCallbacks
from cecbus.drivers.libcec import PythonCecDriver

__all__ = [
    "CecError",
    "AdapterNotFoundError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConnectionStateError",
    "DriverError",
    "DriverCommandError",
    "DriverInitError",
    "InvalidAddressError",
    "MalformedKeySpecError",
    "OpenFailedError",
    "UnknownNameError",
    "CecConfig",
    "Command",
    "Device",
    "HexString",
    "KeyEvent",
    "KeyResult",
    "KeySpec",
    "LogMessage",
    "NumericCode",
    "RawFrame",
    "SymbolicName",
    "BusDriver",
    "DriverCallbacks",
    "PythonCecDriver",
    "Connection",
    "ConnectionState",
    "EventKind",
    "LoadedConfig",
    "load_config",
    "open_connection",
    "open_configured",
    "get_key_code_by_name",
    "get_logical_address_by_name",
    "get_logical_name_by_address",
    "get_vendor_by_id",
]


def get_key_code_by_name(name: str) -> int:
    """Key code for a button name, or -1. "Mute" always yields 0x43."""
    return name_to_key_code(name)


def get_logical_address_by_name(name: str) -> int:
    """Logical address for a role name, or -1. Raises on empty input."""
    return name_to_logical_address(name)


def get_logical_name_by_address(address: int) -> str:
    return logical_address_to_name(address)


def get_vendor_by_id(vendor_id: int) -> str:
    return vendor_id_to_name(vendor_id)


def open_configured(
    *,
    driver: BusDriver | None = None,
    config: CecConfig | None = None,
) -> Connection:
    """Open a connection using the loaded configuration.

    Defaults to :class:`PythonCecDriver` and :func:`load_config`.
    """
    if config is None:
        config = load_config().config
    return open_connection(
        config.adapter,
        config.device_name,
        driver=driver or PythonCecDriver(),
        key_hold_s=config.key_hold_ms / 1000,
        queue_size=config.queue_size,
    )
