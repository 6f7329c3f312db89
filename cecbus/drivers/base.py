"""Driver interfaces."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from cecbus.core.model import AdapterDescriptor, RawFrame


class DriverCallbacks(Protocol):
    """Entry points a driver invokes from its own threads."""

    def on_log_message(self, text: str, level: str = "info") -> None: ...

    def on_key_pressed(self, code: int, duration_ms: int = 0) -> None: ...

    def on_command_received(self, frame: RawFrame) -> None: ...


class BusDriver(Protocol):
    """Adapter driver a :class:`~cecbus.core.connection.Connection` talks to.

    Every call except ``init_session`` receives the session object that
    ``init_session`` returned. Failures are reported by raising
    :class:`~cecbus.core.errors.DriverError` subclasses.
    """

    def init_session(self, callbacks: DriverCallbacks, device_name: str) -> Any: ...

    def find_adapter(self, session: Any, name_pattern: str) -> AdapterDescriptor: ...

    def open_adapter(self, session: Any, adapter: AdapterDescriptor) -> None: ...

    def close_session(self, session: Any) -> None: ...

    def key_press(self, session: Any, address: int, code: int) -> None: ...

    def key_release(self, session: Any, address: int) -> None: ...

    def get_active_devices(self, session: Any) -> Sequence[bool]: ...

    def get_physical_address(self, session: Any, address: int) -> str: ...

    def get_osd_name(self, session: Any, address: int) -> str: ...

    def get_power_status(self, session: Any, address: int) -> str: ...

    def is_active_source(self, session: Any, address: int) -> bool: ...

    def get_vendor_id(self, session: Any, address: int) -> int: ...
