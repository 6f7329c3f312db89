"""Bus session: open/close lifecycle, outbound operations, inbound dispatch."""

from __future__ import annotations

import enum
import logging
import queue
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from cecbus.core.directory import scan_devices
from cecbus.core.dispatch import EventDispatcher, EventKind, LogHandler
from cecbus.core.errors import (
    ConnectionStateError,
    DriverCommandError,
    DriverError,
    MalformedKeySpecError,
    OpenFailedError,
)
from cecbus.core.model import Device, HexString, KeyResult, NumericCode, SymbolicName, check_address
from cecbus.core.resolver import coerce_key_spec, resolve_key_code
from cecbus.core.tables import ADDRESS_COUNT, key_name
from cecbus.drivers.base import BusDriver

LOGGER = logging.getLogger(__name__)

MIN_KEY_HOLD_S = 0.010

T = TypeVar("T")


class ConnectionState(enum.Enum):
    UNOPENED = "unopened"
    OPENING = "opening"
    OPEN = "open"
    CLOSED = "closed"


class Connection:
    """A session with one bus adapter.

    Outbound calls and ``close`` are serialized by a lock. Driver callbacks
    go straight to the :class:`EventDispatcher` and never wait on it.
    """

    def __init__(
        self,
        driver: BusDriver,
        *,
        key_hold_s: float = MIN_KEY_HOLD_S,
        queue_size: int = 0,
    ) -> None:
        self.driver = driver
        self.key_hold_s = max(key_hold_s, MIN_KEY_HOLD_S)
        self.dispatcher = EventDispatcher(default_maxsize=queue_size)
        self.state = ConnectionState.UNOPENED
        self._session: Any = None
        self._lock = threading.Lock()

    def open(self, adapter_name: str, device_name: str) -> Connection:
        with self._lock:
            if self.state is not ConnectionState.UNOPENED:
                raise ConnectionStateError(f"Cannot open a connection that is {self.state.value}")
            self.state = ConnectionState.OPENING
            try:
                session = self.driver.init_session(self.dispatcher, device_name)
                self._session = session
                adapter = self.driver.find_adapter(session, adapter_name)
                LOGGER.info("Opening adapter %s (%s)", adapter.name, adapter.path or "-")
                self.driver.open_adapter(session, adapter)
            except Exception as exc:
                LOGGER.error("Opening CEC adapter '%s' failed: %s", adapter_name, exc)
                self._teardown()
                raise OpenFailedError(f"Could not open CEC adapter '{adapter_name}': {exc}") from exc
            self.state = ConnectionState.OPEN
        return self

    def close(self) -> None:
        with self._lock:
            if self.state is ConnectionState.CLOSED:
                return
            self._teardown()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _teardown(self) -> None:
        session, self._session = self._session, None
        self.state = ConnectionState.CLOSED
        self.dispatcher.unsubscribe_all()
        if session is None:
            return
        try:
            self.driver.close_session(session)
        except DriverError as exc:
            LOGGER.warning("Closing CEC session failed: %s", exc)

    def subscribe(
        self,
        kind: EventKind,
        delivery: queue.Queue[Any] | None = None,
        *,
        maxsize: int | None = None,
    ) -> queue.Queue[Any]:
        return self.dispatcher.subscribe(kind, delivery, maxsize=maxsize)

    def unsubscribe(self, kind: EventKind, delivery: queue.Queue[Any]) -> None:
        self.dispatcher.unsubscribe(kind, delivery)

    def add_log_handler(self, handler: LogHandler) -> None:
        self.dispatcher.add_log_handler(handler)

    def _call(self, what: str, func: Callable[..., T], *args: Any) -> T:
        with self._lock:
            if self.state is not ConnectionState.OPEN:
                raise ConnectionStateError(f"Cannot {what}: connection is {self.state.value}")
            try:
                return func(self._session, *args)
            except DriverError as exc:
                LOGGER.error("CEC %s failed: %s", what, exc)
                raise
            except Exception as exc:
                LOGGER.error("CEC %s failed: %s", what, exc)
                raise DriverCommandError(f"CEC {what} failed: {exc}") from exc

    def key_press(self, address: int, keycode: int) -> None:
        check_address(address)
        self._call("key press", self.driver.key_press, address, keycode)

    def key_release(self, address: int) -> None:
        check_address(address)
        self._call("key release", self.driver.key_release, address)

    def key(
        self,
        address: int,
        key: int | str | NumericCode | HexString | SymbolicName,
        *,
        hold_s: float | None = None,
    ) -> KeyResult:
        """Press and release ``key`` on ``address``.

        The key is resolved before anything is sent, so a bad key never
        produces a press without its release. The hold is at least 10 ms.
        """
        check_address(address)
        try:
            code = resolve_key_code(coerce_key_spec(key))
        except MalformedKeySpecError as exc:
            LOGGER.error("Invalid key %r: %s", key, exc)
            raise
        hold = max(self.key_hold_s if hold_s is None else hold_s, MIN_KEY_HOLD_S)

        started = time.monotonic()
        self.key_press(address, code)
        time.sleep(hold)
        self.key_release(address)
        return KeyResult(
            address=address,
            code=code,
            name=key_name(code),
            hold_ms=(time.monotonic() - started) * 1000,
        )

    def get_active_devices(self) -> tuple[bool, ...]:
        bitmap = tuple(bool(active) for active in self._call("active device query", self.driver.get_active_devices))
        if len(bitmap) != ADDRESS_COUNT:
            raise DriverCommandError(f"Driver reported {len(bitmap)} addresses, expected {ADDRESS_COUNT}")
        return bitmap

    def get_physical_address(self, address: int) -> str:
        check_address(address)
        return self._call("physical address query", self.driver.get_physical_address, address)

    def get_osd_name(self, address: int) -> str:
        check_address(address)
        return self._call("OSD name query", self.driver.get_osd_name, address)

    def get_power_status(self, address: int) -> str:
        check_address(address)
        return self._call("power status query", self.driver.get_power_status, address)

    def is_active_source(self, address: int) -> bool:
        check_address(address)
        return bool(self._call("active source query", self.driver.is_active_source, address))

    def get_vendor_id(self, address: int) -> int:
        check_address(address)
        return int(self._call("vendor query", self.driver.get_vendor_id, address))

    def list(self) -> dict[str, Device]:
        return scan_devices(self)

    @contextmanager
    def events(self, *kinds: EventKind, maxsize: int | None = None) -> Iterator[queue.Queue[Any]]:
        """Subscribe one shared queue to ``kinds`` (default: all) for a block."""
        selected = kinds or tuple(EventKind)
        delivery: queue.Queue[Any] = queue.Queue(
            maxsize=self.dispatcher.default_maxsize if maxsize is None else maxsize
        )
        for kind in selected:
            self.subscribe(kind, delivery)
        try:
            yield delivery
        finally:
            for kind in selected:
                self.unsubscribe(kind, delivery)


def open_connection(
    adapter_name: str,
    device_name: str,
    *,
    driver: BusDriver,
    key_hold_s: float = MIN_KEY_HOLD_S,
    queue_size: int = 0,
) -> Connection:
    return Connection(driver, key_hold_s=key_hold_s, queue_size=queue_size).open(adapter_name, device_name)
