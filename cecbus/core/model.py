"""Core data models used across resolver, dispatcher, connection, and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from cecbus.core.errors import InvalidAddressError
from cecbus.core.tables import ADDRESS_COUNT, LOGICAL_NAMES, NO_OPCODE, key_name, opcode_name


def check_address(address: int) -> int:
    if isinstance(address, bool) or not isinstance(address, int):
        raise InvalidAddressError(f"Logical address must be an integer, got {address!r}")
    if not 0 <= address < ADDRESS_COUNT:
        raise InvalidAddressError(f"Logical address {address} outside 0-{ADDRESS_COUNT - 1}")
    return address


def format_physical_address(value: int | str) -> str:
    """Render a 16-bit physical address as its dotted ``a.b.c.d`` form.

    Strings are assumed to be formatted already and are passed through.
    """
    if isinstance(value, str):
        return value
    return ".".join(f"{(value >> shift) & 0xF:x}" for shift in (12, 8, 4, 0))


@dataclass(frozen=True)
class CecConfig:
    adapter: str = ""
    device_name: str = "cecbus"
    key_hold_ms: int = 10
    queue_size: int = 64


@dataclass(frozen=True)
class AdapterDescriptor:
    name: str
    path: str = ""


@dataclass(frozen=True)
class RawFrame:
    """Frame fields exactly as a driver reports them."""

    initiator: int
    destination: int
    ack: bool = False
    eom: bool = True
    opcode: int = NO_OPCODE
    opcode_set: bool = False
    parameters: bytes = b""
    transmit_timeout: int = 1000


@dataclass(frozen=True)
class Command:
    initiator: int
    destination: int
    ack: bool
    eom: bool
    opcode: int | None
    parameters: bytes = b""
    transmit_timeout: int = 1000
    operation: str = ""

    @classmethod
    def from_frame(cls, frame: RawFrame) -> Command:
        initiator = check_address(int(frame.initiator))
        destination = check_address(int(frame.destination))
        opcode = int(frame.opcode) if frame.opcode_set else None
        return cls(
            initiator=initiator,
            destination=destination,
            ack=bool(frame.ack),
            eom=bool(frame.eom),
            opcode=opcode,
            parameters=bytes(frame.parameters),
            transmit_timeout=int(frame.transmit_timeout),
            operation=opcode_name(NO_OPCODE if opcode is None else opcode),
        )

    @property
    def is_poll(self) -> bool:
        return self.opcode is None

    def __str__(self) -> str:
        if self.operation:
            operation = self.operation
        elif self.opcode is None:
            operation = opcode_name(NO_OPCODE)
        else:
            operation = f"0x{self.opcode:02X}"
        text = f"{LOGICAL_NAMES[self.initiator]} -> {LOGICAL_NAMES[self.destination]}: {operation}"
        if self.parameters:
            text += f" [{self.parameters.hex(' ')}]"
        return text


@dataclass(frozen=True)
class KeyEvent:
    code: int
    name: str
    duration_ms: int = 0

    @classmethod
    def from_code(cls, code: int, duration_ms: int = 0) -> KeyEvent:
        return cls(code=code, name=key_name(code), duration_ms=duration_ms)


@dataclass(frozen=True)
class LogMessage:
    text: str
    level: str = "info"


@dataclass(frozen=True)
class Device:
    logical_address: int
    physical_address: str
    osd_name: str
    power_status: str
    active_source: bool
    vendor: str

    @property
    def logical_name(self) -> str:
        return LOGICAL_NAMES[self.logical_address]


@dataclass(frozen=True)
class NumericCode:
    code: int


@dataclass(frozen=True)
class HexString:
    text: str


@dataclass(frozen=True)
class SymbolicName:
    name: str


KeySpec = NumericCode | HexString | SymbolicName


@dataclass(frozen=True)
class KeyResult:
    address: int
    code: int
    name: str
    hold_ms: float = field(default=0.0, compare=False)
