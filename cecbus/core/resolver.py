"""Name/code lookups for logical addresses, key codes and vendors."""

from __future__ import annotations

import functools
import re

from cecbus.core.errors import MalformedKeySpecError, UnknownNameError
from cecbus.core.model import HexString, KeySpec, NumericCode, SymbolicName, check_address
from cecbus.core.tables import KEY_CODES, LOGICAL_NAMES, UNREGISTERED, vendor_name

_SEPARATORS_RE = re.compile(r"[:\-_ ]")
_HEX_KEY_RE = re.compile(r"^0x[0-9a-fA-F]{2}$")

# Ascending code order, so the lower of two duplicate names wins.
_KEY_NAMES_LOWER: tuple[tuple[int, str], ...] = tuple(
    (code, name.lower()) for code, name in sorted(KEY_CODES.items())
)


def remove_separators(text: str) -> str:
    return _SEPARATORS_RE.sub("", text)


def name_to_key_code(name: str) -> int:
    """Return the key code for ``name`` or -1.

    Matching ignores case and the separators ``: - _`` and space. "Mute" is
    listed at both 0x43 and 0x65; 0x43 is always returned.
    """
    wanted = remove_separators(name).lower()
    for code, candidate in _KEY_NAMES_LOWER:
        if candidate == wanted:
            return code
    return -1


def name_to_logical_address(name: str) -> int:
    """Return the logical address for ``name`` or -1.

    A single trailing ``1`` is dropped so "Recording1" matches "Recording".
    "unregistered" is accepted for address 15.
    """
    stripped = remove_separators(name)
    if not stripped:
        raise UnknownNameError("Logical address name must not be empty")
    if stripped.endswith("1"):
        stripped = stripped[:-1]
    wanted = stripped.lower()

    for address, candidate in enumerate(LOGICAL_NAMES):
        if candidate.lower() == wanted:
            return address
    if wanted == "unregistered":
        return UNREGISTERED
    return -1


def logical_address_to_name(address: int) -> str:
    return LOGICAL_NAMES[check_address(address)]


def vendor_id_to_name(vendor_id: int) -> str:
    return vendor_name(vendor_id)


def parse_logical_address(value: str) -> int:
    """Accept a decimal address or a logical name, as typed on a command line."""
    text = value.strip()
    if text.isdigit():
        return check_address(int(text))
    address = name_to_logical_address(text)
    if address < 0:
        raise UnknownNameError(f"Unknown logical address name '{value}'")
    return address


def coerce_key_spec(value: int | str | NumericCode | HexString | SymbolicName) -> KeySpec:
    if isinstance(value, (NumericCode, HexString, SymbolicName)):
        return value
    if isinstance(value, bool):
        raise MalformedKeySpecError(f"Invalid key type: {type(value).__name__}")
    if isinstance(value, int):
        return NumericCode(value)
    if isinstance(value, str):
        if value.startswith("0x") and len(value) == 4:
            return HexString(value)
        return SymbolicName(value)
    raise MalformedKeySpecError(f"Invalid key type: {type(value).__name__}")


@functools.singledispatch
def resolve_key_code(spec: KeySpec) -> int:
    """Resolve a key spec to a one-byte key code."""
    raise MalformedKeySpecError(f"Invalid key type: {type(spec).__name__}")


@resolve_key_code.register
def _(spec: NumericCode) -> int:
    if not 0 <= spec.code <= 0xFF:
        raise MalformedKeySpecError(f"Key code {spec.code} outside 0-255")
    return spec.code


@resolve_key_code.register
def _(spec: HexString) -> int:
    if not _HEX_KEY_RE.match(spec.text):
        raise MalformedKeySpecError(f"Key '{spec.text}' is not a two-digit 0x hex code")
    return int(spec.text[2:], 16)


@resolve_key_code.register
def _(spec: SymbolicName) -> int:
    code = name_to_key_code(spec.name)
    if code < 0:
        raise MalformedKeySpecError(f"Unknown key name '{spec.name}'")
    return code
