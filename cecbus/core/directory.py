"""Snapshot of the devices currently present on the bus."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cecbus.core.model import Device
from cecbus.core.resolver import logical_address_to_name, vendor_id_to_name

if TYPE_CHECKING:
    from cecbus.core.connection import Connection

LOGGER = logging.getLogger(__name__)


def scan_devices(connection: Connection) -> dict[str, Device]:
    """Query every active logical address and key the results by logical name.

    Each call runs the full scan; nothing is cached between calls.
    """
    devices: dict[str, Device] = {}
    for address, active in enumerate(connection.get_active_devices()):
        if not active:
            continue
        device = Device(
            logical_address=address,
            physical_address=connection.get_physical_address(address),
            osd_name=connection.get_osd_name(address),
            power_status=connection.get_power_status(address),
            active_source=connection.is_active_source(address),
            vendor=vendor_id_to_name(connection.get_vendor_id(address)),
        )
        devices[logical_address_to_name(address)] = device
    LOGGER.debug("Found %d active CEC device(s)", len(devices))
    return devices
