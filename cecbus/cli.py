"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
import queue
import time
from pathlib import Path
from typing import Any

import typer

from cecbus.core.config_loader import load_config
from cecbus.core.connection import Connection
from cecbus.core.dispatch import EventKind
from cecbus.core.errors import CecError, UnknownNameError
from cecbus.core.model import Command, KeyEvent, LogMessage
from cecbus.core.resolver import (
    logical_address_to_name,
    name_to_key_code,
    name_to_logical_address,
    parse_logical_address,
    vendor_id_to_name,
)
from cecbus.core.tables import key_name
from cecbus.drivers.libcec import PythonCecDriver

app = typer.Typer(help="HDMI-CEC bus control: list devices, send keys, watch traffic")

AdapterOption = typer.Option(None, "--adapter", help="Adapter name or substring")
DeviceNameOption = typer.Option(None, "--device-name", help="OSD name announced on the bus")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log bus traffic to stderr"),
    config: Path | None = typer.Option(None, "--config", help="Config file instead of the user default"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = {"config_path": config}


def _build_connection(ctx: typer.Context, adapter: str | None, device_name: str | None) -> tuple[Connection, str, str]:
    config_path = (ctx.obj or {}).get("config_path")
    config = load_config(config_path).config
    connection = Connection(
        PythonCecDriver(),
        key_hold_s=config.key_hold_ms / 1000,
        queue_size=config.queue_size,
    )
    return connection, adapter if adapter is not None else config.adapter, device_name or config.device_name


@app.command("devices")
def list_devices(
    ctx: typer.Context,
    adapter: str | None = AdapterOption,
    device_name: str | None = DeviceNameOption,
) -> None:
    """List active devices on the bus."""
    try:
        connection, adapter_name, own_name = _build_connection(ctx, adapter, device_name)
        with connection.open(adapter_name, own_name):
            devices = connection.list()
        if not devices:
            typer.echo("No active CEC devices found")
            return

        for name, device in sorted(devices.items(), key=lambda item: item[1].logical_address):
            active = " (active source)" if device.active_source else ""
            typer.echo(
                f"{device.logical_address:>2} {name}: {device.osd_name or '<no name>'} "
                f"phys={device.physical_address} power={device.power_status} "
                f"vendor={device.vendor or '<unknown>'}{active}"
            )
    except CecError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("key")
def send_key(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Logical address number or name (e.g. 0, TV, Playback1)"),
    key: str = typer.Argument(..., help="Key name (e.g. 'Volume Up', '5') or hex code (0x41)"),
    adapter: str | None = AdapterOption,
    device_name: str | None = DeviceNameOption,
) -> None:
    """Press and release a remote-control key on a device."""
    try:
        target = parse_logical_address(address)
        connection, adapter_name, own_name = _build_connection(ctx, adapter, device_name)
        with connection.open(adapter_name, own_name):
            result = connection.key(target, key)
        typer.echo(
            f"Sent key 0x{result.code:02X} ({result.name or 'unnamed'}) "
            f"to {logical_address_to_name(result.address)}"
        )
    except CecError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("keycode")
def lookup_key(name: str) -> None:
    """Show the key code for a key name."""
    code = name_to_key_code(name)
    if code < 0:
        typer.echo(f"Error: Unknown key name '{name}'", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{key_name(code)}: 0x{code:02X}")


@app.command("address")
def lookup_address(name: str) -> None:
    """Show the logical address for a device role name."""
    try:
        address = name_to_logical_address(name)
    except UnknownNameError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    if address < 0:
        typer.echo(f"Error: Unknown logical address name '{name}'", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{logical_address_to_name(address)}: {address}")


@app.command("vendor")
def lookup_vendor(vendor_id: str = typer.Argument(..., help="24-bit vendor ID, e.g. 0x0000F0")) -> None:
    """Show the manufacturer for a vendor ID."""
    try:
        value = int(vendor_id, 0)
    except ValueError:
        typer.echo(f"Error: '{vendor_id}' is not a number", err=True)
        raise typer.Exit(code=1) from None
    name = vendor_id_to_name(value)
    typer.echo(f"0x{value:06X}: {name or '<unknown>'}")


def _format_event(event: Any) -> str:
    if isinstance(event, Command):
        return f"command {event}"
    if isinstance(event, KeyEvent):
        return f"key 0x{event.code:02X} {event.name or 'unnamed'}"
    if isinstance(event, LogMessage):
        return f"log {event.level}: {event.text}"
    return repr(event)


@app.command("monitor")
def monitor(
    ctx: typer.Context,
    count: int | None = typer.Option(None, "--count", help="Stop after this many events"),
    timeout: float | None = typer.Option(None, "--timeout", help="Stop after this many seconds"),
    logs: bool = typer.Option(False, "--logs", help="Also print adapter log lines"),
    adapter: str | None = AdapterOption,
    device_name: str | None = DeviceNameOption,
) -> None:
    """Print received commands and key presses until interrupted."""
    kinds = [EventKind.COMMAND, EventKind.KEY_PRESS]
    if logs:
        kinds.append(EventKind.LOG)
    try:
        connection, adapter_name, own_name = _build_connection(ctx, adapter, device_name)
        with connection.events(*kinds) as events:
            with connection.open(adapter_name, own_name):
                deadline = None if timeout is None else time.monotonic() + timeout
                received = 0
                while count is None or received < count:
                    wait = 0.5
                    if deadline is not None:
                        wait = deadline - time.monotonic()
                        if wait <= 0:
                            break
                    try:
                        event = events.get(timeout=wait)
                    except queue.Empty:
                        continue
                    typer.echo(_format_event(event))
                    received += 1
    except KeyboardInterrupt:
        return
    except CecError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
