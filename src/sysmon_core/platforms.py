"""
Per-platform command tables.

Resolvers only know which fact they want. The table for the running OS
decides which tools are invoked and how their output is read.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

from sysmon_core.normalize import keyed_line, plain
from sysmon_core.resolvers.base import Strategy

# Seconds the ping tool waits for a reply
PING_TIMEOUT = 3


def _powershell(name: str, script: str) -> Strategy:
    return Strategy(name, "powershell", ("-NoProfile", "-Command", script), plain)


@dataclass(frozen=True)
class CommandTable:
    """Strategies for each resolvable fact on one platform family."""

    name: str
    hostname: tuple[Strategy, ...]
    serial_number: tuple[Strategy, ...]
    activation_status: tuple[Strategy, ...]
    ping_args: tuple[str, ...]

    def ping(self, host: str) -> Strategy:
        """Build a single-packet ping strategy for a host."""
        return Strategy(f"ping {host}", "ping", (*self.ping_args, host))


WINDOWS = CommandTable(
    name="windows",
    hostname=(
        Strategy("hostname", "hostname"),
        _powershell("COMPUTERNAME", "$env:COMPUTERNAME"),
    ),
    serial_number=(
        _powershell(
            "Win32_BIOS",
            "Get-WmiObject -Class Win32_BIOS | Select-Object -ExpandProperty SerialNumber",
        ),
        _powershell(
            "Win32_ComputerSystemProduct",
            "Get-WmiObject -Class Win32_ComputerSystemProduct"
            " | Select-Object -ExpandProperty IdentifyingNumber",
        ),
        _powershell(
            "Win32_SystemEnclosure",
            "Get-WmiObject -Class Win32_SystemEnclosure"
            " | Select-Object -ExpandProperty SerialNumber",
        ),
        _powershell("CIM", "(Get-CimInstance -ClassName Win32_BIOS).SerialNumber"),
        Strategy(
            "WMIC",
            "wmic",
            ("bios", "get", "serialnumber", "/value"),
            keyed_line("SerialNumber"),
        ),
    ),
    activation_status=(
        _powershell(
            "SoftwareLicensingProduct",
            "Get-WmiObject -Class SoftwareLicensingProduct"
            " | Where-Object {$_.PartialProductKey -and $_.Name -like '*Windows*'}"
            " | Select-Object -ExpandProperty LicenseStatus",
        ),
    ),
    ping_args=("-n", "1", "-w", str(PING_TIMEOUT * 1000)),
)

POSIX = CommandTable(
    name="posix",
    hostname=(
        Strategy("hostname", "hostname"),
        Strategy("uname", "uname", ("-n",)),
    ),
    serial_number=(
        Strategy("product_serial", "cat", ("/sys/class/dmi/id/product_serial",)),
        Strategy("chassis_serial", "cat", ("/sys/class/dmi/id/chassis_serial",)),
        Strategy("dmidecode", "dmidecode", ("-s", "system-serial-number")),
    ),
    # No OS license store outside Windows
    activation_status=(),
    ping_args=("-c", "1", "-W", str(PING_TIMEOUT)),
)

COMMAND_TABLES: dict[str, CommandTable] = {
    "windows": WINDOWS,
    "posix": POSIX,
}


def current_commands() -> CommandTable:
    """Return the command table for the running OS."""
    return WINDOWS if sys.platform == "win32" else POSIX


def get_commands(name: str) -> CommandTable:
    """Get a command table by name ('windows' or 'posix')."""
    try:
        return COMMAND_TABLES[name]
    except KeyError:
        raise ValueError(
            f"Unknown platform {name!r}; expected one of {', '.join(COMMAND_TABLES)}"
        ) from None
