"""
Hardware serial number resolver.
"""

from __future__ import annotations

from sysmon_core.resolvers.base import UNKNOWN, BaseResolver

# Placeholder firmware vendors leave in unprogrammed DMI fields
OEM_PLACEHOLDER = "to be filled by o.e.m."


def is_valid_serial(value: str) -> bool:
    """Reject empty, zero and OEM placeholder serial numbers."""
    return bool(value) and value != "0" and value.lower() != OEM_PLACEHOLDER


class SerialNumberResolver(BaseResolver):
    """Resolves the machine serial number from BIOS/DMI data."""

    name = "serial_number"
    description = "Hardware serial number from BIOS, product or enclosure data"

    def resolve(self) -> str:
        return self.resolve_chain(
            self.commands.serial_number,
            is_valid=is_valid_serial,
            default=UNKNOWN,
        )
