"""
OS activation (license) status resolver.
"""

from __future__ import annotations

from enum import Enum

from sysmon_core.resolvers.base import BaseResolver


class ActivationStatus(Enum):
    """Windows SoftwareLicensingProduct.LicenseStatus values."""

    UNLICENSED = "Unlicensed"
    LICENSED = "Licensed"
    OOB_GRACE = "OOBGrace"
    OOT_GRACE = "OOTGrace"
    NON_GENUINE_GRACE = "NonGenuineGrace"
    NOTIFICATION = "Notification"
    EXTENDED_GRACE = "ExtendedGrace"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: str) -> ActivationStatus:
        """Map a raw LicenseStatus code; anything unrecognized is UNKNOWN."""
        return _STATUS_CODES.get(code.strip(), cls.UNKNOWN)

    def __str__(self) -> str:
        return self.value


_STATUS_CODES: dict[str, ActivationStatus] = {
    "0": ActivationStatus.UNLICENSED,
    "1": ActivationStatus.LICENSED,
    "2": ActivationStatus.OOB_GRACE,
    "3": ActivationStatus.OOT_GRACE,
    "4": ActivationStatus.NON_GENUINE_GRACE,
    "5": ActivationStatus.NOTIFICATION,
    "6": ActivationStatus.EXTENDED_GRACE,
}


class ActivationStatusResolver(BaseResolver):
    """Resolves the OS license state from the licensing store."""

    name = "activation_status"
    description = "OS activation state from the software licensing store"

    def resolve(self) -> ActivationStatus:
        if not self.commands.activation_status:
            self.logger.debug(f"No license store on platform {self.commands.name}")
            return ActivationStatus.UNKNOWN

        code = self.resolve_chain(self.commands.activation_status, default="")
        status = ActivationStatus.from_code(code)
        if code and status is ActivationStatus.UNKNOWN:
            self.logger.debug(f"Unrecognized activation status code: {code!r}")
        self.logger.debug(f"Activation status interpreted as {status}")
        return status
