"""
Core orchestration module for Sysmon Core.

Exposes the entry operations the host application calls, and the daily
collect-and-send workflow built on top of them.
"""

from __future__ import annotations

import json
import logging
import platform
import sys
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

import distro

from sysmon_core import state
from sysmon_core.config import Config
from sysmon_core.platforms import CommandTable, current_commands
from sysmon_core.relay import ApiRelay
from sysmon_core.resolvers import (
    UNKNOWN,
    ActivationStatusResolver,
    ConnectivityProber,
    HostnameResolver,
    ResolutionError,
    SerialNumberResolver,
)
from sysmon_core.runner import ProcessRunner

logger = logging.getLogger(__name__)

# Placeholder shown to the user when a fact could not be determined
PLACEHOLDER = "Desconocido"

REPORT_TYPE = "daily_system_check"


@dataclass
class SystemInfo:
    """Basic OS identity of the host."""

    os_name: str
    os_version: str
    hostname: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PlatformInfo:
    """Facts only platform tooling can provide."""

    serial_number: str
    activation_status: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SystemReport:
    """Complete system snapshot sent to the API."""

    os_name: str
    os_version: str
    hostname: str
    serial_number: str
    activation_status: str
    timestamp: str

    @classmethod
    def from_parts(
        cls,
        basic: SystemInfo,
        platform_info: PlatformInfo,
        timestamp: str | None = None,
    ) -> SystemReport:
        return cls(
            **basic.to_dict(),
            **platform_info.to_dict(),
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_payload(self) -> dict[str, Any]:
        """Wrap the report in the envelope the API expects."""
        from sysmon_core import __version__

        return {
            "system_info": self.to_dict(),
            "client_version": __version__,
            "report_type": REPORT_TYPE,
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the API payload to a JSON string."""
        return json.dumps(self.to_payload(), indent=indent, default=str)


class SystemMonitor:
    """
    Entry point for every operation the host application can invoke.

    Operations share no state between calls; each one re-runs its
    resolvers from scratch.
    """

    def __init__(
        self,
        config: Config | None = None,
        runner: ProcessRunner | None = None,
        relay: ApiRelay | None = None,
        commands: CommandTable | None = None,
    ):
        self.config = config or Config()
        self.runner = runner or ProcessRunner()
        self.relay = relay or ApiRelay(timeout=self.config.api_timeout)
        self.commands = commands or current_commands()

    def get_basic_system_info(self) -> SystemInfo:
        """Collect OS name, OS version and hostname."""
        logger.info("Collecting basic system information")

        os_name, os_version = self._get_os_identity()
        if not os_name:
            logger.warning("Could not determine the operating system name")
        if not os_version:
            logger.warning("Could not determine the operating system version")

        try:
            hostname = HostnameResolver(self.runner, self.commands).resolve()
        except ResolutionError as e:
            logger.warning(f"Could not get the system hostname ({e}), using {PLACEHOLDER!r}")
            hostname = PLACEHOLDER

        info = SystemInfo(
            os_name=os_name or UNKNOWN,
            os_version=os_version or UNKNOWN,
            hostname=hostname,
        )
        logger.info("Basic system information collected")
        return info

    def get_platform_specific_info(self) -> PlatformInfo:
        """Collect serial number and OS activation status."""
        logger.info(f"Collecting {self.commands.name}-specific information")

        logger.debug("Collecting serial number...")
        serial_number = SerialNumberResolver(self.runner, self.commands).resolve()
        if not serial_number:
            serial_number = PLACEHOLDER

        logger.debug("Collecting OS activation status...")
        activation_status = ActivationStatusResolver(self.runner, self.commands).resolve()

        logger.info(f"{self.commands.name}-specific information collected")
        return PlatformInfo(
            serial_number=serial_number,
            activation_status=activation_status.value,
        )

    def check_internet_connectivity(self) -> bool:
        """Return True if any configured host answers a ping."""
        logger.info("Checking internet connectivity")
        prober = ConnectivityProber(
            self.runner,
            self.commands,
            hosts=self.config.connectivity_hosts,
            parallel=self.config.connectivity_parallel,
        )
        return prober.resolve()

    def send_to_api(self, endpoint: str, payload: str, token: str | None = None) -> str:
        """
        Relay a payload to an endpoint.

        Raises:
            RelayError: If the request fails or the server rejects it.
        """
        return self.relay.send(endpoint, payload, token)

    def collect_system_data(self) -> SystemReport:
        """Collect all facts into a timestamped report."""
        logger.info("Starting full system data collection")
        report = SystemReport.from_parts(
            self.get_basic_system_info(),
            self.get_platform_specific_info(),
        )
        logger.info("Full system data collection completed")
        return report

    def send_system_data(self) -> str:
        """
        Check connectivity, collect a report and send it to the configured API.

        Returns:
            Response body from the server.

        Raises:
            ValueError: If no API endpoint is configured.
            ConnectivityError: If no internet connectivity is detected.
            RelayError: If the upload fails.
        """
        if not self.config.api_endpoint:
            raise ValueError("No API endpoint configured. Set 'api_endpoint' in config.")

        logger.info("Starting system data transmission")
        if not self.check_internet_connectivity():
            raise ConnectivityError("Cannot proceed: no internet connectivity")

        report = self.collect_system_data()
        response = self.send_to_api(
            self.config.api_endpoint,
            report.to_json(),
            self.config.api_token,
        )
        state.update_last_sent(self.config.state_dir)
        logger.info("System data transmission completed")
        return response

    def send_daily_data(self, force: bool = False) -> bool:
        """
        Send the report unless one was already sent today.

        Never raises; failures are logged so a scheduler can keep running.

        Returns:
            True if a report was sent by this call.
        """
        if not self.config.api_enabled:
            logger.debug("API sending disabled, skipping daily send")
            return False

        if not force and state.sent_today(self.config.state_dir):
            logger.debug("Data already sent today, skipping")
            return False

        try:
            response = self.send_system_data()
        except ConnectivityError:
            logger.error("No internet connection, skipping data send")
            return False
        except Exception as e:
            logger.error(f"Daily transmission failed: {e}")
            return False

        logger.debug(f"Response body: {response[:200]}")
        logger.info("Daily transmission completed")
        return True

    def _get_os_identity(self) -> tuple[str, str]:
        if sys.platform.startswith("linux"):
            return distro.name(), distro.version(best=True)
        if sys.platform == "darwin":
            return "macOS", platform.mac_ver()[0]
        return platform.system(), platform.version()


class ConnectivityError(Exception):
    """Raised when a send is attempted without internet connectivity."""

    pass
