"""
Awaitable command surface for host applications.

Each command runs the blocking monitor operation in a worker thread so an
event loop (e.g. a GUI's) stays responsive, and returns plain serializable
values. Configuration is loaded in the worker thread as well.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import yaml

from sysmon_core.config import Config
from sysmon_core.core import SystemMonitor

logger = logging.getLogger(__name__)


def _monitor(config: Config | None) -> SystemMonitor:
    if config is None:
        try:
            config = Config.load()
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load configuration, using defaults: {e}")
            config = Config()
    return SystemMonitor(config)


def _basic_system_info(config: Config | None) -> dict[str, Any]:
    return _monitor(config).get_basic_system_info().to_dict()


def _platform_specific_info(config: Config | None) -> dict[str, Any]:
    return _monitor(config).get_platform_specific_info().to_dict()


def _internet_connectivity(config: Config | None) -> bool:
    return _monitor(config).check_internet_connectivity()


def _send(endpoint: str, payload: str, token: str | None, config: Config | None) -> str:
    return _monitor(config).send_to_api(endpoint, payload, token)


async def get_basic_system_info(config: Config | None = None) -> dict[str, Any]:
    """Return ``{os_name, os_version, hostname}``."""
    return await asyncio.to_thread(_basic_system_info, config)


async def get_platform_specific_info(config: Config | None = None) -> dict[str, Any]:
    """Return ``{serial_number, activation_status}``."""
    return await asyncio.to_thread(_platform_specific_info, config)


async def check_internet_connectivity(config: Config | None = None) -> bool:
    return await asyncio.to_thread(_internet_connectivity, config)


async def send_to_api(
    endpoint: str,
    payload: str,
    token: str | None = None,
    config: Config | None = None,
) -> str:
    """
    Relay a payload and return the response body.

    Raises:
        RelayError: If the request fails or the server rejects it.
    """
    return await asyncio.to_thread(_send, endpoint, payload, token, config)
