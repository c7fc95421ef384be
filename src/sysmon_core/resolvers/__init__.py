"""
System fact resolvers for Sysmon Core.

Each resolver obtains one fact by walking an ordered chain of platform
commands until one produces a valid value.
"""

from __future__ import annotations

from sysmon_core.resolvers.activation import ActivationStatus, ActivationStatusResolver
from sysmon_core.resolvers.base import (
    UNKNOWN,
    BaseResolver,
    ResolutionError,
    Strategy,
    resolve_chain,
)
from sysmon_core.resolvers.connectivity import ConnectivityProber
from sysmon_core.resolvers.hostname import HostnameResolver
from sysmon_core.resolvers.serial import SerialNumberResolver, is_valid_serial

# Registry of all available resolvers
RESOLVERS: dict[str, type[BaseResolver]] = {
    "hostname": HostnameResolver,
    "serial_number": SerialNumberResolver,
    "activation_status": ActivationStatusResolver,
    "connectivity": ConnectivityProber,
}


def get_resolver(name: str) -> type[BaseResolver] | None:
    """Get a specific resolver by name."""
    return RESOLVERS.get(name)


def list_resolvers() -> list[str]:
    """List all available resolver names."""
    return list(RESOLVERS.keys())


__all__ = [
    "ActivationStatus",
    "ActivationStatusResolver",
    "BaseResolver",
    "ConnectivityProber",
    "HostnameResolver",
    "ResolutionError",
    "SerialNumberResolver",
    "Strategy",
    "UNKNOWN",
    "get_resolver",
    "is_valid_serial",
    "list_resolvers",
    "resolve_chain",
    "RESOLVERS",
]
