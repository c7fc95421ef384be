"""
Hostname resolver.

Queries the OS hostname tool, then the computer-name environment variable.
"""

from __future__ import annotations

from sysmon_core.resolvers.base import BaseResolver


class HostnameResolver(BaseResolver):
    """
    Resolves the host name of this machine.

    Unlike the other resolvers, this chain has no built-in default: when
    both strategies fail it raises ResolutionError and the caller picks
    the placeholder.
    """

    name = "hostname"
    description = "Host name via the hostname tool or environment"

    def resolve(self) -> str:
        """
        Resolve the hostname.

        Raises:
            ResolutionError: If no strategy yields a non-empty name.
        """
        return self.resolve_chain(self.commands.hostname)
