"""
Sysmon Core - Host diagnostics collection and relay backend.

Resolves system facts (OS identity, hostname, serial number, license state)
through ordered fallback chains of platform utilities, probes internet
reachability, and relays collected payloads to a remote endpoint.
"""

__version__ = "1.0.0"
__author__ = "Sysmon"

__all__ = ["__version__"]
