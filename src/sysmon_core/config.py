"""
Configuration management for Sysmon Core.

Supports configuration via YAML files, environment variables, and programmatic access.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sysmon_core.resolvers.connectivity import DEFAULT_HOSTS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path("/etc/sysmon-core/config.yaml"),
    Path.home() / ".config" / "sysmon-core" / "config.yaml",
    Path("sysmon-config.yaml"),
]


@dataclass
class Config:
    """
    Configuration container for Sysmon Core.

    Priority (highest to lowest):
    1. Programmatic values passed to __init__
    2. Environment variables (prefixed with SYSMON_)
    3. Config file values
    4. Default values
    """

    # API relay settings
    api_endpoint: str | None = None
    api_token: str | None = None
    api_timeout: int = 30
    api_enabled: bool = True

    # Connectivity probe
    connectivity_hosts: list[str] = field(default_factory=lambda: list(DEFAULT_HOSTS))
    connectivity_parallel: bool = False

    # Daily send scheduling
    state_dir: str | None = None
    check_interval: int = 3600

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create config from a dictionary."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}

        # Flatten nested sections, e.g. {"api": {"endpoint": ...}} -> api_endpoint
        flat = {}
        for key, value in data.items():
            if isinstance(value, dict):
                for subkey, subvalue in value.items():
                    prefixed = f"{key}_{subkey}"
                    flat[prefixed if prefixed in known_fields else subkey] = subvalue
            else:
                flat[key] = value

        filtered = {k: v for k, v in flat.items() if k in known_fields}

        return cls(**filtered)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """
        Load configuration with full resolution order.

        Args:
            config_path: Explicit path to config file. If None, searches
                        default locations.

        Returns:
            Fully resolved Config instance.
        """
        base_config: dict[str, Any] = {}

        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    base_config = yaml.safe_load(f) or {}
        else:
            for path in DEFAULT_CONFIG_PATHS:
                if path.exists():
                    with open(path) as f:
                        base_config = yaml.safe_load(f) or {}
                    break

        config = cls.from_dict(base_config) if base_config else cls()
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "SYSMON_API_ENDPOINT": "api_endpoint",
            "SYSMON_API_TOKEN": "api_token",
            "SYSMON_API_TIMEOUT": "api_timeout",
            "SYSMON_API_ENABLED": "api_enabled",
            "SYSMON_CONNECTIVITY_HOSTS": "connectivity_hosts",
            "SYSMON_CONNECTIVITY_PARALLEL": "connectivity_parallel",
            "SYSMON_STATE_DIR": "state_dir",
            "SYSMON_CHECK_INTERVAL": "check_interval",
            "SYSMON_LOG_LEVEL": "log_level",
            "SYSMON_LOG_FILE": "log_file",
        }

        for env_var, attr in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                current = getattr(self, attr)
                if isinstance(current, bool):
                    setattr(self, attr, value.lower() in ("true", "1", "yes"))
                elif isinstance(current, int):
                    try:
                        setattr(self, attr, int(value))
                    except ValueError:
                        logger.warning(f"Ignoring {env_var}={value!r}: not an integer")
                elif isinstance(current, list):
                    setattr(self, attr, [v.strip() for v in value.split(",") if v.strip()])
                else:
                    setattr(self, attr, value)

    def to_dict(self, redact: bool = True) -> dict[str, Any]:
        """Convert config to dictionary. The token is masked unless `redact` is False."""
        token = self.api_token
        if redact and token:
            token = "***"
        return {
            "api": {
                "endpoint": self.api_endpoint,
                "token": token,
                "timeout": self.api_timeout,
                "enabled": self.api_enabled,
            },
            "connectivity": {
                "hosts": self.connectivity_hosts,
                "parallel": self.connectivity_parallel,
            },
            "schedule": {
                "state_dir": self.state_dir,
                "check_interval": self.check_interval,
            },
            "log": {
                "level": self.log_level,
                "file": self.log_file,
            },
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(redact=False), f, default_flow_style=False, sort_keys=False)
