"""
Pytest fixtures and configuration for Sysmon Core tests.

Provides a scriptable fake process runner, sample command outputs, a
platform-neutral command table and HTTP response mocks.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from sysmon_core.config import Config
from sysmon_core.normalize import keyed_line
from sysmon_core.platforms import CommandTable
from sysmon_core.resolvers.base import Strategy
from sysmon_core.runner import CommandResult, ExecutionError


class FakeRunner:
    """
    Process runner double.

    `responses` maps a command tuple ``(program, *args)`` to either a
    CommandResult or an exception instance to raise. Unknown commands
    behave like a missing executable. Every call is recorded in `calls`.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def run(self, program, args=(), timeout=None):
        cmd = (program, *args)
        self.calls.append(cmd)
        outcome = self.responses.get(cmd)
        if outcome is None:
            raise ExecutionError(f"Command not found: {program}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def ok(stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(returncode=0, stdout=stdout, stderr=stderr)


def failed(returncode: int = 1, stderr: str = "error") -> CommandResult:
    return CommandResult(returncode=returncode, stdout="", stderr=stderr)


def cmd(strategy: Strategy) -> tuple[str, ...]:
    """Command tuple a strategy will run."""
    return (strategy.program, *strategy.args)


# Command Table Fixtures
TEST_COMMANDS = CommandTable(
    name="test",
    hostname=(
        Strategy("hostname", "hostname"),
        Strategy("env", "printenv", ("COMPUTERNAME",)),
    ),
    serial_number=(
        Strategy("bios", "bios-query", ("serial",)),
        Strategy("product", "product-query", ("identifying-number",)),
        Strategy("enclosure", "enclosure-query", ("serial",)),
        Strategy("cim", "cim-query", ("serial",)),
        Strategy("legacy", "legacy-query", ("bios",), keyed_line("SerialNumber")),
    ),
    activation_status=(Strategy("license", "license-query", ("status",)),),
    ping_args=("-c", "1"),
)


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def commands():
    """Platform-neutral command table used by resolver tests."""
    return TEST_COMMANDS


@pytest.fixture
def ok_result():
    return ok


@pytest.fixture
def failed_result():
    return failed


@pytest.fixture
def cmd_of():
    return cmd


# Sample Command Outputs
@pytest.fixture
def sample_wmic_serial_output():
    """Sample output from `wmic bios get serialnumber /value`."""
    return "\r\r\n\r\r\nSerialNumber=5CG1234XYZ\r\r\n\r\r\n\r\r\n"


@pytest.fixture
def sample_wmic_multi_field_output():
    """Sample verbose `wmic bios get /value` output."""
    return """
BIOSVersion={"DELL   - 1072009"}
Caption=1.22.0
Manufacturer=Dell Inc.
ReleaseDate=20230525000000.000000+000
SerialNumber=7XK2QF3
SMBIOSBIOSVersion=1.22.0
Version=DELL   - 1072009
"""


# HTTP Response Fixtures
@pytest.fixture
def mock_response():
    """Factory for mock requests responses."""

    def make(status_code: int = 200, text: str = ""):
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        response.ok = status_code < 400
        return response

    return make


@pytest.fixture
def sample_config(tmp_path):
    """Sample configuration for testing."""
    return Config(
        api_endpoint="https://test.example.com/api/system-info",
        api_token="test-token-12345",
        api_timeout=5,
        connectivity_hosts=["10.0.0.1", "10.0.0.2", "10.0.0.3"],
        state_dir=str(tmp_path / "state"),
    )


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary config file."""
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(
        """
api:
  endpoint: "https://test.example.com/api/system-info"
  token: "file-token"
  timeout: 10
connectivity:
  hosts:
    - 9.9.9.9
  parallel: true
schedule:
  check_interval: 600
log:
  level: DEBUG
"""
    )
    return config_file


# Pytest Configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "cli: CLI command tests")
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
