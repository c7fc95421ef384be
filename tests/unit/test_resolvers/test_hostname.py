"""
Unit tests for HostnameResolver.
"""

from __future__ import annotations

import pytest

from sysmon_core.resolvers.base import ResolutionError
from sysmon_core.resolvers.hostname import HostnameResolver


class TestHostnameResolver:
    def test_hostname_tool(self, fake_runner, commands, ok_result, cmd_of):
        runner = fake_runner({cmd_of(commands.hostname[0]): ok_result("DESKTOP-01\r\n")})

        assert HostnameResolver(runner, commands).resolve() == "DESKTOP-01"
        assert len(runner.calls) == 1

    def test_falls_back_to_environment(self, fake_runner, commands, ok_result, failed_result, cmd_of):
        runner = fake_runner(
            {
                cmd_of(commands.hostname[0]): failed_result(),
                cmd_of(commands.hostname[1]): ok_result("FROM-ENV\n"),
            }
        )

        assert HostnameResolver(runner, commands).resolve() == "FROM-ENV"

    def test_blank_output_falls_back(self, fake_runner, commands, ok_result, cmd_of):
        runner = fake_runner(
            {
                cmd_of(commands.hostname[0]): ok_result("\n"),
                cmd_of(commands.hostname[1]): ok_result("FROM-ENV"),
            }
        )

        assert HostnameResolver(runner, commands).resolve() == "FROM-ENV"

    def test_all_fail_raises(self, fake_runner, commands, ok_result, cmd_of):
        runner = fake_runner({cmd_of(commands.hostname[1]): ok_result("")})

        with pytest.raises(ResolutionError):
            HostnameResolver(runner, commands).resolve()
