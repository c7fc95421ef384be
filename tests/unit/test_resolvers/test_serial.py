"""
Unit tests for SerialNumberResolver.

Tests the validity predicate and the five-strategy fallback chain.
"""

from __future__ import annotations

import pytest

from sysmon_core.resolvers.serial import SerialNumberResolver, is_valid_serial


class TestIsValidSerial:
    """Test serial number validity predicate."""

    @pytest.mark.parametrize(
        "value",
        ["", "0", "to be filled by o.e.m.", "To Be Filled By O.E.M.", "TO BE FILLED BY O.E.M."],
    )
    def test_rejects_placeholders(self, value):
        assert is_valid_serial(value) is False

    @pytest.mark.parametrize("value", ["5CG1234XYZ", "00", "0000000", "Default string", "1"])
    def test_accepts_other_values(self, value):
        assert is_valid_serial(value) is True


class TestSerialNumberResolver:
    """Test SerialNumberResolver chain behavior."""

    def test_first_strategy_success(self, fake_runner, commands, ok_result, cmd_of):
        runner = fake_runner({cmd_of(commands.serial_number[0]): ok_result("ABC123\r\n")})

        result = SerialNumberResolver(runner, commands).resolve()

        assert result == "ABC123"
        assert runner.calls == [cmd_of(commands.serial_number[0])]

    def test_falls_through_oem_placeholder(self, fake_runner, commands, ok_result, cmd_of):
        chain = commands.serial_number
        runner = fake_runner(
            {
                cmd_of(chain[0]): ok_result("To Be Filled By O.E.M."),
                cmd_of(chain[1]): ok_result("0"),
                cmd_of(chain[2]): ok_result("  \r\n"),
                cmd_of(chain[3]): ok_result("CIM-SERIAL"),
            }
        )

        assert SerialNumberResolver(runner, commands).resolve() == "CIM-SERIAL"
        assert runner.calls == [cmd_of(s) for s in chain[:4]]

    def test_legacy_keyed_line_strategy(
        self, fake_runner, commands, ok_result, failed_result, cmd_of, sample_wmic_serial_output
    ):
        chain = commands.serial_number
        responses = {cmd_of(s): failed_result() for s in chain[:4]}
        responses[cmd_of(chain[4])] = ok_result(sample_wmic_serial_output)
        runner = fake_runner(responses)

        assert SerialNumberResolver(runner, commands).resolve() == "5CG1234XYZ"

    def test_all_strategies_fail_returns_unknown(self, fake_runner, commands):
        runner = fake_runner()

        assert SerialNumberResolver(runner, commands).resolve() == "Unknown"
        assert len(runner.calls) == 5

    def test_repeated_calls_are_idempotent(self, fake_runner, commands, ok_result, cmd_of):
        runner = fake_runner({cmd_of(commands.serial_number[1]): ok_result("XYZ")})
        resolver = SerialNumberResolver(runner, commands)

        assert resolver.resolve() == resolver.resolve() == "XYZ"
