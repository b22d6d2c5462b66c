"""Tests for CLI entry point."""

from __future__ import annotations

import json

from click.testing import CliRunner

from fincore.cli import main


class TestSip:
    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["sip", "--monthly", "5000", "--years", "10", "--rate", "12"]
        )
        assert result.exit_code == 0, result.output
        assert "SIP projection" in result.output
        assert "₹11,61,695.00" in result.output

    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--output", "json", "sip", "--monthly", "5000", "--years", "10", "--rate", "12"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["total_investment"] == 600000

    def test_schedule_csv(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "--output", "csv", "sip",
                "--monthly", "1000", "--years", "3", "--rate", "0", "--schedule",
            ],
        )
        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert len(lines) == 4
        assert lines[-1] == "3,36000.00,36000.00,0.00"

    def test_inflation_line(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["sip", "--monthly", "1000", "--years", "1", "--rate", "0", "--inflation", "0"],
        )
        assert result.exit_code == 0, result.output
        assert "Inflation-adjusted value: ₹12,000.00" in result.output

    def test_currency_from_env(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["sip", "--monthly", "1000", "--years", "1", "--rate", "0"],
            env={"FINCORE_CURRENCY": "USD", "FINCORE_LOCALE": "en-US"},
        )
        assert result.exit_code == 0, result.output
        assert "$12,000.00" in result.output

    def test_rejects_non_positive(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["sip", "--monthly", "0", "--years", "10", "--rate", "12"]
        )
        assert result.exit_code != 0

    def test_missing_option(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["sip", "--monthly", "5000"])
        assert result.exit_code != 0


class TestLumpsum:
    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--output", "json", "lumpsum", "--amount", "1000", "--years", "1", "--rate", "10"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["future_value"] == 1100
        assert data["estimated_returns"] == 100


class TestCagr:
    def test_years(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["cagr", "--start-value", "100", "--end-value", "200", "--years", "1"]
        )
        assert result.exit_code == 0, result.output
        assert "100.00%" in result.output

    def test_dates(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "--output", "json", "cagr",
                "--start-value", "100", "--end-value", "121",
                "--start-date", "2020-01-01", "--end-date", "2022-01-01",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert abs(data["cagr_percent"] - 10.0) < 0.1

    def test_requires_period(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["cagr", "--start-value", "100", "--end-value", "200"])
        assert result.exit_code != 0

    def test_end_before_start(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "cagr", "--start-value", "100", "--end-value", "200",
                "--start-date", "2024-06-01", "--end-date", "2023-01-01",
            ],
        )
        assert result.exit_code != 0


class TestChange:
    def test_currency_strings(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["change", "₹100", "₹1,50"])
        assert result.exit_code == 0, result.output
        assert "+50.00%" in result.output

    def test_zero_baseline(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--output", "json", "change", "0", "50"])
        assert json.loads(result.output)["change_percent"] == 100


class TestGoal:
    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--output", "json", "goal", "--target", "24000", "--years", "2", "--rate", "0"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["monthly_investment"] == 1000

    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["goal", "--target", "24000", "--years", "2", "--rate", "0"]
        )
        assert "₹1,000.00 per month for 2 years" in result.output


class TestFinancialYear:
    def test_date_argument(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["fy", "2024-03-31"])
        assert result.exit_code == 0
        assert result.output.strip() == "2023-2024"

    def test_today(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["fy"])
        assert result.exit_code == 0
        assert len(result.output.strip()) == 9

    def test_invalid_date(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["fy", "not-a-date"])
        assert result.exit_code != 0


class TestLogLevel:
    def test_debug_level_still_renders_result(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--log-level", "DEBUG", "fy", "2024-04-01"])
        assert result.exit_code == 0, result.output
        assert "2024-2025" in result.output
