"""Tests for the command line interface.

**Feature: fx-journal**
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from fxjournal.cli.main import cli
from fxjournal.config import (
    HOME_ENV_VAR,
    get_config_path,
    get_data_store,
    load_config,
    validate_config,
)


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner with the journal home pointed at a temp directory."""
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path))
    return CliRunner()


def invoke(runner: CliRunner, *args: str):
    return runner.invoke(cli, list(args), catch_exceptions=False)


class TestInit:
    def test_writes_config(self, runner):
        result = invoke(runner, "init")
        assert result.exit_code == 0
        assert get_config_path().exists()

    def test_keeps_existing_config(self, runner):
        invoke(runner, "init")
        result = invoke(runner, "init")
        assert result.exit_code == 0
        assert "already exists" in result.output


class TestJournalCommands:
    def test_open_list_close(self, runner):
        result = invoke(runner, "open", "-p", "EUR/USD", "-d", "BUY", "--entry", "1.1", "--lots", "0.5")
        assert result.exit_code == 0
        assert "Trade Opened" in result.output

        trades = get_data_store().get_trades()
        assert len(trades) == 1
        trade_id = trades[0].id

        result = invoke(runner, "trades")
        assert result.exit_code == 0
        assert "Trades: 1" in result.output

        result = invoke(
            runner, "close", trade_id[:8],
            "--exit", "1.1050", "--reason", "Take Profit Hit", "--rr", "1:2",
        )
        assert result.exit_code == 0
        assert "+$250.00" in result.output
        assert get_data_store().get_trade(trade_id).status == "CLOSED"

    def test_default_pair_from_config(self, runner):
        invoke(runner, "open", "-d", "SELL", "--entry", "1.27", "--lots", "1")
        assert get_data_store().get_trades()[0].pair == "EUR/USD"

    def test_invalid_entry_exits(self, runner):
        result = invoke(runner, "open", "-d", "BUY", "--entry", "abc", "--lots", "1")
        assert result.exit_code == 1
        assert "entry_price" in result.output
        assert get_data_store().get_trades() == []

    def test_close_twice_exits(self, runner):
        invoke(runner, "open", "-d", "BUY", "--entry", "1.1", "--lots", "1")
        trade_id = get_data_store().get_trades()[0].id
        args = ("close", trade_id, "--exit", "1.2", "--reason", "Manual Close - Profit", "--rr", "1:1")
        assert invoke(runner, *args).exit_code == 0
        assert invoke(runner, *args).exit_code == 1

    def test_close_unknown_trade(self, runner):
        result = invoke(runner, "close", "deadbeef", "--exit", "1.2", "--reason", "x", "--rr", "1:1")
        assert result.exit_code == 1

    def test_empty_journal(self, runner):
        result = invoke(runner, "trades", "-w", "today")
        assert result.exit_code == 0
        assert "No trades found" in result.output


class TestAnalyticsCommands:
    def _closed_trade(self, runner, exit_price: str):
        invoke(runner, "open", "-d", "BUY", "--entry", "1.1", "--lots", "1")
        trade_id = get_data_store().get_trades(status="OPEN")[0].id
        invoke(runner, "close", trade_id, "--exit", exit_price, "--reason", "Risk Management", "--rr", "1:1")

    def test_stats_empty(self, runner):
        result = invoke(runner, "stats", "-w", "all")
        assert result.exit_code == 0
        assert "No closed trades" in result.output

    def test_stats_summary(self, runner):
        self._closed_trade(runner, "1.1020")
        self._closed_trade(runner, "1.0990")
        result = invoke(runner, "stats", "-w", "all")
        assert result.exit_code == 0
        assert "50.00%" in result.output
        assert "2.00" in result.output

    def test_equity_placeholder(self, runner):
        result = invoke(runner, "equity", "-w", "all")
        assert result.exit_code == 0
        assert "+$0.00" in result.output

    def test_pairs(self, runner):
        result = invoke(runner, "pairs", "-w", "all")
        assert "No Data" in result.output

        self._closed_trade(runner, "1.1010")
        result = invoke(runner, "pairs", "-w", "all")
        assert result.exit_code == 0
        assert "EUR/USD" in result.output
        assert "+$100.00" in result.output


class TestAccountAndRisk:
    def test_account_set_show(self, runner):
        result = invoke(runner, "account", "set", "--number", "123", "--broker", "IC", "--balance", "10000")
        assert result.exit_code == 0

        result = invoke(runner, "account", "show")
        assert "$10,000.00" in result.output
        assert "IC" in result.output

    def test_account_requires_identity(self, runner):
        result = invoke(runner, "account", "set", "--balance", "10000")
        assert result.exit_code == 1

    def test_account_rejects_non_numeric_balance(self, runner):
        invoke(runner, "account", "set", "--number", "123", "--broker", "IC", "--balance", "10000")
        result = invoke(runner, "account", "set", "--balance", "abc")
        assert result.exit_code == 1
        assert "balance" in result.output
        assert get_data_store().get_account().balance == 10000

    def test_risk_example(self, runner):
        invoke(runner, "account", "set", "--number", "123", "--broker", "IC", "--balance", "10000")
        result = invoke(runner, "risk", "-r", "2", "--entry", "1.1000", "--sl", "1.0950", "--tp", "1.1100")
        assert result.exit_code == 0
        assert "0.40 lots" in result.output
        assert "1:2.00" in result.output

    def test_risk_without_balance(self, runner):
        result = invoke(runner, "risk", "--entry", "1.1", "--sl", "1.09", "--tp", "1.12")
        assert result.exit_code == 1
        assert "balance" in result.output

    def test_risk_balance_override(self, runner):
        result = invoke(
            runner, "risk", "-r", "2", "--balance", "10000",
            "--entry", "1.1000", "--sl", "1.0950", "--tp", "1.1100",
        )
        assert result.exit_code == 0
        assert "0.40 lots" in result.output

    def test_risk_zero_stop_distance(self, runner):
        result = invoke(
            runner, "risk", "--balance", "10000",
            "--entry", "1.1", "--sl", "1.1", "--tp", "1.2",
        )
        assert result.exit_code == 1


class TestStrategyCommands:
    def test_add_list_backtest(self, runner):
        result = invoke(
            runner, "strategy", "add", "--name", "London Breakout",
            "--entry-rules", "Break of Asian range", "--exit-rules", "2R",
        )
        assert result.exit_code == 0

        strategy = get_data_store().get_strategies()[0]
        result = invoke(runner, "strategy", "list")
        assert "0/100" in result.output

        result = invoke(
            runner, "backtest", strategy.id[:8],
            "--entry", "1.1", "--exit", "1.105", "--date", "2024-03-01", "--outcome", "Win",
        )
        assert result.exit_code == 0
        assert "99 to go" in result.output
        assert get_data_store().get_strategy(strategy.id).backtest_count == 1

    def test_backtest_missing_date_value(self, runner):
        invoke(runner, "strategy", "add", "--name", "S", "--entry-rules", "a", "--exit-rules", "b")
        strategy = get_data_store().get_strategies()[0]
        result = invoke(runner, "backtest", strategy.id, "--entry", "1.1", "--exit", "x", "--date", "2024-03-01")
        assert result.exit_code == 1
        assert get_data_store().get_strategy(strategy.id).backtest_count == 0

    def test_blank_name_rejected(self, runner):
        result = invoke(runner, "strategy", "add", "--name", " ", "--entry-rules", "a", "--exit-rules", "b")
        assert result.exit_code == 1

    def test_show(self, runner):
        invoke(runner, "strategy", "add", "--name", "Trend", "--entry-rules", "EMA cross", "--exit-rules", "ATR stop")
        strategy = get_data_store().get_strategies()[0]
        invoke(runner, "backtest", strategy.id, "--entry", "1.1", "--exit", "1.2", "--date", "2024-03-01", "--notes", "clean")

        result = invoke(runner, "strategy", "show", strategy.id[:6])
        assert result.exit_code == 0
        assert "EMA cross" in result.output
        assert "2024-03-01" in result.output

    def test_show_unknown(self, runner):
        result = invoke(runner, "strategy", "show", "zzz")
        assert result.exit_code == 1


class TestConfig:
    def test_unreadable_config_uses_defaults(self, runner, tmp_path):
        (tmp_path / "config.toml").write_text("[journal\nbroken = ")
        result = invoke(runner, "stats", "-w", "all")
        assert result.exit_code == 0

    def test_configured_default_pair(self, runner, tmp_path):
        (tmp_path / "config.toml").write_text('[journal]\ndefault_pair = "GBP/USD"\n')
        invoke(runner, "open", "-d", "BUY", "--entry", "1.27", "--lots", "1")
        assert get_data_store().get_trades()[0].pair == "GBP/USD"

    @pytest.mark.parametrize(
        "content, key",
        [
            ('[logging]\nlevel = "LOUD"\n', "logging.level"),
            ('[journal]\nchart_window = "hourly"\n', "journal.chart_window"),
            ('[journal]\nlist_window = 7\n', "journal.list_window"),
            ('[risk]\ndefault_risk_percentage = "lots"\n', "risk.default_risk_percentage"),
            ('journal = "EUR/USD"\n', "journal"),
        ],
    )
    def test_invalid_values_reported(self, runner, tmp_path, content, key):
        (tmp_path / "config.toml").write_text(content)
        problems = validate_config(load_config(tmp_path / "config.toml"))
        assert any(problem.startswith(key) for problem in problems)

        result = invoke(runner, "stats")
        assert result.exit_code == 1
        assert "Configuration Error" in result.output
        assert key in result.output

    def test_defaults_are_valid(self):
        assert validate_config(load_config(Path("/nonexistent/config.toml"))) == []

    def test_init_force_repairs_config(self, runner, tmp_path):
        (tmp_path / "config.toml").write_text('[logging]\nlevel = "LOUD"\n')
        result = invoke(runner, "init", "--force")
        assert result.exit_code == 0
        assert invoke(runner, "stats").exit_code == 0
