"""Tests for the trade lifecycle and account details.

**Feature: fx-journal**
"""

from datetime import datetime

import pydantic
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fxjournal.accounts import update_account
from fxjournal.errors import RejectedError, ValidationError
from fxjournal.models import AccountSnapshot, Trade
from fxjournal.trades import close_trade, find_trade, open_trade

OPENED_AT = datetime(2024, 4, 2, 9, 15)
CLOSED_AT = datetime(2024, 4, 2, 16, 45)


def sample_open() -> Trade:
    return open_trade("EUR/USD", "buy", "1.1000", "0.5", stop_loss="1.0950", now=OPENED_AT)


class TestOpenTrade:
    def test_creates_open_trade(self):
        trade = sample_open()
        assert trade.status == "OPEN"
        assert trade.direction == "BUY"
        assert trade.entry_price == 1.1
        assert trade.lot_size == 0.5
        assert trade.stop_loss == 1.095
        assert trade.take_profit is None
        assert trade.entry_time == OPENED_AT
        assert trade.exit_price is None

    def test_ids_are_unique(self):
        assert sample_open().id != sample_open().id

    def test_required_fields(self):
        with pytest.raises(ValidationError) as exc:
            open_trade("", "SELL", None, "1")
        assert exc.value.fields == ("pair", "entry_price")

    def test_non_numeric_price(self):
        with pytest.raises(ValidationError) as exc:
            open_trade("EUR/USD", "SELL", "1.2", "one lot")
        assert exc.value.fields == ("lot_size",)

    def test_unknown_direction(self):
        with pytest.raises(ValidationError) as exc:
            open_trade("EUR/USD", "HOLD", "1.2", "1")
        assert exc.value.fields == ("direction",)


class TestCloseTrade:
    """
    **Feature: fx-journal, Property 14: Close Exactly Once**

    Closing sets every closing field at once; a closed trade cannot be
    closed again.
    """

    def test_close_sets_fields(self):
        original = sample_open()
        closed = close_trade(original, "1.1050", "Take Profit Hit", "1:2", now=CLOSED_AT)

        assert closed.status == "CLOSED"
        assert closed.exit_price == 1.105
        assert closed.exit_time == CLOSED_AT
        assert closed.close_reason == "Take Profit Hit"
        assert closed.risk_reward_ratio == "1:2"
        assert closed.id == original.id
        assert original.status == "OPEN"

    def test_close_twice_rejected(self):
        closed = close_trade(sample_open(), "1.1050", "Take Profit Hit", "1:2")
        with pytest.raises(RejectedError):
            close_trade(closed, "1.2", "Manual Close - Profit", "1:3")

    @pytest.mark.parametrize(
        "exit_price,reason,ratio,missing",
        [
            ("", "Take Profit Hit", "1:2", ("exit_price",)),
            ("1.1", None, "1:2", ("close_reason",)),
            ("1.1", "News Impact", " ", ("risk_reward_ratio",)),
        ],
    )
    def test_closing_fields_required(self, exit_price, reason, ratio, missing):
        with pytest.raises(ValidationError) as exc:
            close_trade(sample_open(), exit_price, reason, ratio)
        assert exc.value.fields == missing

    def test_non_numeric_exit(self):
        with pytest.raises(ValidationError) as exc:
            close_trade(sample_open(), "soon", "News Impact", "1:1")
        assert exc.value.fields == ("exit_price",)


class TestTradeInvariant:
    """
    **Feature: fx-journal, Property 15: Closing Fields Iff Closed**
    """

    @given(field=st.sampled_from(["exit_price", "exit_time", "close_reason", "risk_reward_ratio"]))
    @settings(max_examples=10)
    def test_closed_requires_all_closing_fields(self, field: str):
        values = {
            "pair": "EUR/USD",
            "direction": "BUY",
            "entry_price": 1.1,
            "lot_size": 1,
            "entry_time": OPENED_AT,
            "status": "CLOSED",
            "exit_price": 1.2,
            "exit_time": CLOSED_AT,
            "close_reason": "Take Profit Hit",
            "risk_reward_ratio": "1:2",
        }
        del values[field]
        with pytest.raises(pydantic.ValidationError):
            Trade(**values)

    def test_open_rejects_exit_price(self):
        with pytest.raises(pydantic.ValidationError):
            Trade(
                pair="EUR/USD",
                direction="BUY",
                entry_price=1.1,
                exit_price=1.2,
                lot_size=1,
                entry_time=OPENED_AT,
            )

    def test_iso_strings_accepted(self):
        trade = Trade(
            pair="EUR/USD",
            direction="SELL",
            entry_price="1.1",
            lot_size="2",
            entry_time="2024-04-02T09:15:00Z",
        )
        assert trade.entry_time.tzinfo is not None


class TestFindTrade:
    def test_prefix_lookup(self):
        trades = [sample_open(), sample_open()]
        target = trades[1]
        assert find_trade(trades, target.id) is target
        assert find_trade(trades, target.id[:20]) is target

    def test_no_match(self):
        with pytest.raises(ValidationError):
            find_trade([sample_open()], "zzz")


class TestAccount:
    def test_requires_number_and_broker(self):
        with pytest.raises(ValidationError) as exc:
            update_account(None, balance="5000")
        assert exc.value.fields == ("account_number", "broker")

    def test_update_keeps_unchanged_fields(self):
        first = update_account(None, account_number="42", broker="Demo", balance="5000")
        second = update_account(first, balance="5250.5")

        assert second.account_number == "42"
        assert second.broker == "Demo"
        assert second.balance == 5250.5
        assert second.currency == "USD"

    def test_blank_balance_is_missing(self):
        assert AccountSnapshot(balance="").balance is None

    @pytest.mark.parametrize("field", ["balance", "equity", "margin_level", "profit_loss"])
    def test_non_numeric_amount_rejected(self, field: str):
        current = update_account(None, account_number="42", broker="Demo", balance="5000")
        with pytest.raises(ValidationError) as exc:
            update_account(current, **{field: "abc"})
        assert exc.value.fields == (field,)

    def test_infinite_balance_rejected(self):
        with pytest.raises(ValidationError):
            update_account(None, account_number="42", broker="Demo", balance="inf")
