"""Trade lifecycle: opening and closing journal entries."""

import logging
from datetime import datetime
from typing import Optional

import pydantic

from fxjournal.errors import RejectedError, ValidationError
from fxjournal.models import Trade
from fxjournal.numbers import is_blank, is_finite_number

logger = logging.getLogger(__name__)

# Forex major pairs offered by default
FOREX_PAIRS = [
    "EUR/USD",
    "GBP/USD",
    "USD/JPY",
    "USD/CHF",
    "USD/CAD",
    "AUD/USD",
    "NZD/USD",
]

CLOSE_REASONS = [
    "Take Profit Hit",
    "Stop Loss Hit",
    "Manual Close - Profit",
    "Manual Close - Loss",
    "Technical Analysis",
    "News Impact",
    "Risk Management",
]

RISK_REWARD_RATIOS = ["1:1", "1:2", "1:3", "1:4", "1:5"]


def _invalid_fields(error: pydantic.ValidationError) -> list[str]:
    return sorted({str(d["loc"][0]) for d in error.errors() if d["loc"]}) or ["trade"]


def open_trade(
    pair: str,
    direction: str,
    entry_price,
    lot_size,
    stop_loss=None,
    take_profit=None,
    notes: str = "",
    now: Optional[datetime] = None,
) -> Trade:
    """Create a new OPEN trade.

    Args:
        pair: Instrument code.
        direction: BUY or SELL.
        entry_price: Entry price (number or numeric text).
        lot_size: Position size in standard lots.
        stop_loss: Optional stop-loss price.
        take_profit: Optional take-profit price.
        notes: Free-form notes.
        now: Entry time. Defaults to the current time.

    Returns:
        The new trade.

    Raises:
        ValidationError: If a required field is missing or malformed.
    """
    required = {
        "pair": pair,
        "direction": direction,
        "entry_price": entry_price,
        "lot_size": lot_size,
    }
    missing = [name for name, value in required.items() if is_blank(value)]
    if missing:
        raise ValidationError(missing)

    numbers = {
        "entry_price": entry_price,
        "lot_size": lot_size,
        "stop_loss": stop_loss,
        "take_profit": take_profit,
    }
    invalid = [
        name for name, value in numbers.items()
        if not is_blank(value) and not is_finite_number(value)
    ]
    if invalid:
        raise ValidationError(invalid)

    try:
        trade = Trade(
            pair=pair.strip(),
            direction=direction,
            entry_price=entry_price,
            lot_size=lot_size,
            stop_loss=stop_loss,
            take_profit=take_profit,
            notes=notes,
            entry_time=now or datetime.now(),
        )
    except pydantic.ValidationError as e:
        raise ValidationError(_invalid_fields(e)) from e

    logger.info("Opened %s %s at %s", trade.direction, trade.pair, trade.entry_price)
    return trade


def close_trade(
    trade: Trade,
    exit_price,
    close_reason: Optional[str],
    risk_reward_ratio: Optional[str],
    now: Optional[datetime] = None,
) -> Trade:
    """Close an OPEN trade.

    Args:
        trade: Trade to close.
        exit_price: Exit price.
        close_reason: Why the trade was closed.
        risk_reward_ratio: Risk/reward label, e.g. "1:2".
        now: Exit time. Defaults to the current time.

    Returns:
        A CLOSED copy of the trade.

    Raises:
        RejectedError: If the trade is already closed.
        ValidationError: If a closing field is missing.
    """
    if trade.status == "CLOSED":
        raise RejectedError(f"Trade {trade.id} is already closed")

    closing = {
        "exit_price": exit_price,
        "close_reason": close_reason,
        "risk_reward_ratio": risk_reward_ratio,
    }
    missing = [name for name, value in closing.items() if is_blank(value)]
    if missing:
        raise ValidationError(missing)
    if not is_finite_number(exit_price):
        raise ValidationError(["exit_price"])

    try:
        closed = Trade.model_validate(
            {
                **trade.model_dump(),
                **closing,
                "exit_time": now or datetime.now(),
                "status": "CLOSED",
            }
        )
    except pydantic.ValidationError as e:
        raise ValidationError(_invalid_fields(e)) from e

    logger.info("Closed trade %s (%s)", closed.id, closed.close_reason)
    return closed


def find_trade(trades: list[Trade], trade_id: str) -> Trade:
    """Find a trade by id or unique id prefix.

    Raises:
        ValidationError: If no trade, or more than one, matches.
    """
    matches = [t for t in trades if t.id == trade_id]
    if not matches:
        matches = [t for t in trades if t.id.startswith(trade_id)]
    if len(matches) != 1:
        raise ValidationError(
            ["trade_id"],
            f"No unique trade matches '{trade_id}'",
        )
    return matches[0]
