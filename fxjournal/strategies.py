"""Strategy creation and backtest verification.

A strategy moves one way, from ``Unverified(count)`` to ``Verified``,
once it has accumulated ``VERIFICATION_THRESHOLD`` backtests. Verified
strategies accept no further backtests.
"""

import logging
from typing import Any, Mapping, Union

import pydantic

from fxjournal.errors import RejectedError, ValidationError
from fxjournal.models import (
    VERIFICATION_THRESHOLD,
    BacktestResult,
    Strategy,
    Unverified,
    Verified,
)
from fxjournal.numbers import is_blank, is_finite_number

logger = logging.getLogger(__name__)

REQUIRED_STRATEGY_FIELDS = ("name", "entry_rules", "exit_rules")
REQUIRED_BACKTEST_FIELDS = ("entry_price", "exit_price", "date")


def _field_names(error: pydantic.ValidationError) -> list[str]:
    names = []
    for detail in error.errors():
        name = str(detail["loc"][0]) if detail["loc"] else "record"
        if name not in names:
            names.append(name)
    return names


def create_strategy(
    name: str,
    entry_rules: str,
    exit_rules: str,
    description: str = "",
    risk_per_trade: str = "",
    timeframe: str = "",
) -> Strategy:
    """Create a new, unverified strategy with no backtests.

    Raises:
        ValidationError: If name, entry rules or exit rules are blank.
    """
    values = {"name": name, "entry_rules": entry_rules, "exit_rules": exit_rules}
    missing = [field for field in REQUIRED_STRATEGY_FIELDS if is_blank(values[field])]
    if missing:
        raise ValidationError(missing)

    strategy = Strategy(
        name=name.strip(),
        entry_rules=entry_rules,
        exit_rules=exit_rules,
        description=description,
        risk_per_trade=risk_per_trade,
        timeframe=timeframe,
    )
    logger.info("Created strategy %s (%s)", strategy.id, strategy.name)
    return strategy


def _build_result(submission: Union[BacktestResult, Mapping[str, Any]]) -> BacktestResult:
    if isinstance(submission, BacktestResult):
        return submission

    missing = [
        field for field in REQUIRED_BACKTEST_FIELDS if is_blank(submission.get(field))
    ]
    if missing:
        raise ValidationError(missing)

    invalid = [
        field for field in ("entry_price", "exit_price")
        if not is_finite_number(submission[field])
    ]
    if invalid:
        raise ValidationError(invalid)

    try:
        return BacktestResult.model_validate(dict(submission))
    except pydantic.ValidationError as e:
        raise ValidationError(_field_names(e)) from e


def submit_backtest(
    strategy: Strategy, submission: Union[BacktestResult, Mapping[str, Any]]
) -> Strategy:
    """Record a backtest against a strategy.

    The input strategy is left untouched. The returned strategy carries
    the appended result and, if the new count reaches the threshold, is
    verified in the same step.

    Args:
        strategy: Current strategy record.
        submission: A BacktestResult, or raw fields with at least
            entry_price, exit_price and date.

    Returns:
        Updated strategy for the caller to persist.

    Raises:
        RejectedError: If the strategy is already verified.
        ValidationError: If a required backtest field is missing or invalid.
    """
    status = strategy.status
    if isinstance(status, Verified):
        raise RejectedError(
            f"Strategy '{strategy.name}' is verified and accepts no more backtests"
        )

    result = _build_result(submission)
    results = strategy.backtest_results + (result,)
    verified = len(results) >= VERIFICATION_THRESHOLD

    updated = strategy.model_copy(
        update={"backtest_results": results, "is_verified": verified}
    )
    if verified:
        logger.info(
            "Strategy %s verified after %d backtests", strategy.id, len(results)
        )
    return updated


def progress(strategy: Strategy) -> tuple[int, int]:
    """Return ``(backtest_count, threshold)`` for display."""
    return strategy.backtest_count, VERIFICATION_THRESHOLD


def remaining_backtests(strategy: Strategy) -> int:
    """Backtests still needed before verification; 0 once verified."""
    status = strategy.status
    if isinstance(status, Unverified):
        return status.remaining
    return 0
