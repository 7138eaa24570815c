"""Chart series: cumulative equity curve and PnL by pair."""

import math

from fxjournal.analytics.pnl import compute_pnl
from fxjournal.analytics.windows import to_local
from fxjournal.models import EquityPoint, PairPerformance, Trade

NO_DATA_LABEL = "No Data"


def equity_curve(trades: list[Trade]) -> list[EquityPoint]:
    """Build the cumulative PnL curve from closed trades.

    Trades are ordered by exit time and emit one point per exit date,
    valued at the running total after the last trade of that date.
    Never returns an empty list.

    Args:
        trades: Trades (typically already window-filtered).

    Returns:
        Points in ascending date order, or a single zero point.
    """
    closed = sorted(
        (t for t in trades if t.status == "CLOSED" and t.exit_time is not None),
        key=lambda t: to_local(t.exit_time),
    )

    by_date = {}
    cumulative = 0.0
    for trade in closed:
        pnl = compute_pnl(trade)
        if not math.isfinite(pnl):
            continue
        cumulative += pnl
        by_date[to_local(trade.exit_time).date()] = cumulative

    if not by_date:
        return [EquityPoint(value=0.0)]

    return [EquityPoint(date=day, value=value) for day, value in by_date.items()]


def pair_performance(trades: list[Trade]) -> list[PairPerformance]:
    """Sum closed-trade PnL per instrument.

    Args:
        trades: Trades (typically already window-filtered).

    Returns:
        One entry per pair in first-seen order, or a single placeholder
        entry with ``has_data=False`` when nothing is closed.
    """
    totals: dict[str, float] = {}
    for trade in trades:
        if trade.status != "CLOSED":
            continue
        pnl = compute_pnl(trade)
        if not math.isfinite(pnl):
            continue
        totals[trade.pair] = totals.get(trade.pair, 0.0) + pnl

    if not totals:
        return [PairPerformance(pair=NO_DATA_LABEL, pnl=0.0, has_data=False)]

    return [PairPerformance(pair=pair, pnl=pnl) for pair, pnl in totals.items()]
