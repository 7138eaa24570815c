"""Performance metrics aggregation over a trade history."""

import logging
import math

from fxjournal.analytics.pnl import compute_pnl
from fxjournal.models import MetricsSummary, Trade

logger = logging.getLogger(__name__)


def aggregate(trades: list[Trade]) -> MetricsSummary:
    """Aggregate closed trades into a performance summary.

    Trades are processed in input order, which drives the streak
    counters. A PnL of exactly zero counts as a loss. Closed trades whose
    PnL is unavailable (NaN or infinite) are left out of every statistic
    and reported in ``unpriced_trades``.

    Args:
        trades: Trade history, typically in chronological order.

    Returns:
        Full-precision MetricsSummary. All zeros when nothing is closed.
    """
    closed = [t for t in trades if t.status == "CLOSED"]

    total_profit = 0.0
    total_loss = 0.0
    winning = 0
    losing = 0
    unpriced = 0
    win_streak = 0
    loss_streak = 0
    max_win_streak = 0
    max_loss_streak = 0
    best_trade = None
    worst_trade = None

    for trade in closed:
        pnl = compute_pnl(trade)
        if not math.isfinite(pnl):
            unpriced += 1
            logger.warning("Skipping trade %s: PnL unavailable", trade.id)
            continue

        if pnl > 0:
            total_profit += pnl
            winning += 1
            win_streak += 1
            loss_streak = 0
            max_win_streak = max(max_win_streak, win_streak)
            best_trade = pnl if best_trade is None else max(best_trade, pnl)
        else:
            total_loss += abs(pnl)
            losing += 1
            loss_streak += 1
            win_streak = 0
            max_loss_streak = max(max_loss_streak, loss_streak)
            worst_trade = pnl if worst_trade is None else min(worst_trade, pnl)

    counted = winning + losing
    if counted == 0:
        return MetricsSummary(unpriced_trades=unpriced)

    return MetricsSummary(
        total_trades=counted,
        winning_trades=winning,
        losing_trades=losing,
        unpriced_trades=unpriced,
        win_rate=winning / counted * 100,
        average_profit_loss=(total_profit - total_loss) / counted,
        profit_factor=total_profit / total_loss if total_loss != 0 else total_profit,
        best_trade=best_trade if best_trade is not None else 0.0,
        worst_trade=worst_trade if worst_trade is not None else 0.0,
        consecutive_wins=max_win_streak,
        consecutive_losses=max_loss_streak,
        total_profit=total_profit,
        total_loss=total_loss,
    )
