"""Trade analytics: PnL, performance metrics, windows and chart series."""

from fxjournal.analytics.pnl import STANDARD_LOT_UNITS, compute_pnl
from fxjournal.analytics.metrics import aggregate
from fxjournal.analytics.windows import WINDOWS, filter_by_window, window_cutoff
from fxjournal.analytics.series import equity_curve, pair_performance

__all__ = [
    "STANDARD_LOT_UNITS",
    "compute_pnl",
    "aggregate",
    "WINDOWS",
    "filter_by_window",
    "window_cutoff",
    "equity_curve",
    "pair_performance",
]
