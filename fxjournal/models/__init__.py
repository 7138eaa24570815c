"""Data models for FX Journal."""

from fxjournal.models.trade import Trade
from fxjournal.models.strategy import (
    VERIFICATION_THRESHOLD,
    BacktestResult,
    Strategy,
    Unverified,
    VerificationStatus,
    Verified,
)
from fxjournal.models.account import AccountSnapshot
from fxjournal.models.analytics import EquityPoint, MetricsSummary, PairPerformance
from fxjournal.models.risk import RiskInputs, RiskResult

__all__ = [
    "Trade",
    "Strategy",
    "BacktestResult",
    "Unverified",
    "Verified",
    "VerificationStatus",
    "VERIFICATION_THRESHOLD",
    "AccountSnapshot",
    "MetricsSummary",
    "EquityPoint",
    "PairPerformance",
    "RiskInputs",
    "RiskResult",
]
