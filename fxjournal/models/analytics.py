"""Derived analytics models: metrics summary and chart series points."""

from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field


class MetricsSummary(BaseModel):
    """Performance statistics over a trade history.

    Values are kept at full precision; call :meth:`rounded` at the
    presentation boundary.
    """

    total_trades: int = Field(default=0, ge=0, description="Closed trades aggregated")
    winning_trades: int = Field(default=0, ge=0, description="Trades with PnL > 0")
    losing_trades: int = Field(default=0, ge=0, description="Trades with PnL <= 0")
    unpriced_trades: int = Field(
        default=0, ge=0, description="Closed trades skipped because PnL is unavailable"
    )
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    average_profit_loss: float = Field(default=0.0, description="Net PnL per trade")
    profit_factor: float = Field(default=0.0, ge=0, description="Gross profit / gross loss")
    best_trade: float = Field(default=0.0, description="Largest winning PnL")
    worst_trade: float = Field(default=0.0, description="Largest losing PnL")
    consecutive_wins: int = Field(default=0, ge=0, description="Longest winning streak")
    consecutive_losses: int = Field(default=0, ge=0, description="Longest losing streak")
    total_profit: float = Field(default=0.0, ge=0, description="Gross profit")
    total_loss: float = Field(default=0.0, ge=0, description="Gross loss (positive)")

    model_config = {"frozen": True}

    @property
    def net_profit(self) -> float:
        return self.total_profit - self.total_loss

    def rounded(self, digits: int = 2) -> "MetricsSummary":
        """Return a copy with every money/rate value rounded for display."""
        return self.model_copy(
            update={
                "win_rate": round(self.win_rate, digits),
                "average_profit_loss": round(self.average_profit_loss, digits),
                "profit_factor": round(self.profit_factor, digits),
                "best_trade": round(self.best_trade, digits),
                "worst_trade": round(self.worst_trade, digits),
                "total_profit": round(self.total_profit, digits),
                "total_loss": round(self.total_loss, digits),
            }
        )


class EquityPoint(BaseModel):
    """Cumulative PnL at the end of one exit date."""

    date: Optional[date_type] = Field(default=None, description="Exit date (None for the empty curve)")
    value: float = Field(..., description="Cumulative PnL after this date's trades")

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return self.date.isoformat() if self.date else ""


class PairPerformance(BaseModel):
    """Aggregate PnL for one instrument."""

    pair: str = Field(..., description="Instrument code, or 'No Data' for the placeholder")
    pnl: float = Field(default=0.0, description="Summed PnL")
    has_data: bool = Field(default=True, description="False for the placeholder entry")

    model_config = {"frozen": True}

    @property
    def is_positive(self) -> bool:
        """Sign flag for presentation; zero counts as non-negative."""
        return self.pnl >= 0
