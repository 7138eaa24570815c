"""Strategy, BacktestResult and verification status models."""

import uuid
from datetime import date as date_type
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from fxjournal.numbers import is_blank, parse_number

# Number of backtests a strategy needs before it counts as verified
VERIFICATION_THRESHOLD = 100


class BacktestResult(BaseModel):
    """A single recorded backtest of a strategy."""

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex, description="Result identifier"
    )
    entry_price: float = Field(..., description="Backtest entry price")
    exit_price: float = Field(..., description="Backtest exit price")
    date: date_type = Field(..., description="Date of the backtested setup")
    outcome: str = Field(default="", description="Free-form outcome label (Win/Loss)")
    pnl: Optional[float] = Field(default=None, description="Result in percent")
    notes: str = Field(default="", description="User notes")

    model_config = {"frozen": True}

    @field_validator("pnl", mode="before")
    @classmethod
    def _parse_pnl(cls, value):
        if is_blank(value):
            return None
        return parse_number(value)


class Unverified(BaseModel):
    """Strategy still collecting backtests."""

    kind: Literal["unverified"] = "unverified"
    count: int = Field(..., ge=0, lt=VERIFICATION_THRESHOLD)

    model_config = {"frozen": True}

    @property
    def remaining(self) -> int:
        return VERIFICATION_THRESHOLD - self.count


class Verified(BaseModel):
    """Strategy that reached the verification threshold. Terminal."""

    kind: Literal["verified"] = "verified"
    count: int = Field(..., ge=0)

    model_config = {"frozen": True}


VerificationStatus = Union[Unverified, Verified]


class Strategy(BaseModel):
    """A trading strategy and its accumulated backtests.

    The backtest count is always the length of ``backtest_results``; a record
    that reports a different ``backtest_count`` is rejected. A record whose
    results reach the threshold is loaded as verified.
    """

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex, description="Strategy identifier"
    )
    name: str = Field(..., min_length=1, description="Strategy name")
    description: str = Field(default="", description="Short description")
    entry_rules: str = Field(default="", description="Entry rules")
    exit_rules: str = Field(default="", description="Exit rules")
    risk_per_trade: str = Field(default="", description="Risk per trade (free text)")
    timeframe: str = Field(default="", description="Chart timeframe")
    backtest_results: tuple[BacktestResult, ...] = Field(
        default=(), description="Backtests in submission order"
    )
    is_verified: bool = Field(default=False, description="Verification flag")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _reconcile_count(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        results = data.get("backtest_results") or ()
        declared = data.pop("backtest_count", None)
        if declared is not None and int(declared) != len(results):
            raise ValueError(
                f"backtest_count {declared} does not match {len(results)} results"
            )
        if len(results) >= VERIFICATION_THRESHOLD:
            data["is_verified"] = True
        return data

    @computed_field
    @property
    def backtest_count(self) -> int:
        return len(self.backtest_results)

    @property
    def status(self) -> VerificationStatus:
        """Verification state as a tagged variant."""
        if self.is_verified:
            return Verified(count=self.backtest_count)
        return Unverified(count=self.backtest_count)
