"""Trade data model."""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from fxjournal.numbers import is_blank, parse_number

# Fields that exist only once a trade has been closed
CLOSING_FIELDS = ("exit_price", "exit_time", "close_reason", "risk_reward_ratio")


class Trade(BaseModel):
    """Represents a journaled forex trade."""

    id: str = Field(
        default_factory=lambda: uuid.uuid4().hex, description="Trade identifier"
    )
    pair: str = Field(..., min_length=1, description="Instrument code (e.g. EUR/USD)")
    direction: Literal["BUY", "SELL"] = Field(..., description="Trade direction")
    entry_price: float = Field(..., description="Entry price")
    exit_price: Optional[float] = Field(default=None, description="Exit price")
    lot_size: float = Field(..., description="Position size in standard lots")
    stop_loss: Optional[float] = Field(default=None, description="Stop-loss price")
    take_profit: Optional[float] = Field(default=None, description="Take-profit price")
    entry_time: datetime = Field(..., description="Entry timestamp")
    exit_time: Optional[datetime] = Field(default=None, description="Exit timestamp")
    status: Literal["OPEN", "CLOSED"] = Field(default="OPEN", description="Trade status")
    close_reason: Optional[str] = Field(default=None, description="Why the trade was closed")
    risk_reward_ratio: Optional[str] = Field(
        default=None, description="Risk/reward label (e.g. '1:2')"
    )
    notes: str = Field(default="", description="User notes")

    model_config = {"frozen": True}

    @field_validator("direction", "status", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("entry_price", "lot_size", mode="before")
    @classmethod
    def _parse_required_number(cls, value):
        if value is None:
            return value
        return parse_number(value)

    @field_validator("exit_price", "stop_loss", "take_profit", mode="before")
    @classmethod
    def _parse_optional_number(cls, value):
        if is_blank(value):
            return None
        return parse_number(value)

    @field_validator("close_reason", "risk_reward_ratio", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return None if is_blank(value) else value

    @model_validator(mode="after")
    def _check_closing_fields(self) -> "Trade":
        present = [name for name in CLOSING_FIELDS if getattr(self, name) is not None]
        if self.status == "CLOSED" and len(present) != len(CLOSING_FIELDS):
            missing = [name for name in CLOSING_FIELDS if name not in present]
            raise ValueError(f"closed trade is missing {', '.join(missing)}")
        if self.status == "OPEN" and present:
            raise ValueError(f"open trade must not carry {', '.join(present)}")
        return self

    @property
    def is_closed(self) -> bool:
        return self.status == "CLOSED"
