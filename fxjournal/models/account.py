"""AccountSnapshot data model."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fxjournal.numbers import is_blank, parse_number


class AccountSnapshot(BaseModel):
    """Trading account details as entered by the user."""

    account_number: Optional[str] = Field(default=None, description="Broker account number")
    broker: Optional[str] = Field(default=None, description="Broker name")
    balance: Optional[float] = Field(default=None, description="Account balance")
    currency: str = Field(default="USD", description="Account currency")
    leverage: Optional[str] = Field(default=None, description="Leverage (e.g. '1:100')")
    margin_level: Optional[float] = Field(default=None, description="Margin level percent")
    equity: Optional[float] = Field(default=None, description="Account equity")
    profit_loss: Optional[float] = Field(default=None, description="Floating profit/loss")

    model_config = {"frozen": True}

    @field_validator("balance", "margin_level", "equity", "profit_loss", mode="before")
    @classmethod
    def _parse_amount(cls, value):
        if is_blank(value):
            return None
        return parse_number(value)

    @field_validator("account_number", "broker", "leverage", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if is_blank(value):
            return None
        return str(value).strip()
