"""Risk calculator input and result models."""

from typing import Optional, Union

from pydantic import BaseModel, Field

Number = Union[float, str]


class RiskInputs(BaseModel):
    """Proposed trade parameters, usually raw user text."""

    risk_percentage: Optional[Number] = Field(default=None, description="Percent of balance to risk")
    entry_price: Optional[Number] = Field(default=None, description="Planned entry price")
    stop_loss: Optional[Number] = Field(default=None, description="Stop-loss price")
    take_profit: Optional[Number] = Field(default=None, description="Take-profit price")
    instrument: str = Field(default="EURUSD", description="Instrument code")

    model_config = {"frozen": True}


class RiskResult(BaseModel):
    """Position size and risk/reward projection."""

    risk_amount: float = Field(..., description="Money at risk")
    pip_distance_to_stop: float = Field(..., description="Entry to stop, in pips")
    pip_distance_to_target: float = Field(..., description="Entry to target, in pips")
    pip_value: float = Field(..., description="Money per pip at the sized position")
    position_size: float = Field(..., description="Position size in standard lots")
    potential_loss: float = Field(..., description="Loss if the stop is hit")
    potential_profit: float = Field(..., description="Profit if the target is hit")
    risk_reward_ratio: float = Field(..., description="Potential profit / potential loss")

    model_config = {"frozen": True}

    def rounded(self, digits: int = 2) -> "RiskResult":
        """Return a copy with all values rounded for display."""
        return self.model_copy(
            update={
                name: round(value, digits)
                for name, value in self.model_dump().items()
            }
        )
