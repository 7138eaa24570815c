"""Position sizing and risk/reward projection."""

import logging
import math

from fxjournal.errors import DegenerateInputError, ValidationError
from fxjournal.models import AccountSnapshot, RiskInputs, RiskResult
from fxjournal.numbers import is_blank, parse_number
from fxjournal.risk.pips import PIPS_PER_PRICE_UNIT, reference_pip_value

logger = logging.getLogger(__name__)

PRICE_FIELDS = ("entry_price", "stop_loss", "take_profit")


def _validate(account: AccountSnapshot, inputs: RiskInputs) -> tuple[float, float, dict]:
    """Check preconditions in order, raising one error per failing group."""
    missing = []
    if account.balance is None or math.isnan(account.balance):
        missing.append("balance")
    if is_blank(inputs.risk_percentage):
        missing.append("risk_percentage")
    if missing:
        raise ValidationError(
            missing,
            "Account balance and risk percentage must be set: " + ", ".join(missing),
        )

    prices = {name: parse_number(getattr(inputs, name)) for name in PRICE_FIELDS}
    risk_percentage = parse_number(inputs.risk_percentage)
    invalid = [name for name, value in prices.items() if not math.isfinite(value)]
    if not math.isfinite(risk_percentage):
        invalid.insert(0, "risk_percentage")
    if invalid:
        raise ValidationError(
            invalid, "Fields must be valid numbers: " + ", ".join(invalid)
        )

    out_of_range = []
    if not math.isfinite(account.balance) or account.balance <= 0:
        out_of_range.append("balance")
    if not 0 < risk_percentage <= 100:
        out_of_range.append("risk_percentage")
    if out_of_range:
        raise ValidationError(
            out_of_range,
            "Balance must be positive and risk percentage within (0, 100]: "
            + ", ".join(out_of_range),
        )

    return account.balance, risk_percentage, prices


def compute_risk(account: AccountSnapshot, inputs: RiskInputs) -> RiskResult:
    """Size a position so that hitting the stop loses the risked amount.

    Args:
        account: Account snapshot providing the balance.
        inputs: Risk percentage, entry, stop-loss, take-profit and instrument.

    Returns:
        Full-precision RiskResult. Use ``rounded()`` for display.

    Raises:
        ValidationError: If a required value is missing or not a number.
        DegenerateInputError: If the stop-loss equals the entry price.
    """
    balance, risk_percentage, prices = _validate(account, inputs)
    entry = prices["entry_price"]
    stop = prices["stop_loss"]
    target = prices["take_profit"]

    risk_amount = balance * risk_percentage / 100
    pips_to_stop = abs(entry - stop) * PIPS_PER_PRICE_UNIT
    if pips_to_stop == 0:
        raise DegenerateInputError(
            "Stop-loss equals entry price; cannot size against a zero-distance stop"
        )

    pip_value = risk_amount / pips_to_stop
    position_size = pip_value / reference_pip_value(inputs.instrument)

    potential_loss = risk_amount
    pips_to_target = abs(target - entry) * PIPS_PER_PRICE_UNIT
    potential_profit = pips_to_target * pip_value

    logger.debug(
        "Sized %s: %.2f lots risking %.2f over %.1f pips",
        inputs.instrument, position_size, risk_amount, pips_to_stop,
    )

    return RiskResult(
        risk_amount=risk_amount,
        pip_distance_to_stop=pips_to_stop,
        pip_distance_to_target=pips_to_target,
        pip_value=pip_value,
        position_size=position_size,
        potential_loss=potential_loss,
        potential_profit=potential_profit,
        risk_reward_ratio=potential_profit / potential_loss,
    )
