"""Risk management: pip reference table and position sizing."""

from fxjournal.risk.pips import (
    DEFAULT_PIP_VALUE,
    PIP_SIZE,
    PIP_VALUES,
    normalize_instrument,
    pip_value,
    reference_pip_value,
)
from fxjournal.risk.calculator import compute_risk

__all__ = [
    "DEFAULT_PIP_VALUE",
    "PIP_SIZE",
    "PIP_VALUES",
    "normalize_instrument",
    "pip_value",
    "reference_pip_value",
    "compute_risk",
]
