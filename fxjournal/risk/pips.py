"""Reference pip values per standard lot."""

# Size of one pip for pairs quoted to four decimals
PIP_SIZE = 0.0001
PIPS_PER_PRICE_UNIT = 10000

DEFAULT_PIP_VALUE = 10.0

PIP_VALUES = {
    "EURUSD": 10.0,
    "GBPUSD": 10.0,
    "USDJPY": 9.30,
    "USDCHF": 10.0,
    "AUDUSD": 10.0,
    "NZDUSD": 10.0,
}


def normalize_instrument(instrument: str) -> str:
    """Normalize an instrument code, e.g. ``eur/usd`` -> ``EURUSD``."""
    return "".join(ch for ch in instrument.upper() if ch.isalnum())


def reference_pip_value(instrument: str) -> float:
    """Pip value of one standard lot.

    Unknown instruments fall back to the common USD-quoted value.
    """
    return PIP_VALUES.get(normalize_instrument(instrument), DEFAULT_PIP_VALUE)


def pip_value(instrument: str, lots: float) -> float:
    """Pip value for a position of the given size."""
    return reference_pip_value(instrument) * lots
