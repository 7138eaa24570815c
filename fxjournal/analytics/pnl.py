"""Per-trade profit and loss."""

from fxjournal.models import Trade

# Units of base currency in one standard lot
STANDARD_LOT_UNITS = 100000


def compute_pnl(trade: Trade) -> float:
    """Calculate realized PnL for a trade.

    Open trades and trades without an exit price have no realized PnL
    and return 0.0. Positive values are profit for both directions.
    A NaN price or lot size propagates as NaN; callers must treat it as
    unavailable.

    Args:
        trade: Trade to evaluate.

    Returns:
        Signed PnL in account currency.
    """
    if trade.status != "CLOSED" or trade.exit_price is None:
        return 0.0

    if trade.direction == "BUY":
        price_move = trade.exit_price - trade.entry_price
    else:
        price_move = trade.entry_price - trade.exit_price

    return price_move * trade.lot_size * STANDARD_LOT_UNITS
