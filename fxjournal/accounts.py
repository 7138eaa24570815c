"""Account details maintenance."""

import math
from typing import Optional

from fxjournal.errors import ValidationError
from fxjournal.models import AccountSnapshot

REQUIRED_ACCOUNT_FIELDS = ("account_number", "broker")
AMOUNT_FIELDS = ("balance", "equity", "margin_level", "profit_loss")


def update_account(current: Optional[AccountSnapshot], **changes) -> AccountSnapshot:
    """Apply changes to the stored account details.

    Fields passed as None are left as they are.

    Raises:
        ValidationError: If account number or broker would be missing, or an
            amount is not a finite number.
    """
    base = current.model_dump() if current else {}
    base.update({key: value for key, value in changes.items() if value is not None})
    account = AccountSnapshot.model_validate(base)

    invalid = [
        name for name in AMOUNT_FIELDS
        if getattr(account, name) is not None and not math.isfinite(getattr(account, name))
    ]
    if invalid:
        raise ValidationError(invalid, "Amounts must be valid numbers: " + ", ".join(invalid))

    missing = [name for name in REQUIRED_ACCOUNT_FIELDS if getattr(account, name) is None]
    if missing:
        raise ValidationError(
            missing, "Account number and broker are required: " + ", ".join(missing)
        )
    return account
