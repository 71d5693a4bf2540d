"""Input validators shared by the wallet, bet selector and spin controller."""
from typing import Sequence

from reelspin.errors import InvalidAmount, InvalidDenomination, InvalidGeometry


def _is_int(value: object) -> bool:
    # bool is an int subclass; 4.0 and "4" are not accepted either
    return isinstance(value, int) and not isinstance(value, bool)


def validate_amount(amount: object) -> int:
    """
    Validate a debit/credit amount.

    Raises INVALID_AMOUNT unless amount is a positive int (bool excluded).
    """
    if not _is_int(amount) or amount <= 0:  # type: ignore[operator]
        raise InvalidAmount(amount)
    return amount  # type: ignore[return-value]


def validate_denomination(amount: object, allowed: Sequence[int]) -> int:
    """
    Validate a bet amount.

    Raises INVALID_DENOMINATION if amount is not an int in allowed.
    """
    if not _is_int(amount) or amount not in allowed:
        raise InvalidDenomination(amount, list(allowed))
    return allowed.index(amount)  # type: ignore[arg-type]


def validate_geometry(dimension: str, value: object, allowed: Sequence[int]) -> int:
    """
    Validate a column/row count.

    Raises INVALID_GEOMETRY if value is not an int in allowed.
    """
    if not _is_int(value) or value not in allowed:
        raise InvalidGeometry(dimension, value, list(allowed))
    return value  # type: ignore[return-value]
