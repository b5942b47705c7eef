"""Bounds on money amounts before they are written as SQLite REALs."""

from decimal import Decimal, InvalidOperation

from errors import ValidationError

MAX_AMOUNT = Decimal("1000000000000")


def storable_amount(amount) -> float:
    """Check a positive, finite, bounded amount and convert it for storage.

    Raises:
        ValidationError: If the amount is not a number in (0, MAX_AMOUNT].
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValidationError(
            f"amount {amount!r} is not a number", code="invalid_amount"
        ) from e

    if not value.is_finite() or value <= 0 or value > MAX_AMOUNT:
        raise ValidationError(
            f"amount must be greater than 0 and at most {MAX_AMOUNT}",
            code="invalid_amount",
        )
    return float(value)
