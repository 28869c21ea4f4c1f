"""Decimal helpers for money amounts"""

from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext
from numbers import Number

from pocket_money.domain.exceptions import InvalidInputError

CENT = Decimal("0.01")

# Largest amount or multiplier accepted from callers. Documents store JSON numbers,
# and every value up to this bound survives the float round trip at cent precision.
MAX_AMOUNT = Decimal("1000000000000")


def to_decimal(value: object, name: str) -> Decimal:
    """
    Convert a numeric input to Decimal, rejecting anything that is not a finite number.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.

    Raises:
        InvalidInputError: For bools, non-numeric strings, NaN, infinity or
            a magnitude above MAX_AMOUNT
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (Number, str)):
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidInputError(f"{name} must be a number, got {value!r}") from e
    else:
        raise InvalidInputError(f"{name} must be a number, got {value!r}")

    if not result.is_finite():
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    if abs(result) > MAX_AMOUNT:
        raise InvalidInputError(f"{name} must not exceed {MAX_AMOUNT}, got {value!r}")
    return result


def to_money(value: object, name: str) -> Decimal:
    """
    Like to_decimal, but the amount must also be a whole number of cents.

    Raises:
        InvalidInputError: For anything to_decimal rejects, or more than two decimal places
    """
    amount = to_decimal(value, name)
    if amount != amount.quantize(CENT):
        raise InvalidInputError(f"{name} must have at most 2 decimal places, got {value!r}")
    return amount


def truncate_cents(amount: Decimal) -> Decimal:
    """Round toward zero at cent granularity: 158.9743 -> 158.97"""
    with localcontext() as ctx:
        # Room for every integer digit plus the two cents
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENT, rounding=ROUND_DOWN)
