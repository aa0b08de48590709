"""
Conversion between display amounts and ledger base units.

The ledger expresses every value as an integer count of base units.
One display unit equals 10**18 base units. Conversion uses Decimal
arithmetic so that it is exact in both directions.
"""

from decimal import Decimal, InvalidOperation, localcontext

from sharetrade.domain.trading.errors import InvalidAmountError

BASE_UNIT_DECIMALS = 18
BASE_UNITS_PER_DISPLAY_UNIT = 10**BASE_UNIT_DECIMALS

# Enough digits for any uint256 value
_PRECISION = 80


def to_base_units(amount: str | int | Decimal) -> int:
    """Convert a human-entered display amount to base units.

    Args:
        amount: Decimal string, int or Decimal, e.g. "1.5".

    Returns:
        The exact base-unit integer.

    Raises:
        InvalidAmountError: If the amount is not a finite non-negative
            number or carries more than 18 fractional digits.
    """
    if isinstance(amount, (bool, float)):
        # floats would silently lose precision
        raise InvalidAmountError(amount)
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidAmountError(amount) from None

    if not value.is_finite() or value < 0:
        raise InvalidAmountError(amount)

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = value.scaleb(BASE_UNIT_DECIMALS)
        if scaled != scaled.to_integral_value():
            raise InvalidAmountError(amount)
        return int(scaled)


def from_base_units(value: int) -> str:
    """Convert base units back to a normalised display string ("2", "1.5")."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        display = Decimal(value).scaleb(-BASE_UNIT_DECIMALS)
    text = format(display, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
