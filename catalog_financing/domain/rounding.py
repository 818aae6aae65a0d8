"""Rounding and currency formatting rules for quoted amounts"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

INSTALLMENT_ROUNDING_THRESHOLD = 50
INSTALLMENT_ROUNDING_STEP = 100
DOWN_PAYMENT_ROUNDING_STEP = 50

_CENTS = Decimal("0.01")
_UNIT = Decimal("1")


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def _round_cents(amount: float) -> float:
    return float(_to_decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP))


def round_installment(amount: float) -> float:
    """
    Round a monthly installment for display.

    - amount >= 50: nearest multiple of 100, halves go up (150 -> 200, 149 -> 100)
    - amount < 50: cents, half-up (13.333 -> 13.33)

    Surcharge and final price are never passed through here; they keep full precision.
    """
    if amount >= INSTALLMENT_ROUNDING_THRESHOLD:
        hundreds = (_to_decimal(amount) / INSTALLMENT_ROUNDING_STEP).quantize(_UNIT, rounding=ROUND_HALF_UP)
        return float(hundreds * INSTALLMENT_ROUNDING_STEP)
    return _round_cents(amount)


def round_down_payment(amount: float) -> float:
    """
    Round a minimum down payment.

    - amount >= 50: ceiling to the next multiple of 50 (120 -> 150, 150 -> 150)
    - amount < 50: cents, half-up
    """
    if amount >= INSTALLMENT_ROUNDING_THRESHOLD:
        return float(math.ceil(amount / DOWN_PAYMENT_ROUNDING_STEP) * DOWN_PAYMENT_ROUNDING_STEP)
    return _round_cents(amount)


def format_currency(amount: float, decimals: int = 0) -> str:
    """
    Format an amount es-AR style for display.

    - Thousands with dot: 36.700
    - Decimals with comma: 1.234,56
    """
    q = _UNIT if decimals == 0 else Decimal("1." + ("0" * decimals))
    v = _to_decimal(amount).quantize(q, rounding=ROUND_HALF_UP)

    # Python: 1,234.56 (thousands comma, decimal point)
    s = f"{v:,.{decimals}f}"
    return s.replace(",", "X").replace(".", ",").replace("X", ".")
