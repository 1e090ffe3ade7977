"""Display formatting and rounding for numeric quantities."""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# Wide enough for any finite float at the precisions used here.
_ROUNDING_CONTEXT = Context(prec=400)


def round_half_up(value: float, places: int) -> Decimal:
    """
    Round a float to a fixed number of decimal places, ties away from zero.

    Rounding works on the exact binary value of the float, so 0.125 is a true
    tie (0.13 at two places) while 1.005, stored just below 1.005, gives 1.00.
    """
    return Decimal(value).quantize(
        Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT
    )


def round_quantity(value: float, places: int = 3) -> float:
    """Round a stored quantity to ``places`` decimals."""
    return float(round_half_up(value, places))


def format_quantity(quantity: float, unit: str) -> str:
    """Render a quantity for display: whole numbers bare, others with 2 decimals."""
    if not math.isfinite(quantity):
        text = str(quantity)
    elif quantity == int(quantity):
        text = str(int(quantity))
    else:
        text = str(round_half_up(quantity, 2))
    return f"{text} {unit}".strip()
