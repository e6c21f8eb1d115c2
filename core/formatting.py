# core/formatting.py
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

# keeps quantize inside the decimal context for any finite float
MAX_PRECISION = 12


def format_number(value: float, precision: int = 2) -> str:
    """
    Fixed-precision text with trailing zeros and a dangling '.' removed.

        12.0   -> "12"
        12.5   -> "12.5"
        12.345 -> "12.35"

    Rounding is half-up on the shortest repr of the float, so 12.345 is
    treated as written rather than as 12.3449999...
    """
    if not math.isfinite(value):
        return str(value)

    with localcontext() as ctx:
        # enough digits for the full float range at any sane precision
        ctx.prec = 400
        quant = Decimal(1).scaleb(-precision)
        txt = f"{Decimal(repr(value)).quantize(quant, rounding=ROUND_HALF_UP):f}"

    if "." in txt:
        txt = txt.rstrip("0").rstrip(".")
    if txt in ("-0", ""):
        txt = "0"
    return txt


def format_result(value: float, unit: str, precision: int = 2) -> str:
    return f"{format_number(value, precision)} {unit}"
