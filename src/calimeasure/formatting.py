"""
Fixed two-fractional-digit rendering of measurement values.

Pure functions - the number format is passed in, never read from globals
unless the caller asks for the active locale by passing None.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from .types import NumberFormat

FRACTIONAL_DIGITS = 2

_QUANTUM = Decimal(1).scaleb(-FRACTIONAL_DIGITS)
# Wide enough for the integer part of any finite float
_CONTEXT = Context(prec=400)


def _group_digits(digits: str, separator: str) -> str:
    """Insert separator every three digits from the right."""
    if not separator or len(digits) <= 3:
        return digits

    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[i : i + 3] for i in range(head, len(digits), 3))
    return separator.join(groups)


def format_value(value: float, number_format: NumberFormat | None = None) -> str:
    """
    Render a value with exactly two fractional digits.

    Rounds half away from zero on the shortest decimal representation,
    so 2.675 gives "2.68" and -0.125 gives "-0.13".

    Args:
        value: Number to render (numpy scalars are accepted)
        number_format: Separators to use; None reads the active locale now

    Returns:
        Display string such as "12.34" or "1.234,50"
    """
    if number_format is None:
        number_format = NumberFormat.current()

    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    rounded = Decimal(repr(value)).quantize(
        _QUANTUM, rounding=ROUND_HALF_UP, context=_CONTEXT
    )
    sign = "-" if rounded < 0 else ""
    integer, fraction = f"{rounded.copy_abs():f}".split(".")

    integer = _group_digits(integer, number_format.thousands_separator)
    return f"{sign}{integer}{number_format.decimal_separator}{fraction}"


def parse_value(text: str, number_format: NumberFormat) -> float:
    """
    Parse a display string produced by format_value back into a float.
    """
    if text in ("NaN", "Infinity", "-Infinity"):
        return float(text.replace("Infinity", "inf"))

    if number_format.thousands_separator:
        text = text.replace(number_format.thousands_separator, "")
    return float(text.replace(number_format.decimal_separator, "."))
