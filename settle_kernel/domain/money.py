"""
Money -- minor-unit integer arithmetic helpers.

Responsibility:
    Every monetary amount in the settle kernel is a plain ``int`` counted in
    the currency's minor unit (paisa for INR). This module holds the one
    rounding rule used by ratio-based splits and the display helpers that
    turn minor units into strings and back.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends only on ``settle_kernel.domain.currency``.

Invariants enforced:
    - Ratio arithmetic is done in ``Decimal`` at high precision, never float.
    - ``round_half_up`` is the single rounding rule: ties go away from zero
      (``ROUND_HALF_UP``), so 2.5 -> 3 and 0.5 -> 1 for non-negative input.

Failure modes:
    - InvalidCurrencyError from ``format_minor`` / ``parse_minor`` for
      unregistered currency codes.
    - ZeroDivisionError from ``round_half_up`` when ``denominator`` is 0;
      callers check their totals first.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from settle_kernel.domain.currency import DEFAULT_CURRENCY, CurrencyRegistry

_UNIT = Decimal("1")
_PRECISION = 60
_NON_NUMERIC = re.compile(r"[^\d.]")


def to_decimal(value: Decimal | int | str | float) -> Decimal:
    """
    Convert a weight (percentage, ratio) to Decimal.

    Floats go through ``str`` so ``33.33`` becomes ``Decimal("33.33")``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_half_up(
    numerator: Decimal | int,
    denominator: Decimal | int = 1,
    multiplier: Decimal | int = 1,
) -> int:
    """
    Compute ``numerator * multiplier / denominator`` and round to the
    nearest integer, ties away from zero.

    The multiplication happens inside the high-precision context, so large
    totals are not truncated before the tie is decided.

    Preconditions:
        - ``denominator`` is non-zero.
    Postconditions:
        - Returns an ``int``; ``round_half_up(5, 2) == 3``,
          ``round_half_up(Decimal("333.3")) == 333``,
          ``round_half_up(1000, 100, Decimal("33.33")) == 333``.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        quotient = Decimal(numerator) * Decimal(multiplier) / Decimal(denominator)
        return int(quotient.quantize(_UNIT, rounding=ROUND_HALF_UP))


def format_minor(amount: int, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format a minor-unit amount for display.

    ``format_minor(10050) == "₹100.50"``; negative amounts keep a leading
    minus before the symbol.
    """
    info = CurrencyRegistry.require(currency)
    return _format(amount, info.symbol, info.decimal_places)


def format_label(amount: int, label: str) -> str:
    """
    Format with a registered currency when ``label`` is a known code,
    otherwise prefix the raw label and assume two decimal places.
    """
    info = CurrencyRegistry.get_info(label)
    if info is None:
        return _format(amount, f"{label} " if label else "", 2)
    return _format(amount, info.symbol, info.decimal_places)


def format_with_sign(amount: int, currency: str = DEFAULT_CURRENCY) -> str:
    """Positive = owed to you (``+``), negative = you owe (``-``)."""
    formatted = format_minor(abs(amount), currency)
    if amount > 0:
        return f"+{formatted}"
    if amount < 0:
        return f"-{formatted}"
    return formatted


def parse_minor(text: str, currency: str = DEFAULT_CURRENCY) -> int:
    """
    Parse a display string into minor units.

    Everything except digits and the decimal point is stripped, so
    ``"₹1,234.50"`` parses to ``123450``. Unparsable input yields 0.
    """
    info = CurrencyRegistry.require(currency)
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        major = Decimal(cleaned)
    except InvalidOperation:
        return 0
    return round_half_up(major, multiplier=info.minor_units_per_major)


def _format(amount: int, symbol: str, decimal_places: int) -> str:
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), 10 ** decimal_places)
    body = f"{whole:,}"
    if decimal_places:
        body = f"{body}.{frac:0{decimal_places}d}"
    return f"{sign}{symbol}{body}"
