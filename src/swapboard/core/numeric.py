from __future__ import annotations

import re
from decimal import Context, Decimal, InvalidOperation

from swapboard.core.errors import InvalidNumericFormat


# sign, digits, at most one decimal point; no exponents, no NaN/Infinity
_DECIMAL_LITERAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$")

# wide enough that summing 18-decimal token amounts never rounds
EXACT_PRECISION = 96


def parse_decimal(text: object) -> Decimal:
    if not isinstance(text, str):
        raise InvalidNumericFormat(text)

    s = text.strip()
    if not _DECIMAL_LITERAL.match(s):
        raise InvalidNumericFormat(text)

    try:
        return Decimal(s)
    except InvalidOperation as e:
        raise InvalidNumericFormat(text) from e


def exact_context() -> Context:
    return Context(prec=EXACT_PRECISION)


def format_decimal(x: Decimal) -> str:
    # plain notation, keeps every digit (no exponent)
    return format(x, "f")
