"""
Amount Parser

Turns free text typed into an amount field back into a number.

DESIGN DECISION: Parsing is lenient on purpose.
Anything that cannot be read as a number becomes 0 instead of raising,
so a half-typed form field never blocks the user. Callers that need
strict validation must check the input themselves.

Commas are always treated as grouping separators. Text in a comma-decimal
locale is misread: "5,00 €" (de-DE) parses as 500.0, a hundredfold error.
"""

import math
import re

from expense_tracker.currency.registry import supported_symbols

# Glyphs stripped in addition to the registry symbols
# (￥ is the full-width yen sign some locales render)
_EXTRA_SYMBOLS = ("₹", "$", "€", "£", "¥", "￥")

_STRIP_PATTERN = re.compile(
    "|".join(
        re.escape(symbol)
        for symbol in sorted(
            set(supported_symbols()) | set(_EXTRA_SYMBOLS), key=len, reverse=True
        )
    )
    + r"|[,\s]"
)

# Leading decimal number: optional sign, digits with optional fraction
# (or a bare fraction), optional exponent
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(text: str) -> float:
    """
    Parse a typed or formatted amount.

    >>> parse_amount("₹12,34,567.89")
    1234567.89
    >>> parse_amount("-$500.00")
    -500.0
    >>> parse_amount("abc")
    0.0
    """
    if not isinstance(text, str):
        return 0.0

    cleaned = _STRIP_PATTERN.sub("", text)
    match = _NUMBER_PREFIX.match(cleaned)
    if match is None:
        return 0.0

    value = float(match.group(0))
    if not math.isfinite(value) or value == 0:
        return 0.0
    return value
