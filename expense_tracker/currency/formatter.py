"""
Amount Formatter

Renders a monetary amount in a currency as a single display string.

Two paths:
- INR uses Indian digit grouping (thousands, then lakhs and crores in
  pairs of digits): 1234567.89 -> "₹12,34,567.89"
- Every other currency is delegated to Babel's CLDR currency formatting
  for the descriptor's locale: 1234.56 USD/en-US -> "$1,234.56"

Rules shared by both paths:
- Rounding to 2 decimals happens exactly once, HALF_UP on the shortest
  decimal representation of the input (10.005 -> 10.01)
- A negative amount gets a leading "-"; anything that rounds to zero
  is non-negative
- Unknown currency codes or locales never crash: the amount is rendered
  as symbol + comma-grouped thousands + 2 decimals
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union

from babel import Locale, UnknownLocaleError
from babel.numbers import format_currency, is_currency

from expense_tracker.currency.registry import DEFAULT_CURRENCY
from expense_tracker.logs import get_logger
from expense_tracker.models.currency import CurrencyDescriptor

Amount = Union[int, float, Decimal]

CENT = Decimal("0.01")
INDIAN_GROUPING_CODE = "INR"

logger = get_logger(__name__)


def round_amount(amount: Amount) -> Decimal:
    """
    Round an amount to exactly two fractional digits.

    Floats go through str() first so the rounding sees the value the
    user typed (10.005), not its binary approximation (10.00499...).

    Raises:
        ValueError: If the amount is NaN or infinite
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if not value.is_finite():
        raise ValueError(f"Cannot format non-finite amount: {amount!r}")

    with localcontext() as ctx:
        # Enough precision for every integer digit plus the two cents
        ctx.prec = max(28, value.adjusted() + 4)
        rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)

    if rounded == 0:
        # Drop the sign of negative zero
        return Decimal("0.00")
    return rounded


def group_indian(digits: str) -> str:
    """
    Group an integer digit string the Indian way.

    The last 3 digits form one group; everything to the left is split
    into pairs, leaving a 1 or 2 digit remainder at the front.

    >>> group_indian("1234567")
    '12,34,567'
    """
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)
    return ",".join(groups)


def format_indian(rounded: Decimal, symbol: str) -> str:
    """Render an already-rounded amount with lakh/crore grouping."""
    integer_part, fraction_part = f"{rounded.copy_abs():f}".split(".")
    formatted = f"{symbol}{group_indian(integer_part)}.{fraction_part}"
    return f"-{formatted}" if rounded < 0 else formatted


def format_plain(rounded: Decimal, symbol: str) -> str:
    """Render symbol + comma-grouped thousands + 2 decimals."""
    formatted = f"{symbol}{rounded.copy_abs():,.2f}"
    return f"-{formatted}" if rounded < 0 else formatted


def _parse_locale(tag: str) -> Optional[Locale]:
    try:
        return Locale.parse(tag.replace("_", "-"), sep="-")
    except (ValueError, TypeError, UnknownLocaleError):
        return None


def format_generic(rounded: Decimal, currency: CurrencyDescriptor) -> str:
    """
    Render an already-rounded amount with the locale's currency pattern.

    Falls back to format_plain() when Babel does not know the currency
    code or the locale tag.
    """
    locale = _parse_locale(currency.locale) if is_currency(currency.code) else None
    if locale is None:
        logger.debug(
            "currency_format_fallback",
            code=currency.code,
            locale=currency.locale,
        )
        return format_plain(rounded, currency.symbol)

    return format_currency(
        rounded,
        currency.code,
        locale=locale,
        currency_digits=False,
    )


def format_amount(
    amount: Amount,
    currency: Optional[CurrencyDescriptor] = None,
) -> str:
    """
    Format an amount for display in the given currency.

    Args:
        amount: Finite signed amount
        currency: Currency to format in; None means US Dollar

    Returns:
        Single-line display string, e.g. "₹12,34,567.89" or "-$500.00"

    Raises:
        ValueError: If the amount is NaN or infinite
    """
    currency = currency or DEFAULT_CURRENCY
    rounded = round_amount(amount)

    if currency.code == INDIAN_GROUPING_CODE:
        return format_indian(rounded, currency.symbol)
    return format_generic(rounded, currency)
