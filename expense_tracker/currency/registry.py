"""
Currency Registry

The fixed, ordered catalog of currencies the tracker supports.

DESIGN DECISION: The registry is a compiled-in constant table.
There are no mutation operations. Insertion order is the order the
currencies are offered to the user, so it is part of the contract.
"""

from types import MappingProxyType

from expense_tracker.models.currency import CurrencyDescriptor


class CurrencyNotFoundError(LookupError):
    """No registry entry matches the requested currency code."""

    def __init__(self, code: str):
        super().__init__(f"Unsupported currency code: {code!r}")
        self.code = code


_CURRENCIES: tuple[CurrencyDescriptor, ...] = (
    CurrencyDescriptor(code="INR", symbol="₹", name="Indian Rupee", locale="en-IN"),
    CurrencyDescriptor(code="USD", symbol="$", name="US Dollar", locale="en-US"),
    CurrencyDescriptor(code="EUR", symbol="€", name="Euro", locale="de-DE"),
    CurrencyDescriptor(code="GBP", symbol="£", name="British Pound", locale="en-GB"),
    CurrencyDescriptor(code="JPY", symbol="¥", name="Japanese Yen", locale="ja-JP"),
    CurrencyDescriptor(code="AUD", symbol="A$", name="Australian Dollar", locale="en-AU"),
    CurrencyDescriptor(code="CAD", symbol="C$", name="Canadian Dollar", locale="en-CA"),
    CurrencyDescriptor(code="SGD", symbol="S$", name="Singapore Dollar", locale="en-SG"),
)

_BY_CODE = MappingProxyType({currency.code: currency for currency in _CURRENCIES})

if len(_BY_CODE) != len(_CURRENCIES):
    raise RuntimeError("Currency registry contains duplicate codes")

# Substituted whenever a caller formats without a currency.
DEFAULT_CURRENCY: CurrencyDescriptor = _BY_CODE["USD"]


def list_currencies() -> tuple[CurrencyDescriptor, ...]:
    """Return every supported currency in display order."""
    return _CURRENCIES


def find_currency(code: str) -> CurrencyDescriptor:
    """
    Look up a currency by its exact, case-sensitive code.

    Raises:
        CurrencyNotFoundError: If no registry entry has this code
    """
    try:
        return _BY_CODE[code]
    except (KeyError, TypeError):
        raise CurrencyNotFoundError(code) from None


def supported_symbols() -> tuple[str, ...]:
    """Symbols of all registered currencies, longest first."""
    return tuple(sorted({c.symbol for c in _CURRENCIES}, key=len, reverse=True))
