"""
Currency Descriptor Model

A descriptor identifies one supported currency: the code used to pick a
formatting path, the symbol shown next to amounts, a display name and the
locale tag whose conventions govern generic formatting.

DESIGN DECISION: Descriptors are frozen value objects.
Selecting a currency copies the descriptor by value into the session;
nothing ever mutates one after the registry builds it.
"""

from pydantic import BaseModel, ConfigDict, Field


class CurrencyDescriptor(BaseModel):
    """Immutable (code, symbol, name, locale) record for a currency."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str = Field(
        ...,
        min_length=1,
        max_length=8,
        description="ISO 4217-like currency code (dispatch key)"
    )
    symbol: str = Field(
        ...,
        min_length=1,
        max_length=8,
        description="Glyph(s) prefixed to formatted amounts"
    )
    name: str = Field(
        ...,
        description="Human-readable currency name"
    )
    locale: str = Field(
        ...,
        min_length=1,
        description="Locale tag for generic formatting (e.g. 'en-US')"
    )

    def to_storage_dict(self) -> dict[str, str]:
        """Convert to the plain dict persisted under 'selectedCurrency'."""
        return {
            "code": self.code,
            "symbol": self.symbol,
            "name": self.name,
            "locale": self.locale,
        }
