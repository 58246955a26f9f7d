"""Currency -- ISO 4217 registry with minor-unit precision and display symbols."""

from dataclasses import dataclass
from typing import ClassVar

from settle_kernel.exceptions import InvalidCurrencyError

DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class CurrencyInfo:
    """Information about a single ISO 4217 currency."""

    code: str
    decimal_places: int
    name: str
    symbol: str

    @property
    def minor_units_per_major(self) -> int:
        """Number of minor units in one major unit (100 paisa per rupee)."""
        return 10 ** self.decimal_places


class CurrencyRegistry:
    """Registry of ISO 4217 currencies used for minor-unit formatting."""

    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = {
        "INR": CurrencyInfo("INR", 2, "Indian Rupee", "₹"),
        "USD": CurrencyInfo("USD", 2, "US Dollar", "$"),
        "EUR": CurrencyInfo("EUR", 2, "Euro", "€"),
        "GBP": CurrencyInfo("GBP", 2, "Pound Sterling", "£"),
        "CAD": CurrencyInfo("CAD", 2, "Canadian Dollar", "CA$"),
        "AUD": CurrencyInfo("AUD", 2, "Australian Dollar", "A$"),
        "SGD": CurrencyInfo("SGD", 2, "Singapore Dollar", "S$"),
        "AED": CurrencyInfo("AED", 2, "UAE Dirham", "AED "),
        "CHF": CurrencyInfo("CHF", 2, "Swiss Franc", "CHF "),
        # Zero decimal currencies
        "JPY": CurrencyInfo("JPY", 0, "Japanese Yen", "¥"),
        "KRW": CurrencyInfo("KRW", 0, "South Korean Won", "₩"),
        "VND": CurrencyInfo("VND", 0, "Vietnamese Dong", "₫"),
        # Three decimal currencies
        "BHD": CurrencyInfo("BHD", 3, "Bahraini Dinar", "BD "),
        "KWD": CurrencyInfo("KWD", 3, "Kuwaiti Dinar", "KD "),
        "OMR": CurrencyInfo("OMR", 3, "Omani Rial", "OMR "),
    }

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check whether a code is registered."""
        return code.upper().strip() in cls._CURRENCIES

    @classmethod
    def get_info(cls, code: str) -> CurrencyInfo | None:
        """Return info for a code, or None when unregistered."""
        return cls._CURRENCIES.get(code.upper().strip())

    @classmethod
    def require(cls, code: str) -> CurrencyInfo:
        """Return info for a code, raising InvalidCurrencyError when unregistered."""
        info = cls.get_info(code)
        if info is None:
            raise InvalidCurrencyError(code)
        return info

    @classmethod
    def get_decimal_places(cls, code: str) -> int:
        return cls.require(code).decimal_places

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        return frozenset(cls._CURRENCIES)
