"""Currency codes, display metadata and the rounding policy.

The currency set is closed: adding a code means adding its display row, its
rounding precision and both directions of every pair in the reference table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from fxwidget.core.errors import UnsupportedCurrency


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    name: str
    symbol: str
    flag: str


# Display order for selectors
CURRENCIES: Tuple[CurrencyInfo, ...] = (
    CurrencyInfo("JPY", "Japanese Yen", "¥", "🇯🇵"),
    CurrencyInfo("KRW", "South Korean Won", "₩", "🇰🇷"),
    CurrencyInfo("EUR", "Euro", "€", "🇪🇺"),
    CurrencyInfo("GBP", "Pound Sterling", "£", "🇬🇧"),
)

BASE_CURRENCIES = frozenset({"JPY", "EUR", "GBP"})
EXTENDED_CURRENCIES = frozenset({"KRW"})

# Currencies quoted near-integer keep 2 places, everything else 4.
DECIMAL_PLACES: Dict[str, int] = {
    "JPY": 2,
    "KRW": 2,
    "EUR": 4,
    "GBP": 4,
}
DEFAULT_DECIMAL_PLACES = 4

HISTORY_LIMIT = 10

_BY_CODE: Dict[str, CurrencyInfo] = {c.code: c for c in CURRENCIES}


def enabled_codes(extended: bool = True) -> Tuple[str, ...]:
    allowed = BASE_CURRENCIES | EXTENDED_CURRENCIES if extended else BASE_CURRENCIES
    return tuple(c.code for c in CURRENCIES if c.code in allowed)


def currency_info(code: str) -> CurrencyInfo:
    info = _BY_CODE.get(str(code).strip().upper())
    if info is None:
        raise UnsupportedCurrency(code)
    return info


def currency_symbol(code: str) -> str:
    return currency_info(code).symbol


def decimal_places(code: str) -> int:
    return DECIMAL_PLACES.get(code.upper(), DEFAULT_DECIMAL_PLACES)
