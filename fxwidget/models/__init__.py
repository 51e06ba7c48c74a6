"""Pydantic I/O models and currency constants for the converter widget."""

from .constants import (
    CURRENCIES,
    DECIMAL_PLACES,
    HISTORY_LIMIT,
    CurrencyInfo,
)  # re-export
from .conversion import (
    ConvertIn,
    ConversionOut,
    CurrencyOut,
    HistoryItemOut,
    PairIn,
    RateOut,
    WidgetConvertIn,
    WidgetStateOut,
)

__all__ = [
    "CURRENCIES",
    "DECIMAL_PLACES",
    "HISTORY_LIMIT",
    "CurrencyInfo",
    "ConvertIn",
    "ConversionOut",
    "CurrencyOut",
    "HistoryItemOut",
    "PairIn",
    "RateOut",
    "WidgetConvertIn",
    "WidgetStateOut",
]
