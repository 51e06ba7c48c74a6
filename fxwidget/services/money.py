"""Money / rounding helpers.

Centralized so the converter, the API and the widget page use identical
rounding and display semantics.
"""

from __future__ import annotations
import math

from fxwidget.models.constants import decimal_places


def round_to(value: float, places: int) -> float:
    """Round half away from zero: scale by 10**places, round, scale back."""
    scale = 10**places
    rounded = math.floor(abs(value) * scale + 0.5) / scale
    return math.copysign(rounded, value)


def round_for_currency(value: float, currency: str) -> float:
    return round_to(value, decimal_places(currency))


def format_amount(value: float, places: int = 8) -> str:
    """Thousands-separated display string without trailing zeros."""
    text = f"{value:,.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
