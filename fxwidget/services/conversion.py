from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Union

from fxwidget.core.errors import InvalidAmount, UnsupportedCurrency
from fxwidget.services.money import round_for_currency

"""Amount parsing and conversion.

Responsibilities:
    - Turn free-form amount input into a positive finite float.
    - Look up the directed rate (identity pairs never touch the table).
    - Apply the target currency's rounding exactly once, here.
    - Return an immutable result carrying the exact rate applied.
"""


class SupportsRateLookup(Protocol):
    def supports(self, code: str) -> bool: ...

    def lookup(self, from_code: str, to_code: str) -> float: ...


@dataclass(frozen=True)
class ConversionResult:
    source_amount: float
    from_code: str
    to_code: str
    rate: float
    value: float


def parse_amount(raw: Union[str, float, int, None]) -> float:
    if raw is None or isinstance(raw, bool):
        raise InvalidAmount(raw, "amount is required")
    if isinstance(raw, (int, float)):
        amount = float(raw)
    else:
        text = str(raw).strip().replace(",", "").replace("_", "")
        if not text:
            raise InvalidAmount(raw, "amount is required")
        try:
            amount = float(text)
        except ValueError:
            raise InvalidAmount(raw, "amount is not a number") from None
    if not math.isfinite(amount):
        raise InvalidAmount(raw, "amount must be finite")
    if amount <= 0:
        raise InvalidAmount(raw, "amount must be greater than zero")
    return amount


def normalize_code(code: str, table: SupportsRateLookup) -> str:
    normalized = str(code).strip().upper()
    if not table.supports(normalized):
        raise UnsupportedCurrency(code)
    return normalized


def convert(
    amount: Union[str, float, int],
    from_code: str,
    to_code: str,
    table: SupportsRateLookup,
) -> ConversionResult:
    """Convert ``amount`` from one currency to another.

    Raises InvalidAmount for non-numeric / non-positive input, UnsupportedCurrency
    for codes outside the table and RateNotFound when the directed pair is absent.
    """
    value = parse_amount(amount)
    from_code = normalize_code(from_code, table)
    to_code = normalize_code(to_code, table)
    if from_code == to_code:
        rate = 1.0
        raw = value
    else:
        rate = table.lookup(from_code, to_code)
        raw = value * rate
    return ConversionResult(
        source_amount=value,
        from_code=from_code,
        to_code=to_code,
        rate=rate,
        value=round_for_currency(raw, to_code),
    )
