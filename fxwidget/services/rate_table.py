from __future__ import annotations

"""Static exchange rate table.

Rates are keyed by the directed pair (from, to) and give units of ``to`` per
1 unit of ``from``. Both directions of every pair are tabulated on their own;
the hand-tuned reciprocals are not exact inverses (GBP-EUR x EUR-GBP != 1)
and are kept as quoted. Nothing is ever derived by inversion or chaining.
"""
import logging
import math
from itertools import permutations
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple

from fxwidget.core.errors import RateNotFound, RateTableError

logger = logging.getLogger("fxwidget.rates")

Pair = Tuple[str, str]

REFERENCE_RATES: Dict[Pair, float] = {
    ("JPY", "GBP"): 0.00487,
    ("JPY", "EUR"): 0.00553,
    ("GBP", "JPY"): 205.199,
    ("EUR", "JPY"): 180.699,
    ("GBP", "EUR"): 1.13557,
    ("EUR", "GBP"): 0.88044,
}

# KRW rows (estimates, Nov 2025)
EXTENDED_RATES: Dict[Pair, float] = {
    ("JPY", "KRW"): 9.35,
    ("KRW", "JPY"): 0.107,
    ("EUR", "KRW"): 1692.24,
    ("KRW", "EUR"): 0.00059,
    ("GBP", "KRW"): 1922.33,
    ("KRW", "GBP"): 0.00052,
}


class RateTable:
    """Immutable directed-pair rate lookup."""

    def __init__(self, rates: Mapping[Pair, float]):
        checked: Dict[Pair, float] = {}
        for (src, dst), rate in rates.items():
            src, dst = src.strip().upper(), dst.strip().upper()
            if src == dst:
                raise RateTableError(f"identity pair {src}-{dst} must not be stored")
            if (
                isinstance(rate, bool)
                or not isinstance(rate, (int, float))
                or not math.isfinite(rate)
                or rate <= 0
            ):
                raise RateTableError(f"rate for {src}-{dst} must be positive, got {rate!r}")
            checked[(src, dst)] = float(rate)
        self._rates = MappingProxyType(checked)
        self._currencies = frozenset(code for pair in checked for code in pair)

    @property
    def currencies(self) -> frozenset:
        return self._currencies

    def supports(self, code: str) -> bool:
        return code in self._currencies

    def lookup(self, from_code: str, to_code: str) -> float:
        from_code, to_code = from_code.upper(), to_code.upper()
        if from_code == to_code:
            return 1.0
        try:
            return self._rates[(from_code, to_code)]
        except KeyError:
            raise RateNotFound(from_code, to_code) from None

    def missing_pairs(self) -> List[Pair]:
        return [
            pair
            for pair in permutations(sorted(self._currencies), 2)
            if pair not in self._rates
        ]

    def check_complete(self) -> "RateTable":
        """Raise unless both directions of every distinct pair are present."""
        missing = self.missing_pairs()
        if missing:
            listed = ", ".join(f"{a}-{b}" for a, b in missing)
            raise RateTableError(f"rate table missing directed pairs: {listed}")
        return self

    def items(self) -> Iterator[Tuple[Pair, float]]:
        return iter(self._rates.items())

    def __contains__(self, pair: object) -> bool:
        return pair in self._rates

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"RateTable(currencies={sorted(self._currencies)}, pairs={len(self)})"


def build_rate_table(extended: bool = True) -> RateTable:
    rates = dict(REFERENCE_RATES)
    if extended:
        rates.update(EXTENDED_RATES)
    table = RateTable(rates).check_complete()
    logger.debug("rate table loaded: %r", table)
    return table
