"""Recent conversion history (newest first, bounded)."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Tuple

from fxwidget.models.constants import HISTORY_LIMIT
from fxwidget.services.conversion import ConversionResult


@dataclass(frozen=True)
class ConversionRecord:
    seq: int
    created_at: datetime
    source_amount: float
    source_code: str
    target_amount: float
    target_code: str
    rate: float

    @classmethod
    def from_result(
        cls, result: ConversionResult, *, seq: int, created_at: datetime
    ) -> "ConversionRecord":
        return cls(
            seq=seq,
            created_at=created_at,
            source_amount=result.source_amount,
            source_code=result.from_code,
            target_amount=result.value,
            target_code=result.to_code,
            rate=result.rate,
        )


class HistoryLog:
    """Bounded newest-first log.

    ``record`` prepends and truncates under a lock so the cap holds with
    concurrent writers.
    """

    def __init__(self, limit: int = HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self._limit = limit
        self._items: Tuple[ConversionRecord, ...] = ()
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    def record(self, entry: ConversionRecord) -> None:
        with self._lock:
            self._items = (entry,) + self._items[: self._limit - 1]

    def clear(self) -> None:
        with self._lock:
            self._items = ()

    def items(self) -> Tuple[ConversionRecord, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ConversionRecord]:
        return iter(self._items)
