from __future__ import annotations

"""Converter widget state and its transitions.

``WidgetState`` is an immutable value; every transition returns a new state
and never raises for user input. Invalid amounts leave the state untouched,
rate table gaps degrade to "conversion unavailable". ``WidgetSessionStore``
holds the current state plus the history log for the HTTP layer and applies
each transition as one locked step.
"""
import itertools
import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, NamedTuple, Optional, Tuple

from fxwidget.core.errors import InvalidAmount, RateNotFound
from fxwidget.services.conversion import (
    SupportsRateLookup,
    convert,
    normalize_code,
)
from fxwidget.services.history import ConversionRecord, HistoryLog

logger = logging.getLogger("fxwidget.widget")

INVALID_AMOUNT = "invalid_amount"
CONVERSION_UNAVAILABLE = "conversion_unavailable"


@dataclass(frozen=True)
class WidgetState:
    from_code: str
    to_code: str
    amount_text: str = ""
    result: Optional[float] = None
    rate: Optional[float] = None
    unavailable: bool = False

    @property
    def has_result(self) -> bool:
        return self.result is not None


class Transition(NamedTuple):
    state: WidgetState
    record: Optional[ConversionRecord] = None
    error: Optional[str] = None


def _invalidated(state: WidgetState, **changes) -> WidgetState:
    fields = {"result": None, "rate": None, "unavailable": False, **changes}
    return replace(state, **fields)


def set_amount(state: WidgetState, amount_text: str) -> WidgetState:
    return replace(state, amount_text=amount_text)


def select_pair(
    state: WidgetState,
    table: SupportsRateLookup,
    from_code: Optional[str] = None,
    to_code: Optional[str] = None,
) -> WidgetState:
    """Change either side of the pair; any shown result becomes stale."""
    new_from = normalize_code(from_code, table) if from_code else state.from_code
    new_to = normalize_code(to_code, table) if to_code else state.to_code
    return _invalidated(state, from_code=new_from, to_code=new_to)


def swap(state: WidgetState) -> WidgetState:
    return _invalidated(state, from_code=state.to_code, to_code=state.from_code)


def apply_conversion(
    state: WidgetState,
    table: SupportsRateLookup,
    *,
    seq: int,
    now: datetime,
) -> Transition:
    try:
        result = convert(state.amount_text, state.from_code, state.to_code, table)
    except InvalidAmount as exc:
        logger.info(
            "conversion skipped: %s",
            exc.reason,
            extra={"pair": f"{state.from_code}-{state.to_code}", "error_code": exc.code},
        )
        return Transition(state, error=INVALID_AMOUNT)
    except RateNotFound as exc:
        logger.error(
            "conversion unavailable: %s",
            exc,
            extra={"pair": f"{exc.from_code}-{exc.to_code}", "error_code": exc.code},
        )
        return Transition(
            _invalidated(state, unavailable=True), error=CONVERSION_UNAVAILABLE
        )
    logger.debug(
        "converted %s %s -> %s %s @ %s",
        result.source_amount,
        result.from_code,
        result.value,
        result.to_code,
        result.rate,
    )
    record = ConversionRecord.from_result(result, seq=seq, created_at=now)
    new_state = replace(state, result=result.value, rate=result.rate, unavailable=False)
    return Transition(new_state, record=record)


class WidgetSnapshot(NamedTuple):
    state: WidgetState
    history: Tuple[ConversionRecord, ...]
    error: Optional[str] = None


class WidgetSessionStore:
    """Process-lifetime holder for the widget state and history."""

    def __init__(
        self,
        table: SupportsRateLookup,
        from_code: str,
        to_code: str,
        history: Optional[HistoryLog] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._table = table
        self._state = WidgetState(
            from_code=normalize_code(from_code, table),
            to_code=normalize_code(to_code, table),
        )
        self._history = history if history is not None else HistoryLog()
        self._clock = clock
        self._seq = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def history(self) -> HistoryLog:
        return self._history

    def snapshot(self, error: Optional[str] = None) -> WidgetSnapshot:
        return WidgetSnapshot(self._state, self._history.items(), error)

    def set_amount(self, amount_text: str) -> WidgetSnapshot:
        with self._lock:
            self._state = set_amount(self._state, amount_text)
            return self.snapshot()

    def convert(self, amount_text: Optional[str] = None) -> WidgetSnapshot:
        with self._lock:
            state = self._state
            if amount_text is not None:
                state = set_amount(state, amount_text)
            transition = apply_conversion(
                state, self._table, seq=next(self._seq), now=self._clock()
            )
            if transition.record is not None:
                self._history.record(transition.record)
            self._state = transition.state
            return self.snapshot(transition.error)

    def select_pair(
        self, from_code: Optional[str] = None, to_code: Optional[str] = None
    ) -> WidgetSnapshot:
        with self._lock:
            self._state = select_pair(self._state, self._table, from_code, to_code)
            return self.snapshot()

    def swap(self) -> WidgetSnapshot:
        with self._lock:
            self._state = swap(self._state)
            return self.snapshot()

    def clear_history(self) -> WidgetSnapshot:
        with self._lock:
            self._history.clear()
            return self.snapshot()
