from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from fxwidget.models.constants import CurrencyInfo, currency_symbol


def _upper_code(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip().upper()
    return v or None


class ConvertIn(BaseModel):
    amount: Union[str, float] = Field(..., description="Free-form positive amount")
    from_currency: str
    to_currency: str

    @field_validator("from_currency", "to_currency")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper()


class ConversionOut(BaseModel):
    amount: float
    from_currency: str
    to_currency: str
    value: float
    rate: float
    symbol: str

    @classmethod
    def from_result(cls, result) -> "ConversionOut":
        return cls(
            amount=result.source_amount,
            from_currency=result.from_code,
            to_currency=result.to_code,
            value=result.value,
            rate=result.rate,
            symbol=currency_symbol(result.to_code),
        )


class RateOut(BaseModel):
    from_currency: str
    to_currency: str
    rate: float = Field(..., gt=0)


class CurrencyOut(BaseModel):
    code: str
    name: str
    symbol: str
    flag: str

    @classmethod
    def from_info(cls, info: CurrencyInfo) -> "CurrencyOut":
        return cls(code=info.code, name=info.name, symbol=info.symbol, flag=info.flag)


class HistoryItemOut(BaseModel):
    seq: int
    time: str
    created_at: datetime
    source_amount: float
    from_currency: str
    target_amount: float
    to_currency: str
    rate: float

    @classmethod
    def from_record(cls, record, time_format: str) -> "HistoryItemOut":
        return cls(
            seq=record.seq,
            time=record.created_at.strftime(time_format),
            created_at=record.created_at,
            source_amount=record.source_amount,
            from_currency=record.source_code,
            target_amount=record.target_amount,
            to_currency=record.target_code,
            rate=record.rate,
        )


class WidgetConvertIn(BaseModel):
    amount: Optional[Union[str, float]] = Field(
        None, description="New amount input; omitted keeps the current one"
    )


class PairIn(BaseModel):
    from_currency: Optional[str] = None
    to_currency: Optional[str] = None

    @field_validator("from_currency", "to_currency")
    @classmethod
    def upper_code(cls, v: Optional[str]) -> Optional[str]:
        return _upper_code(v)


class WidgetStateOut(BaseModel):
    amount: str
    from_currency: str
    to_currency: str
    result: Optional[float] = None
    rate: Optional[float] = None
    symbol: str
    unavailable: bool = False
    error: Optional[str] = None
    history: List[HistoryItemOut] = []

    @classmethod
    def from_snapshot(cls, snapshot, time_format: str) -> "WidgetStateOut":
        state = snapshot.state
        return cls(
            amount=state.amount_text,
            from_currency=state.from_code,
            to_currency=state.to_code,
            result=state.result,
            rate=state.rate,
            symbol=currency_symbol(state.to_code),
            unavailable=state.unavailable,
            error=snapshot.error,
            history=[
                HistoryItemOut.from_record(r, time_format) for r in snapshot.history
            ],
        )
