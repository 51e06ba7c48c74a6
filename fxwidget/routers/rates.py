from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from fxwidget.core.dependencies import get_rate_table
from fxwidget.models.conversion import RateOut
from fxwidget.services.conversion import normalize_code
from fxwidget.services.rate_table import RateTable

"""Rates router exposing the static table read-only.

Endpoints:
    - GET /rates                 -> every directed pair in the table
    - GET /rates/{from}/{to}     -> single lookup (identity pairs give 1.0)

The table is fixed for the process lifetime; there is no write API.
"""

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("", response_model=List[RateOut], summary="List all directed rates")
async def list_rates(table: RateTable = Depends(get_rate_table)):
    return [
        RateOut(from_currency=src, to_currency=dst, rate=rate)
        for (src, dst), rate in table.items()
    ]


@router.get(
    "/{from_currency}/{to_currency}",
    response_model=RateOut,
    summary="Look up one directed rate",
)
async def get_rate(
    from_currency: str,
    to_currency: str,
    table: RateTable = Depends(get_rate_table),
):
    src = normalize_code(from_currency, table)
    dst = normalize_code(to_currency, table)
    return RateOut(from_currency=src, to_currency=dst, rate=table.lookup(src, dst))
