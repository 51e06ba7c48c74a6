from typing import List

from fastapi import APIRouter, Depends

from fxwidget.core.config import Settings
from fxwidget.core.dependencies import get_app_settings, get_rate_table
from fxwidget.models.constants import currency_info, enabled_codes
from fxwidget.models.conversion import ConversionOut, ConvertIn, CurrencyOut
from fxwidget.services.conversion import convert
from fxwidget.services.rate_table import RateTable

router = APIRouter(tags=["convert"])


@router.get("/currencies", response_model=List[CurrencyOut], summary="Supported currencies")
async def list_currencies(settings: Settings = Depends(get_app_settings)):
    return [
        CurrencyOut.from_info(currency_info(code))
        for code in enabled_codes(settings.extended_currencies)
    ]


@router.post("/convert", response_model=ConversionOut, summary="Stateless conversion")
async def convert_amount(
    payload: ConvertIn, table: RateTable = Depends(get_rate_table)
):
    """Convert without touching the widget state or history.

    Invalid amounts and unknown codes surface as 422, a missing table entry
    as 503 (handled centrally in ``core.errors``).
    """
    result = convert(payload.amount, payload.from_currency, payload.to_currency, table)
    return ConversionOut.from_result(result)
