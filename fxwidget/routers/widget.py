from typing import List

from fastapi import APIRouter, Depends

from fxwidget.core.config import Settings
from fxwidget.core.dependencies import get_app_settings, get_widget_store
from fxwidget.models.conversion import (
    HistoryItemOut,
    PairIn,
    WidgetConvertIn,
    WidgetStateOut,
)
from fxwidget.services.widget_state import WidgetSessionStore

router = APIRouter(prefix="/widget", tags=["widget"])


@router.get("", response_model=WidgetStateOut, summary="Current widget state")
async def get_state(
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    return WidgetStateOut.from_snapshot(store.snapshot(), settings.history_time_format)


@router.post("/convert", response_model=WidgetStateOut, summary="Convert and record")
async def convert(
    payload: WidgetConvertIn,
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    """Run a conversion against the widget state.

    Always answers 200: an invalid amount returns the untouched state with
    ``error="invalid_amount"``, a rate table gap returns it with
    ``unavailable=true``.
    """
    amount = None if payload.amount is None else str(payload.amount)
    snapshot = store.convert(amount)
    return WidgetStateOut.from_snapshot(snapshot, settings.history_time_format)


@router.post("/pair", response_model=WidgetStateOut, summary="Select currency pair")
async def select_pair(
    payload: PairIn,
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    snapshot = store.select_pair(payload.from_currency, payload.to_currency)
    return WidgetStateOut.from_snapshot(snapshot, settings.history_time_format)


@router.post("/swap", response_model=WidgetStateOut, summary="Swap from/to")
async def swap(
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    snapshot = store.swap()
    return WidgetStateOut.from_snapshot(snapshot, settings.history_time_format)


@router.get("/history", response_model=List[HistoryItemOut], summary="Recent conversions")
async def list_history(
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    return [
        HistoryItemOut.from_record(r, settings.history_time_format)
        for r in store.history.items()
    ]


@router.delete("/history", response_model=WidgetStateOut, summary="Clear history")
async def clear_history(
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    snapshot = store.clear_history()
    return WidgetStateOut.from_snapshot(snapshot, settings.history_time_format)
