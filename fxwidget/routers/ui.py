from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from fxwidget.core.config import Settings
from fxwidget.core.dependencies import get_app_settings, get_widget_store
from fxwidget.models.constants import currency_info, decimal_places, enabled_codes
from fxwidget.services.money import format_amount
from fxwidget.services.widget_state import WidgetSessionStore, WidgetSnapshot

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def _widget_context(snapshot: WidgetSnapshot, settings: Settings) -> Dict[str, Any]:
    state = snapshot.state
    to_info = currency_info(state.to_code)
    history = [
        {
            "seq": r.seq,
            "time": r.created_at.strftime(settings.history_time_format),
            "source": format_amount(r.source_amount),
            "from": r.source_code,
            "target": format_amount(r.target_amount, decimal_places(r.target_code)),
            "to": r.target_code,
            "rate": r.rate,
        }
        for r in snapshot.history
    ]
    return {
        "version": settings.version,
        "app_name": settings.app_name,
        "currencies": [currency_info(c) for c in enabled_codes(settings.extended_currencies)],
        "state": state,
        "to_symbol": to_info.symbol,
        "result_text": (
            format_amount(state.result, decimal_places(state.to_code))
            if state.has_result
            else None
        ),
        "history": history,
        "error": snapshot.error,
    }


def _back_to_widget() -> RedirectResponse:
    return RedirectResponse(url="/ui", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/ui", response_class=HTMLResponse)
async def ui_widget(
    request: Request,
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    context = _widget_context(store.snapshot(), settings)
    return templates.TemplateResponse(request, "widget.html", context)


@router.post("/ui/convert", response_class=HTMLResponse)
async def ui_convert(
    request: Request,
    amount: str = Form(""),
    from_currency: Optional[str] = Form(None),
    to_currency: Optional[str] = Form(None),
    store: WidgetSessionStore = Depends(get_widget_store),
    settings: Settings = Depends(get_app_settings),
):
    """Submit the whole form: pick up a changed pair first, then convert.

    Renders directly (no redirect) so an invalid amount can be flagged next
    to the input while the previous result stays on screen.
    """
    state = store.snapshot().state
    if (from_currency and from_currency != state.from_code) or (
        to_currency and to_currency != state.to_code
    ):
        store.select_pair(from_currency, to_currency)
    snapshot = store.convert(amount)
    return templates.TemplateResponse(
        request, "widget.html", _widget_context(snapshot, settings)
    )


@router.post("/ui/pair", response_class=RedirectResponse)
async def ui_select_pair(
    from_currency: Optional[str] = Form(None),
    to_currency: Optional[str] = Form(None),
    store: WidgetSessionStore = Depends(get_widget_store),
):
    store.select_pair(from_currency, to_currency)
    return _back_to_widget()


@router.post("/ui/swap", response_class=RedirectResponse)
async def ui_swap(
    amount: Optional[str] = Form(None),
    from_currency: Optional[str] = Form(None),
    to_currency: Optional[str] = Form(None),
    store: WidgetSessionStore = Depends(get_widget_store),
):
    """Swap the pair currently on screen, keeping the typed amount."""
    if from_currency or to_currency:
        store.select_pair(from_currency, to_currency)
    if amount is not None:
        store.set_amount(amount)
    store.swap()
    return _back_to_widget()


@router.post("/ui/history/clear", response_class=RedirectResponse)
async def ui_clear_history(store: WidgetSessionStore = Depends(get_widget_store)):
    store.clear_history()
    return _back_to_widget()
