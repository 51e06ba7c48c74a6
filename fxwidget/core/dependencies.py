"""FastAPI dependencies resolving per-app singletons set up in ``create_app``."""

from fastapi import Request

from fxwidget.core.config import Settings
from fxwidget.services.rate_table import RateTable
from fxwidget.services.widget_state import WidgetSessionStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_table(request: Request) -> RateTable:
    return request.app.state.rate_table


def get_widget_store(request: Request) -> WidgetSessionStore:
    return request.app.state.widget_store
