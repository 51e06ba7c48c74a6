import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import health, rates, convert, widget, ui
from .services.rate_table import build_rate_table
from .services.widget_state import WidgetSessionStore


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate configuration. Falls back to cached get_settings().
    """
    if settings_override is not None:
        settings_override.init_post_load()
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    # An incomplete table is a configuration defect; refuse to start
    try:
        rate_table = build_rate_table(extended=settings.extended_currencies)
    except errors.RateTableError:
        logging.getLogger("fxwidget").exception("invalid reference rate table")
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.rate_table = rate_table
    app.state.widget_store = WidgetSessionStore(
        rate_table,
        from_code=settings.default_from_currency,
        to_code=settings.default_to_currency,
    )

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.ConverterError, errors.converter_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(convert.router)
    app.include_router(rates.router)
    app.include_router(widget.router)
    app.include_router(ui.router)

    @app.get("/")
    async def root():
        return {"message": "Currency Converter API", "version": settings.version}

    return app


app = create_app()
