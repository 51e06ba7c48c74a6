from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from fxwidget.core.config import Settings
from fxwidget.main import create_app
from fxwidget.services.rate_table import build_rate_table


@pytest.fixture
def settings() -> Settings:
    return Settings(debug=False)


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def table():
    return build_rate_table(extended=True)


@pytest.fixture
def fixed_clock():
    stamps = iter(datetime(2025, 11, 3, 9, minute) for minute in range(60))
    return lambda: next(stamps)
