import pytest

from fxwidget.core.config import Settings
from fxwidget.main import create_app
from fxwidget.services.rate_table import RateTable
from fxwidget.services.widget_state import WidgetSessionStore
from fastapi.testclient import TestClient


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Currency Converter API"
    body = client.get("/health").json()
    assert body == {"status": "ok", "version": "0.1.0"}


def test_request_id_header_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_currencies_in_display_order(client):
    codes = [c["code"] for c in client.get("/currencies").json()]
    assert codes == ["JPY", "KRW", "EUR", "GBP"]
    jpy = client.get("/currencies").json()[0]
    assert jpy["symbol"] == "¥"


def test_currencies_without_krw():
    app = create_app(
        settings_override=Settings(extended_currencies=False, default_to_currency="EUR")
    )
    client = TestClient(app)
    codes = [c["code"] for c in client.get("/currencies").json()]
    assert codes == ["JPY", "EUR", "GBP"]
    assert len(client.get("/rates").json()) == 6


def test_list_rates(client):
    rates = client.get("/rates").json()
    assert len(rates) == 12
    assert {"from_currency": "GBP", "to_currency": "EUR", "rate": 1.13557} in rates


def test_single_rate_lookup(client):
    assert client.get("/rates/gbp/eur").json()["rate"] == 1.13557
    assert client.get("/rates/JPY/JPY").json()["rate"] == 1.0
    resp = client.get("/rates/USD/JPY")
    assert resp.status_code == 422
    assert resp.json()["error"] == "unsupported_currency"


def test_stateless_convert(client):
    resp = client.post(
        "/convert", json={"amount": "1000", "from_currency": "eur", "to_currency": "JPY"}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["value"] == 180699.0
    assert body["rate"] == 180.699
    assert body["symbol"] == "¥"
    # stateless conversions never reach the widget history
    assert client.get("/widget/history").json() == []


def test_stateless_convert_numeric_amount(client):
    body = client.post(
        "/convert", json={"amount": 1, "from_currency": "JPY", "to_currency": "EUR"}
    ).json()
    assert body["value"] == 0.0055


@pytest.mark.parametrize("amount", ["0", "-10", "abc", ""])
def test_stateless_convert_invalid_amount(client, amount):
    resp = client.post(
        "/convert", json={"amount": amount, "from_currency": "JPY", "to_currency": "EUR"}
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_amount"


def test_stateless_convert_unsupported_currency(client):
    resp = client.post(
        "/convert", json={"amount": "1", "from_currency": "JPY", "to_currency": "USD"}
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "unsupported_currency"


def test_stateless_convert_missing_fields(client):
    resp = client.post("/convert", json={"amount": "1"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_stateless_convert_rate_gap_is_503(app, client):
    app.state.rate_table = RateTable({("JPY", "EUR"): 0.00553})
    resp = client.post(
        "/convert", json={"amount": "1", "from_currency": "EUR", "to_currency": "JPY"}
    )
    assert resp.status_code == 503
    assert resp.json()["error"] == "conversion_unavailable"


def test_widget_initial_state(client):
    body = client.get("/widget").json()
    assert body["from_currency"] == "JPY"
    assert body["to_currency"] == "KRW"
    assert body["result"] is None
    assert body["history"] == []


def test_widget_convert_swap_flow(client):
    client.post("/widget/pair", json={"from_currency": "JPY", "to_currency": "EUR"})
    body = client.post("/widget/convert", json={"amount": "1"}).json()
    assert body["result"] == 0.0055
    assert body["rate"] == 0.00553
    assert body["symbol"] == "€"
    assert body["error"] is None
    assert len(body["history"]) == 1
    item = body["history"][0]
    assert item["from_currency"] == "JPY" and item["to_currency"] == "EUR"
    assert len(item["time"]) == 5 and item["time"][2] == ":"

    swapped = client.post("/widget/swap").json()
    assert swapped["from_currency"] == "EUR"
    assert swapped["to_currency"] == "JPY"
    assert swapped["result"] is None
    assert swapped["rate"] is None
    assert len(swapped["history"]) == 1


def test_widget_invalid_amount_leaves_state(client):
    client.post("/widget/pair", json={"from_currency": "EUR", "to_currency": "JPY"})
    client.post("/widget/convert", json={"amount": 1000})
    for bad in ("0", "-5", "x"):
        body = client.post("/widget/convert", json={"amount": bad}).json()
        assert body["error"] == "invalid_amount"
        assert body["result"] == 180699.0
        assert len(body["history"]) == 1


def test_widget_convert_without_amount_uses_stored(client):
    client.post("/widget/convert", json={"amount": "10"})
    body = client.post("/widget/convert", json={}).json()
    assert body["amount"] == "10"
    assert body["result"] == 93.5
    assert len(body["history"]) == 2


def test_widget_pair_change_invalidates_result(client):
    client.post("/widget/convert", json={"amount": "10"})
    body = client.post("/widget/pair", json={"to_currency": "gbp"}).json()
    assert body["from_currency"] == "JPY"
    assert body["to_currency"] == "GBP"
    assert body["result"] is None


def test_widget_pair_unsupported(client):
    resp = client.post("/widget/pair", json={"from_currency": "USD"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "unsupported_currency"


def test_widget_history_cap_and_clear(client):
    for amount in range(1, 12):
        client.post("/widget/convert", json={"amount": str(amount)})
    history = client.get("/widget/history").json()
    assert len(history) == 10
    assert history[0]["source_amount"] == 11.0
    assert all(h["source_amount"] != 1.0 for h in history)
    assert client.delete("/widget/history").json()["history"] == []
    assert client.get("/widget/history").json() == []


def test_widget_rate_gap_reports_unavailable(app, client):
    gap = RateTable({("JPY", "EUR"): 0.00553, ("EUR", "JPY"): 180.699, ("JPY", "KRW"): 9.35})
    app.state.widget_store = WidgetSessionStore(gap, "KRW", "EUR")
    body = client.post("/widget/convert", json={"amount": "5"}).json()
    assert body["unavailable"] is True
    assert body["error"] == "conversion_unavailable"
    assert body["result"] is None
    assert body["history"] == []


def test_apps_do_not_share_history(settings):
    first = TestClient(create_app(settings_override=settings))
    second = TestClient(create_app(settings_override=Settings()))
    first.post("/widget/convert", json={"amount": "1"})
    assert len(first.get("/widget/history").json()) == 1
    assert second.get("/widget/history").json() == []
