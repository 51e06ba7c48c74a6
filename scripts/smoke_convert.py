"""Smoke script for the converter widget API.

Sequence:
 1. Stateless conversion JPY -> EUR.
 2. Widget: select EUR -> JPY, convert 1000, swap, convert again.
 3. Invalid amount (should leave history unchanged).
 4. Clear history.
"""

import json

from fastapi.testclient import TestClient

from fxwidget.core.config import Settings
from fxwidget.main import create_app


def run():
    app = create_app(settings_override=Settings())
    client = TestClient(app)

    results = {}
    results["stateless"] = client.post(
        "/convert", json={"amount": "1", "from_currency": "JPY", "to_currency": "EUR"}
    ).json()
    client.post("/widget/pair", json={"from_currency": "EUR", "to_currency": "JPY"})
    results["eur_jpy"] = client.post("/widget/convert", json={"amount": "1000"}).json()
    results["swapped"] = client.post("/widget/swap").json()
    results["jpy_eur"] = client.post("/widget/convert", json={}).json()
    invalid = client.post("/widget/convert", json={"amount": "-5"}).json()
    results["invalid_error"] = invalid["error"]
    results["invalid_history_len"] = len(invalid["history"])
    results["cleared"] = client.delete("/widget/history").json()["history"]
    print(json.dumps(results, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    run()
