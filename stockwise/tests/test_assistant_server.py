"""HTTP-level tests for the assistant server."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from stockwise.runtime.assistant_server import create_app
from stockwise.runtime.command_rules import load_navigation_commands
from stockwise.runtime.paths import get_paths

INVENTORY = [
    {"id": "1", "name": "Gala Apples", "category": "A", "quantity": 10, "price": 5},
    {"id": "2", "name": "Whole Milk", "category": "B", "quantity": 5, "price": 20},
]


@pytest.fixture
def client() -> TestClient:
    load_navigation_commands.cache_clear()
    navigation = load_navigation_commands((str(get_paths().default_command_rules),))
    return TestClient(create_app(navigation=navigation))


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_command_returns_outcome_and_events(client: TestClient) -> None:
    response = client.post("/command", json={"transcript": "Go to dashboard", "confidence": 0.91})

    assert response.status_code == 200
    body = response.json()
    assert body["outcome"]["status"] == "executed"
    assert body["outcome"]["trigger"] == "dashboard"
    assert body["events"] == [
        {"type": "navigate", "route": "/dashboard"},
        {"type": "speak", "text": "Navigating to dashboard"},
    ]


def test_command_requires_transcript(client: TestClient) -> None:
    response = client.post("/command", json={"transcript": "   "})

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Missing transcript"}


def test_command_rejects_non_object_body(client: TestClient) -> None:
    response = client.post("/command", json=["go to dashboard"])

    assert response.status_code == 400


def test_data_command_uses_last_analysed_snapshot(client: TestClient) -> None:
    before = client.post("/command", json={"transcript": "inventory value"}).json()
    assert before["events"] == [{"type": "speak", "text": "Unable to retrieve inventory statistics at the moment."}]

    analysis = client.post("/cost-analysis", json={"items": INVENTORY})
    assert analysis.status_code == 200

    after = client.post("/command", json={"transcript": "inventory value"}).json()
    assert after["events"] == [{"type": "speak", "text": "Your total inventory value is $150.00."}]


def test_cost_analysis_report(client: TestClient) -> None:
    report = client.post("/cost-analysis", json={"items": INVENTORY}).json()["report"]

    assert report["overall"]["avg_profit_margin"] == "30.00"
    assert report["categories"]["A"]["profit_margin"] == "30.00"
    assert report["categories"]["B"]["retail_value"] == "100"
    assert report["recommendations"][0]["type"] == "success"


def test_cost_analysis_rejects_invalid_rows(client: TestClient) -> None:
    response = client.post("/cost-analysis", json={"items": [{"name": "Pears", "quantity": -1, "price": 1}]})

    assert response.status_code == 400
    assert "must not be negative" in response.json()["message"]


def test_history_tracks_last_command(client: TestClient) -> None:
    client.post("/command", json={"transcript": "Thanks"})

    body = client.get("/history").json()

    assert body["last_command"] == "thanks"
    assert [entry["role"] for entry in body["history"]] == ["user", "assistant", "assistant"]

    client.delete("/history")
    assert client.get("/history").json()["history"] == []


def test_invoice_endpoint(client: TestClient) -> None:
    response = client.post(
        "/invoice",
        json={
            "customer_info": {"name": "Corner Shop"},
            "items": [{"description": "Apples", "quantity": 2, "unit_price": 10}],
            "due_date": "2026-11-30",
            "tax_rate": 0.0825,
        },
    )

    invoice = response.json()["invoice"]
    assert invoice["invoice_number"].startswith("INV-")
    assert invoice["due_date"] == "2026-11-30"
    assert invoice["calculations"]["subtotal"] == "20.00"
    assert invoice["calculations"]["tax_amount"] == "1.65"
    assert invoice["calculations"]["total"] == "21.65"


def test_invoice_rejects_bad_date(client: TestClient) -> None:
    response = client.post(
        "/invoice",
        json={"items": [{"quantity": 1, "unit_price": 1}], "due_date": "next week"},
    )

    assert response.status_code == 400
    assert "due_date" in response.json()["message"]


def test_purchase_order_endpoint(client: TestClient) -> None:
    response = client.post(
        "/purchase-order",
        json={"po_number": "PO-7", "items": [{"description": "Crates", "quantity": 4, "unit_cost": "2.50"}]},
    )

    po = response.json()["purchase_order"]
    assert po["po_number"] == "PO-7"
    assert po["total"] == "10.00"
    assert po["terms"] == "Net 30"


def test_break_even_endpoint_flags_unreachable(client: TestClient) -> None:
    response = client.post(
        "/break-even",
        json={"fixed_costs": 1000, "variable_cost_per_unit": 5, "price_per_unit": 5},
    )

    result = response.json()["break_even"]
    assert result["break_even_units"] == "Infinity"
    assert result["error"] == "Price must be higher than variable cost"


def test_break_even_endpoint_requires_fields(client: TestClient) -> None:
    response = client.post("/break-even", json={"fixed_costs": 1000})

    assert response.status_code == 400
    assert response.json()["message"] == "Missing field: variable_cost_per_unit"


@pytest.mark.parametrize("confidence", [True, "high"])
def test_command_rejects_non_numeric_confidence(client: TestClient, confidence) -> None:
    response = client.post("/command", json={"transcript": "go to dashboard", "confidence": confidence})

    assert response.status_code == 400
    assert response.json()["message"] == "confidence must be a number"
