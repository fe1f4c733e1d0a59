"""Tests for the POST /cart/simulate endpoint."""
import pytest
from fastapi.testclient import TestClient

from cart_sim.api import create_app
from cart_sim.settings import Settings


def test_simulate_full_ticket(client, ticket_payload):
    """A valid cart returns the complete ticket preview."""
    response = client.post("/cart/simulate", json=ticket_payload)

    assert response.status_code == 200
    body = response.json()

    assert body["id"] == "T-100"
    assert body["code"] == "CODE-T-100"
    assert body["total"] == pytest.approx(16.5)
    assert body["currency"] == "EUR"
    assert body["points_earned"] == 165
    assert body["TicketSnippet"] == [
        "Dto. 50% 2ª Ud. (Prod 1): -5.00€",
        "Cashback Redimido: -2.00€",
        "Puntos Acumulados: +165 pts",
    ]
    assert body["promotions"] == [
        {"promotion_id": 201, "discount": 5.0, "product_id": 1, "description": "50% discount on 1 unit(s)"}
    ]
    assert body["creation_date"] == "2026-03-01T10:00:00.000Z"
    assert body["location_id"] == 12
    assert body["customer_id"] == 8223
    assert body["business_name"] == "SuperMarket S.L. Spain"
    assert body["tpv_id"] == "A55"


def test_echoed_lines_are_pre_discount(client, ticket_payload):
    body = client.post("/cart/simulate", json=ticket_payload).json()

    assert body["lines"] == [
        {"order": 1, "product_id": 1, "tot_line": 20.0, "quantity": 2, "product_name": "Producto 1"},
        {"order": 2, "product_id": 2, "tot_line": 3.5, "quantity": 1, "product_name": "Producto 2"},
    ]


def test_creation_date_defaults_to_now(client, ticket_payload):
    del ticket_payload["creation_date"]

    body = client.post("/cart/simulate", json=ticket_payload).json()

    assert body["creation_date"].endswith("Z")
    assert "T" in body["creation_date"]


def test_cashback_optional(client):
    response = client.post(
        "/cart/simulate",
        json={"ticket_id": 55, "lines": [{"product_id": 1, "price": 10, "quantity": 1}]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == 55
    assert body["code"] == "CODE-55"
    assert body["total"] == 10
    assert body["points_earned"] == 100
    assert body["promotions"] == []


@pytest.mark.parametrize(
    "payload",
    [
        {"lines": [{"product_id": 1, "price": 10, "quantity": 1}]},
        {"ticket_id": "", "lines": [{"product_id": 1, "price": 10, "quantity": 1}]},
        {"ticket_id": 0, "lines": [{"product_id": 1, "price": 10, "quantity": 1}]},
        {"ticket_id": "T1"},
        {"ticket_id": "T1", "lines": []},
        {"ticket_id": "T1", "lines": "not-a-list"},
        {"ticket_id": "T1", "lines": {"product_id": 1, "price": 10, "quantity": 1}},
        {"ticket_id": "T1", "lines": [{"product_id": 1, "price": -1, "quantity": 1}]},
        {"ticket_id": "T1", "lines": [{"product_id": 1, "price": 10, "quantity": 0}]},
        ["not", "an", "object"],
    ],
)
def test_malformed_request_rejected(client, payload):
    response = client.post("/cart/simulate", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert "ticket_id" in body["error"]
    assert body["details"]


def test_invalid_json_rejected(client):
    response = client.post(
        "/cart/simulate",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_static_files_served(tmp_path, ticket_payload):
    (tmp_path / "index.html").write_text("<h1>Cart simulator</h1>", encoding="utf-8")
    client = TestClient(create_app(Settings(static_dir=str(tmp_path))))

    page = client.get("/")
    assert page.status_code == 200
    assert "Cart simulator" in page.text

    # API route wins over the static mount
    assert client.post("/cart/simulate", json=ticket_payload).status_code == 200


def test_missing_static_dir_is_ignored(tmp_path, ticket_payload):
    client = TestClient(create_app(Settings(static_dir=str(tmp_path / "missing"))))

    assert client.get("/").status_code == 404
    assert client.post("/cart/simulate", json=ticket_payload).status_code == 200


@pytest.mark.parametrize(
    "ticket_id, code",
    [(True, "CODE-true"), (1.5, "CODE-1.5"), ("T1", "CODE-T1")],
)
def test_any_truthy_ticket_id_accepted(client, ticket_id, code):
    response = client.post(
        "/cart/simulate",
        json={"ticket_id": ticket_id, "lines": [{"product_id": 1, "price": 10, "quantity": 1}]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == ticket_id
    assert body["code"] == code


def test_negative_cashback_is_ignored(client):
    response = client.post(
        "/cart/simulate",
        json={"ticket_id": "T1", "lines": [{"product_id": 1, "price": 10, "quantity": 1}], "cashback_to_redeem": -5},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 10
    assert body["TicketSnippet"] == ["Puntos Acumulados: +100 pts"]


def test_total_keeps_float_arithmetic(client):
    response = client.post(
        "/cart/simulate",
        json={
            "ticket_id": "T1",
            "lines": [{"product_id": 1, "price": 0.7, "quantity": 1}, {"product_id": 2, "price": 0.1, "quantity": 1}],
        },
    )

    body = response.json()
    assert body["total"] == 0.7 + 0.1
    assert body["points_earned"] == 7
