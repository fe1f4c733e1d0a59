"""Pytest fixtures for the cart simulator."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from cart_sim.api import create_app
from cart_sim.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def client(settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def ticket_payload() -> dict:
    return {
        "ticket_id": "T-100",
        "creation_date": "2026-03-01T10:00:00.000Z",
        "lines": [
            {"product_id": 1, "price": 10, "quantity": 2},  # 20 - 5 promo
            {"product_id": 2, "price": 3.5, "quantity": 1},
        ],
        "cashback_to_redeem": 2,
    }
