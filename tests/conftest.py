"""Pytest fixtures for storefront tests."""

import pytest
from fastapi.testclient import TestClient

from storefront.config import settings
from storefront.main import app


AUTH = {"Authorization": "Bearer test-token"}

SEEDED_ORDER_ID = "order_456789"
SEEDED_PAYMENT_ID = "pay_1Nz3Q82eZvKYlo2C9EbE7PKr"
VISA_CARD_ID = "pm_1Nz3Q72eZvKYlo2CvJEwRG4c"
DECLINED_CARD_ID = "pm_card_chargeDeclined"
CUSTOMER_ID = "cus_N4qFJ3gTQd8fR2"

SHIPPING = {
    "address": {
        "line1": "510 Townsend St",
        "city": "San Francisco",
        "state": "CA",
        "postalCode": "94103",
        "country": "US",
    }
}


@pytest.fixture
def database_path(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file for one test."""
    path = tmp_path / "storefront.db"
    monkeypatch.setattr(settings, "database_path", str(path))
    return path


@pytest.fixture
def client(database_path):
    """Test client with lifespan (tables, engine, seed rows) running."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def empty_client(database_path, monkeypatch):
    """Test client over an unseeded database."""
    monkeypatch.setattr(settings, "seed_demo_data", False)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def order_payload():
    return {
        "customerId": CUSTOMER_ID,
        "items": [{"productId": "prod_laptop_stand", "quantity": 1}],
        "shipping": SHIPPING,
    }


@pytest.fixture
def payment_payload():
    return {
        "amount": 2500,
        "currency": "usd",
        "orderId": SEEDED_ORDER_ID,
        "paymentMethod": {"type": "card", "cardId": VISA_CARD_ID},
    }
