"""Tests for routing errors and the shared error envelope."""

import pytest
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.mocks.card_vault import get_card_vault

from conftest import AUTH


class BrokenVault:
    def lookup(self, card_id):
        raise RuntimeError("vault driver crashed")


class TestHealthCheck:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRouting:
    def test_unknown_path(self, client):
        response = client.get("/api/v1/invoices")
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "not_found"
        assert set(data) == {"error_code", "message", "details"}

    def test_wrong_method(self, client):
        response = client.delete("/api/v1/products/prod_wireless_headphones")
        assert response.status_code == 405
        assert response.json()["error_code"] == "method_not_allowed"


class TestMalformedBodies:
    def test_invalid_json(self, client):
        response = client.post(
            "/api/v1/orders",
            content="{not json",
            headers={**AUTH, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "invalid_request"
        assert data["details"]["errors"]

    def test_wrong_field_type(self, client, payment_payload):
        payment_payload["amount"] = "a lot"
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        errors = response.json()["details"]["errors"]
        assert any(e["location"][-1] == "amount" for e in errors)


class TestUnexpectedErrors:
    @pytest.fixture
    def lenient_client(self, database_path):
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
        app.dependency_overrides.clear()

    def test_unhandled_exception_is_internal(self, lenient_client, payment_payload):
        app.dependency_overrides[get_card_vault] = lambda: BrokenVault()

        response = lenient_client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "internal"
        assert data["message"] == "An unexpected error occurred"
        assert "vault driver crashed" not in response.text
