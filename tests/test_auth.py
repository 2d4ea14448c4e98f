"""Tests for bearer-token enforcement."""

import pytest

from storefront.exceptions import UnauthenticatedError
from storefront.services.auth_guard import extract_bearer_token, get_token_validator

from conftest import AUTH, SEEDED_PAYMENT_ID


class RejectingValidator:
    def validate(self, token):
        return token == "good-token"


class TestExtractBearerToken:
    def test_valid_header(self):
        assert extract_bearer_token("Bearer abc123") == "abc123"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc123") == "abc123"

    @pytest.mark.parametrize("header", [None, "", "Basic dXNlcjpwYXNz", "Bearer", "Bearer   ", "abc123"])
    def test_rejected_headers(self, header):
        with pytest.raises(UnauthenticatedError):
            extract_bearer_token(header)


class TestProtectedRoutes:
    @pytest.mark.parametrize("method,path", [
        ("get", "/api/v1/payments"),
        ("get", f"/api/v1/payments/{SEEDED_PAYMENT_ID}"),
        ("get", "/api/v1/orders"),
        ("get", "/api/v1/orders/order_456789"),
        ("get", "/api/v1/users"),
    ])
    def test_missing_token_is_401(self, client, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401
        data = response.json()
        assert data["error_code"] == "unauthenticated"
        assert "message" in data

    def test_post_without_token_is_401(self, client, payment_payload):
        response = client.post("/api/v1/payments", json=payment_payload)
        assert response.status_code == 401

    def test_wrong_scheme_is_401(self, client):
        response = client.get("/api/v1/orders", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_public_routes_need_no_token(self, client):
        assert client.get("/api/v1/products/prod_wireless_headphones").status_code == 200
        assert client.get("/api/v1/users/1001").status_code == 200
        assert client.get("/api/health").status_code == 200

    def test_token_validator_can_be_swapped(self, client):
        app = client.app
        app.dependency_overrides[get_token_validator] = lambda: RejectingValidator()

        assert client.get("/api/v1/orders", headers=AUTH).status_code == 401
        good = client.get("/api/v1/orders", headers={"Authorization": "Bearer good-token"})
        assert good.status_code == 200


class TestOverrideTeardown:
    def test_override_on_unseeded_app(self, empty_client):
        empty_client.app.dependency_overrides[get_token_validator] = lambda: RejectingValidator()
        assert empty_client.get("/api/v1/orders", headers=AUTH).status_code == 401

    def test_next_unseeded_app_uses_default_validator(self, empty_client):
        assert empty_client.app.dependency_overrides == {}
        assert empty_client.get("/api/v1/orders", headers=AUTH).status_code == 200
