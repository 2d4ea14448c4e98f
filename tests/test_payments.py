"""Tests for the payments API."""

import pytest

from storefront.mocks.card_vault import CardVaultUnavailable, get_card_vault

from conftest import AUTH, DECLINED_CARD_ID, SEEDED_PAYMENT_ID, VISA_CARD_ID


class UnreachableVault:
    def lookup(self, card_id):
        raise CardVaultUnavailable("connection refused")


def create_payment(client, payload):
    response = client.post("/api/v1/payments", json=payload, headers=AUTH)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreatePayment:
    def test_create_success(self, client, payment_payload):
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("pay_")
        assert data["status"] == "pending"
        assert data["amount"] == 2500
        assert data["currency"] == "usd"
        assert data["orderId"] == "order_456789"
        assert data["customer"]["email"] == "jenny.rosen@example.com"
        assert data["paymentMethod"]["type"] == "card"
        assert data["paymentMethod"]["card"]["last4"] == "4242"
        assert data["refunds"] == {"total": 0, "data": []}
        assert data["timestamps"]["createdAt"].endswith("Z")
        assert data["timestamps"]["succeededAt"] is None

    def test_card_projection_has_no_raw_number(self, client, payment_payload):
        card = create_payment(client, payment_payload)["paymentMethod"]["card"]
        assert set(card) == {"last4", "brand", "expiryMonth", "expiryYear", "country"}

    def test_currency_is_echoed_as_sent(self, client, payment_payload):
        payment_payload["currency"] = "USD"
        data = create_payment(client, payment_payload)
        assert data["currency"] == "USD"

        fetched = client.get(f"/api/v1/payments/{data['id']}", headers=AUTH).json()
        assert fetched["currency"] == "USD"

    def test_amount_above_storage_ceiling(self, client, payment_payload):
        payment_payload["amount"] = 10 ** 20
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_amount"

    def test_largest_storable_amount(self, client, payment_payload):
        payment_payload["amount"] = 2 ** 63 - 1
        assert create_payment(client, payment_payload)["amount"] == 2 ** 63 - 1

    @pytest.mark.parametrize("amount", [True, 25.0, "2500"])
    def test_amount_must_be_a_json_integer(self, client, payment_payload, amount):
        payment_payload["amount"] = amount
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_request"

    def test_billing_defaults_to_card_address(self, client, payment_payload):
        data = create_payment(client, payment_payload)
        assert data["billing"]["address"]["city"] == "San Francisco"

    def test_explicit_billing_address(self, client, payment_payload):
        payment_payload["billing"] = {"address": {"city": "Toronto", "country": "CA", "postalCode": "M5V 2T6"}}
        data = create_payment(client, payment_payload)
        assert data["billing"]["address"]["city"] == "Toronto"
        assert data["billing"]["address"]["postalCode"] == "M5V 2T6"
        assert data["billing"]["address"]["line1"] is None

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount(self, client, payment_payload, amount):
        payment_payload["amount"] = amount
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_amount"

    def test_unknown_currency(self, client, payment_payload):
        payment_payload["currency"] = "xyz"
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_currency"

    def test_unknown_order(self, client, payment_payload):
        payment_payload["orderId"] = "order_missing"
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_request"

    def test_unknown_card(self, client, payment_payload):
        payment_payload["paymentMethod"]["cardId"] = "pm_does_not_exist"
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["details"] == {"card_id": "pm_does_not_exist"}

    def test_unsupported_method_type(self, client, payment_payload):
        payment_payload["paymentMethod"]["type"] = "bank_transfer"
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_request"

    def test_missing_fields(self, client):
        response = client.post("/api/v1/payments", json={"amount": 100}, headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_request"

    def test_vault_outage_is_internal_error(self, client, payment_payload):
        client.app.dependency_overrides[get_card_vault] = lambda: UnreachableVault()
        response = client.post("/api/v1/payments", json=payment_payload, headers=AUTH)
        assert response.status_code == 500
        assert response.json()["error_code"] == "internal"


class TestAuthorization:
    def test_approved_card_succeeds(self, client, payment_payload):
        payment_id = create_payment(client, payment_payload)["id"]

        response = client.get(f"/api/v1/payments/{payment_id}", headers=AUTH)
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == payment_id
        assert data["status"] == "succeeded"
        assert data["timestamps"]["succeededAt"] is not None
        assert data["failureReason"] is None

    def test_declined_card_fails(self, client, payment_payload):
        payment_payload["paymentMethod"]["cardId"] = DECLINED_CARD_ID
        payment_id = create_payment(client, payment_payload)["id"]

        data = client.get(f"/api/v1/payments/{payment_id}", headers=AUTH).json()
        assert data["status"] == "failed"
        assert data["failureReason"] == "card_declined"
        assert data["timestamps"]["succeededAt"] is None

    @pytest.mark.parametrize("card_id,reason", [
        ("pm_card_insufficientFunds", "insufficient_funds"),
        ("pm_card_expired", "expired_card"),
    ])
    def test_decline_reasons_are_recorded(self, client, payment_payload, card_id, reason):
        payment_payload["paymentMethod"]["cardId"] = card_id
        payment_id = create_payment(client, payment_payload)["id"]

        data = client.get(f"/api/v1/payments/{payment_id}", headers=AUTH).json()
        assert data["status"] == "failed"
        assert data["failureReason"] == reason

    def test_succeeded_at_is_stable(self, client, payment_payload):
        payment_id = create_payment(client, payment_payload)["id"]
        first = client.get(f"/api/v1/payments/{payment_id}", headers=AUTH).json()
        second = client.get(f"/api/v1/payments/{payment_id}", headers=AUTH).json()
        assert first["timestamps"]["succeededAt"] == second["timestamps"]["succeededAt"]


class TestGetPayment:
    def test_seeded_payment(self, client):
        response = client.get(f"/api/v1/payments/{SEEDED_PAYMENT_ID}", headers=AUTH)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "succeeded"
        assert data["amount"] == 2500
        assert data["customer"]["name"] == "Jenny Rosen"
        assert data["billing"]["address"]["city"] == "San Francisco"
        assert data["paymentMethod"]["card"] == {
            "last4": "4242",
            "brand": "visa",
            "expiryMonth": 12,
            "expiryYear": 2025,
            "country": "US",
        }
        assert data["timestamps"]["succeededAt"] == "2023-10-03T14:21:09Z"
        assert data["refunds"] == {"total": 0, "data": []}

    def test_unknown_payment(self, client):
        response = client.get("/api/v1/payments/pay_missing", headers=AUTH)
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "not_found"
        assert data["details"] == {"payment_id": "pay_missing"}


class TestListPayments:
    def test_list_includes_seeded_and_created(self, client, payment_payload):
        created = create_payment(client, payment_payload)

        response = client.get("/api/v1/payments", headers=AUTH)
        assert response.status_code == 200
        data = response.json()
        ids = [p["id"] for p in data["data"]]
        assert ids == [SEEDED_PAYMENT_ID, created["id"]]
        assert data["pagination"] == {"limit": 20, "offset": 0, "total": 2}

    def test_status_filter(self, client, payment_payload):
        payment_payload["paymentMethod"]["cardId"] = DECLINED_CARD_ID
        create_payment(client, payment_payload)

        data = client.get("/api/v1/payments?status=failed", headers=AUTH).json()
        assert data["pagination"]["total"] == 1
        assert all(p["status"] == "failed" for p in data["data"])

    def test_unknown_status_filter(self, client):
        response = client.get("/api/v1/payments?status=lost", headers=AUTH)
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_request"

    def test_paging(self, client, payment_payload):
        for _ in range(3):
            create_payment(client, payment_payload)

        data = client.get("/api/v1/payments?limit=2&offset=1", headers=AUTH).json()
        assert len(data["data"]) == 2
        assert data["pagination"] == {"limit": 2, "offset": 1, "total": 4}


class TestRefunds:
    def test_full_refund(self, client):
        response = client.post(
            f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds",
            json={"reason": "requested_by_customer"},
            headers=AUTH,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "refunded"
        assert data["refunds"]["total"] == 1
        refund = data["refunds"]["data"][0]
        assert refund["id"].startswith("re_")
        assert refund["amount"] == 2500
        assert refund["status"] == "succeeded"
        assert refund["reason"] == "requested_by_customer"
        assert data["timestamps"]["succeededAt"] == "2023-10-03T14:21:09Z"

    def test_refund_without_body(self, client):
        response = client.post(f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds", headers=AUTH)
        assert response.status_code == 201
        assert response.json()["status"] == "refunded"

    def test_partial_refunds_accumulate(self, client):
        url = f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds"

        first = client.post(url, json={"amount": 1000}, headers=AUTH).json()
        assert first["status"] == "succeeded"
        assert first["refunds"]["total"] == 1

        second = client.post(url, json={"amount": 1500}, headers=AUTH).json()
        assert second["status"] == "refunded"
        assert second["refunds"]["total"] == len(second["refunds"]["data"]) == 2

    def test_refund_above_remainder(self, client):
        url = f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds"
        client.post(url, json={"amount": 2000}, headers=AUTH)

        response = client.post(url, json={"amount": 600}, headers=AUTH)
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "invalid_amount"
        assert data["details"]["refundable"] == 500

    def test_zero_refund(self, client):
        response = client.post(
            f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds", json={"amount": 0}, headers=AUTH
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_amount"

    def test_boolean_refund_amount_rejected(self, client):
        response = client.post(
            f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds", json={"amount": True}, headers=AUTH
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_request"

    def test_refunded_payment_cannot_be_refunded_again(self, client):
        url = f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds"
        client.post(url, headers=AUTH)

        response = client.post(url, headers=AUTH)
        assert response.status_code == 409
        data = response.json()
        assert data["error_code"] == "invalid_transition"
        assert data["details"] == {"from": "refunded", "to": "refunded"}

    def test_failed_payment_cannot_be_refunded(self, client, payment_payload):
        payment_payload["paymentMethod"]["cardId"] = DECLINED_CARD_ID
        payment_id = create_payment(client, payment_payload)["id"]

        response = client.post(f"/api/v1/payments/{payment_id}/refunds", headers=AUTH)
        assert response.status_code == 409

    def test_unknown_payment(self, client):
        response = client.post("/api/v1/payments/pay_missing/refunds", headers=AUTH)
        assert response.status_code == 404

    def test_refund_visible_on_get(self, client):
        client.post(f"/api/v1/payments/{SEEDED_PAYMENT_ID}/refunds", json={"amount": 700}, headers=AUTH)

        data = client.get(f"/api/v1/payments/{SEEDED_PAYMENT_ID}", headers=AUTH).json()
        assert data["refunds"]["total"] == 1
        assert data["refunds"]["data"][0]["amount"] == 700
