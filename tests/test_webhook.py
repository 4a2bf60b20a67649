#!/usr/bin/env python3
"""
Webhook receiver: the encrypted checkout payload comes back inside
meta.payload and authenticates the notification.
"""

import json

import pytest
from fastapi.testclient import TestClient

from secure_payload.checkout import build_checkout_payload
from secure_payload.core import PayloadCodec
from secure_payload.main import app
from secure_payload.models import AccountPayload, SignedCheckoutPayload, WebhookPayload
from secure_payload.routers import webhook as webhook_module

client = TestClient(app)

API_KEY = "API_KEY_VALUE"
ORDER_ID = "3f2a9f54-1c1e-4a55-9a43-3c8c6f1f4d10"
CLIENT_ID = "test-client-id"


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("API_KEY", API_KEY)


def make_data(amount=10.0, currency="USD", order_id=ORDER_ID, with_charge=True):
    data = {"order_id": order_id, "psp_name": "test_psp"}
    if with_charge:
        data["charge"] = {
            "type": "approved",
            "id": "ch_1",
            "psp_order_id": "psp-1",
            "attributes": {
                "amount": amount,
                "status": "approved",
                "currency": currency,
                "created_at": 1700000000,
                "customer": {"first_name": "John", "extra_data": {"vip": True}},
            },
        }
    return json.dumps(data)


def make_notification(payload, data=None, webhook_type="approved"):
    return {
        "webhook": {"type": webhook_type},
        "data": make_data() if data is None else data,
        "meta": {
            "server_time": 1700000001,
            "server_timezone": "UTC",
            "api_version": "v2",
            "payload": payload,
            "cashier_session_id": "session-1",
        },
    }


@pytest.fixture
def checkout_payload():
    return build_checkout_payload(
        order_id=ORDER_ID,
        amount=10.0,
        currency="USD",
        client_id=CLIENT_ID,
        secret=API_KEY,
        timestamp=123,
        metadata={"test": "test"},
    )


def test_webhook_accepted(checkout_payload):
    response = client.post("/webhooks/payment", json=make_notification(checkout_payload))

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Webhook accepted"
    assert body["type"] == "approved"
    assert body["client_id"] == CLIENT_ID
    assert body["cashier_session_id"] == "session-1"


def test_unknown_webhook_type_still_processed(checkout_payload):
    notification = make_notification(checkout_payload, webhook_type="Chargeback")
    response = client.post("/webhooks/payment", json=notification)

    assert response.status_code == 200
    assert WebhookPayload.model_validate(notification).webhook.kind is None


def test_amount_mismatch_rejected(checkout_payload):
    notification = make_notification(checkout_payload, data=make_data(amount=99.0))
    response = client.post("/webhooks/payment", json=notification)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid signature"


def test_order_mismatch_rejected(checkout_payload):
    notification = make_notification(checkout_payload, data=make_data(order_id="other"))
    response = client.post("/webhooks/payment", json=notification)

    assert response.status_code == 400


def test_missing_charge_rejected(checkout_payload):
    notification = make_notification(checkout_payload, data=make_data(with_charge=False))
    response = client.post("/webhooks/payment", json=notification)

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing charge"


def test_malformed_data_rejected(checkout_payload):
    notification = make_notification(checkout_payload, data="{not json")
    response = client.post("/webhooks/payment", json=notification)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid webhook data"


def make_unsigned_payload():
    record = SignedCheckoutPayload(timestamp=123, client_id="unsigned-client-id")
    return PayloadCodec(SignedCheckoutPayload).encode(record, API_KEY)


def test_unsigned_payload_rejected():
    notification = make_notification(make_unsigned_payload())
    response = client.post("/webhooks/payment", json=notification)

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing signature"


def test_unsigned_payload_accepted_without_verification(monkeypatch):
    monkeypatch.setattr(
        webhook_module,
        "merchant",
        webhook_module.merchant.model_copy(update={"verify_signature": False}),
    )
    notification = make_notification(
        make_unsigned_payload(), data=make_data(with_charge=False)
    )
    response = client.post("/webhooks/payment", json=notification)

    assert response.status_code == 200
    assert response.json()["client_id"] == "unsigned-client-id"


def test_missing_payload_rejected():
    response = client.post("/webhooks/payment", json=make_notification(None))

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing payload"


@pytest.mark.parametrize("payload", ["%%%", "AAAA", "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA="])
def test_undecodable_payload_rejected(payload):
    response = client.post("/webhooks/payment", json=make_notification(payload))

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid payload")


def test_payload_from_other_merchant_rejected():
    payload = build_checkout_payload(
        order_id=ORDER_ID,
        amount=10.0,
        currency="USD",
        client_id=CLIENT_ID,
        secret="someone-else",
        timestamp=123,
    )
    response = client.post("/webhooks/payment", json=make_notification(payload))

    assert response.status_code == 400


def test_missing_api_key_is_server_error(checkout_payload, monkeypatch):
    monkeypatch.delenv("API_KEY")
    response = client.post("/webhooks/payment", json=make_notification(checkout_payload))

    assert response.status_code == 500


def test_invalid_notification_shape():
    response = client.post("/webhooks/payment", json={"webhook": {"type": "approved"}})

    assert response.status_code == 422


def test_account_payload_is_not_accepted_as_signed():
    record = AccountPayload(
        timestamp=123, client_id="account-client", account_id="a" * 20, ref_id="r"
    )
    payload = PayloadCodec(AccountPayload).encode(record, API_KEY)
    response = client.post("/webhooks/payment", json=make_notification(payload))

    # Same tags, different meaning: account_id parses as the sign field
    # and ref_id cannot be a metadata entry.
    assert response.status_code == 400
