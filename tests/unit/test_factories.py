import json

import pytest

from src.utils.factories import WebhookFactory, encode_body


class TestWebhookFactory:
    """Tests for WebhookFactory."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "event_type,status",
        [
            ("payment.authorized", "authorized"),
            ("payment.captured", "captured"),
            ("payment.failed", "failed"),
        ],
    )
    def test_payment_events_carry_entity(self, event_type, status):
        event = WebhookFactory.create_event(event_type)
        entity = event.payload["payload"]["payment"]["entity"]
        assert event.payload["event"] == event_type
        assert event.payload["contains"] == ["payment"]
        assert entity["id"] == event.payment_id
        assert entity["status"] == status
        assert event.event_id.startswith("evt_")
        assert event.payment_id.startswith("pay_")

    @pytest.mark.unit
    def test_defaults_match_the_reference_capture(self):
        entity = WebhookFactory.create_event("payment.captured").payload["payload"]["payment"]["entity"]
        assert entity["amount"] == 10000
        assert entity["currency"] == "INR"
        assert entity["notes"] == {"user_id": "user123"}

    @pytest.mark.unit
    def test_failed_payment_has_error_fields(self):
        entity = WebhookFactory.create_event("payment.failed").payload["payload"]["payment"]["entity"]
        assert entity["error_code"] == "BAD_REQUEST_ERROR"

    @pytest.mark.unit
    def test_create_capture_shortcut(self):
        event = WebhookFactory.create_capture("u42", 2500, payment_id="pay_2")
        entity = event.payload["payload"]["payment"]["entity"]
        assert event.event_type == "payment.captured"
        assert event.payment_id == "pay_2"
        assert entity["amount"] == 2500
        assert entity["notes"] == {"user_id": "u42"}

    @pytest.mark.unit
    def test_extra_notes_are_kept(self):
        event = WebhookFactory.create_event("payment.captured", notes={"plan": "gold"})
        assert event.payload["payload"]["payment"]["entity"]["notes"] == {"plan": "gold", "user_id": "user123"}

    @pytest.mark.unit
    def test_non_payment_event_has_empty_payload(self):
        event = WebhookFactory.create_event("order.paid")
        assert event.payload["payload"] == {}
        assert event.payload["contains"] == []

    @pytest.mark.unit
    def test_payload_override(self):
        event = WebhookFactory.create_event("payment.captured", payload={"account_id": "acc_X"})
        assert event.payload["account_id"] == "acc_X"

    @pytest.mark.unit
    def test_create_event_generates_unique_ids(self):
        e1 = WebhookFactory.create_event("payment.captured")
        e2 = WebhookFactory.create_event("payment.captured")
        assert e1.event_id != e2.event_id
        assert e1.payment_id != e2.payment_id

    @pytest.mark.unit
    def test_encode_body_round_trips(self):
        event = WebhookFactory.create_event("payment.captured")
        assert json.loads(encode_body(event.payload)) == event.payload
