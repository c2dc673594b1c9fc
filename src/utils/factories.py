import json
import uuid
from datetime import datetime, timezone

from src.models.webhook import WebhookEvent


class WebhookFactory:
    """Factory for Razorpay-shaped WebhookEvent instances with sensible defaults."""

    @staticmethod
    def create_event(event_type: str = "payment.captured", **overrides) -> WebhookEvent:
        payment_id = overrides.pop("payment_id", f"pay_{uuid.uuid4().hex[:14]}")
        now = datetime.now(timezone.utc)

        payload = WebhookFactory._build_payload(event_type, payment_id, now, **overrides)
        payload_overrides = overrides.pop("payload", None)
        if payload_overrides:
            payload.update(payload_overrides)

        defaults = {
            "event_id": f"evt_{uuid.uuid4().hex[:14]}",
            "payment_id": payment_id,
            "event_type": event_type,
            "timestamp": now,
            "payload": payload,
            "signature": "",
        }
        for key in list(overrides):
            if key in defaults:
                defaults[key] = overrides.pop(key)

        return WebhookEvent(**defaults)

    @staticmethod
    def create_capture(user_id: str | None, amount: int, payment_id: str | None = None) -> WebhookEvent:
        """Shortcut for a payment.captured event attributed to user_id."""
        kwargs = {"amount": amount, "user_id": user_id}
        if payment_id is not None:
            kwargs["payment_id"] = payment_id
        return WebhookFactory.create_event("payment.captured", **kwargs)

    @staticmethod
    def _build_payload(event_type: str, payment_id: str, timestamp: datetime, **kwargs) -> dict:
        base = {
            "entity": "event",
            "account_id": kwargs.get("account_id", "acc_TestAccount0001"),
            "event": event_type,
            "contains": [],
            "payload": {},
            "created_at": int(timestamp.timestamp()),
        }
        if not event_type.startswith("payment."):
            return base

        notes = dict(kwargs.get("notes", {}))
        user_id = kwargs.get("user_id", "user123")
        if user_id is not None:
            notes.setdefault("user_id", user_id)

        entity = {
            "id": payment_id,
            "entity": "payment",
            "amount": kwargs.get("amount", 10000),
            "currency": kwargs.get("currency", "INR"),
            "status": _event_type_to_status(event_type),
            "order_id": kwargs.get("order_id", f"order_{uuid.uuid4().hex[:14]}"),
            "method": kwargs.get("method", "upi"),
            # Razorpay sends an empty list, not an object, when there are no notes
            "notes": notes or [],
            "created_at": int(timestamp.timestamp()),
        }
        if event_type == "payment.failed":
            entity["error_code"] = kwargs.get("error_code", "BAD_REQUEST_ERROR")
            entity["error_description"] = kwargs.get("error_description", "Payment failed")

        base["contains"] = ["payment"]
        base["payload"] = {"payment": {"entity": entity}}
        return base


def encode_body(payload: dict) -> bytes:
    """Serialize a payload the way it goes over the wire."""
    return json.dumps(payload, default=str).encode("utf-8")


def _event_type_to_status(event_type: str) -> str:
    mapping = {
        "payment.authorized": "authorized",
        "payment.captured": "captured",
        "payment.failed": "failed",
    }
    return mapping.get(event_type, "created")
