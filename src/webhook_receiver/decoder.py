"""Decoding of verified webhook bodies into WebhookEnvelope values.

Only ``event`` is mandatory. The payment entity is untrusted: each field is
decoded on its own and anything of the wrong shape becomes ``None`` rather
than an error, so a sloppy optional field never fails a delivery.
"""

import json
import logging
from typing import Any

from src.errors import DecodeError
from src.models.webhook import PaymentEntity, WebhookEnvelope

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _optional_amount(value: Any) -> int | None:
    # bool is an int subclass; True is not an amount
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    # ASCII digits only; str.isdigit also admits superscripts int() refuses
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


def _decode_notes(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    notes = {}
    for key, item in value.items():
        if isinstance(key, str) and isinstance(item, (str, int, float)) and not isinstance(item, bool):
            notes[key] = str(item)
    return notes


def _find_payment(document: dict) -> dict | None:
    # Razorpay nests the entity under payload.payment.entity
    payload = document.get("payload")
    if isinstance(payload, dict):
        payment = payload.get("payment")
        if isinstance(payment, dict):
            entity = payment.get("entity")
            if isinstance(entity, dict):
                return entity
    payment = document.get("payment")
    if isinstance(payment, dict):
        entity = payment.get("entity")
        return entity if isinstance(entity, dict) else payment
    return None


def decode_payment(raw: dict) -> PaymentEntity:
    return PaymentEntity(
        id=_optional_str(raw.get("id")),
        amount=_optional_amount(raw.get("amount")),
        currency=_optional_str(raw.get("currency")),
        status=_optional_str(raw.get("status")),
        notes=_decode_notes(raw.get("notes")),
    )


def decode_envelope(body: bytes, event_id: str | None = None) -> WebhookEnvelope:
    """Parse verified body bytes into an envelope.

    Raises:
        DecodeError: body is not UTF-8 JSON, not an object, or has no event tag.
    """
    try:
        document = json.loads(body.decode("utf-8"))
    except UnicodeDecodeError:
        raise DecodeError("body is not valid UTF-8") from None
    except (json.JSONDecodeError, RecursionError):
        raise DecodeError("invalid JSON") from None

    if not isinstance(document, dict):
        raise DecodeError("payload must be a JSON object")

    event = document.get("event")
    if not isinstance(event, str) or not event.strip():
        raise DecodeError("missing event")

    raw_payment = _find_payment(document)
    payment = decode_payment(raw_payment) if raw_payment is not None else None

    return WebhookEnvelope(event=event.strip(), payment=payment, event_id=event_id or None)
