"""Webhook endpoint controller.

Per delivery:

    received -> verify -> decode -> dispatch -> 200
                  |         |          |
        400 (rejected)  400 (bad   500 (store failure,
        500 (no secret)  payload)   unexpected error)

Nothing is kept between requests; all durable state is in the ledger store.
A 5xx makes the processor redeliver later; crediting is idempotent per
payment id.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from src.errors import AuthenticationFailure, ConfigurationFault, DecodeError, StoreFailure
from src.webhook_receiver.decoder import decode_envelope
from src.webhook_receiver.dispatcher import EventDispatcher
from src.webhook_receiver.verifier import SIGNATURE_HEADER, SignatureVerifier

logger = logging.getLogger(__name__)

EVENT_ID_HEADER = "x-razorpay-event-id"


@dataclass(frozen=True)
class WebhookResponse:
    status_code: int
    body: dict = field(default_factory=dict)


def _bad_request(reason: str) -> WebhookResponse:
    return WebhookResponse(400, {"error": reason})


class WebhookController:
    def __init__(self, verifier: SignatureVerifier, dispatcher: EventDispatcher):
        self.verifier = verifier
        self.dispatcher = dispatcher

    def handle(self, body: bytes, headers: Mapping[str, str]) -> WebhookResponse:
        """Run one delivery through the pipeline. Never raises."""
        lowered = {k.lower(): v for k, v in headers.items()}
        signature = lowered.get(SIGNATURE_HEADER)
        event_id = lowered.get(EVENT_ID_HEADER)

        if not signature or not signature.strip():
            logger.warning("Rejected webhook %s: missing signature", event_id)
            return _bad_request("missing signature")
        if not body:
            logger.warning("Rejected webhook %s: empty body", event_id)
            return _bad_request("empty body")

        try:
            self.verifier.authenticate(body, signature)
        except ConfigurationFault:
            logger.exception("Cannot verify webhook %s", event_id)
            return WebhookResponse(500, {"error": "server misconfigured"})
        except AuthenticationFailure as exc:
            logger.warning("Rejected webhook %s: %s", event_id, exc)
            return _bad_request(str(exc))

        try:
            envelope = decode_envelope(body, event_id=event_id)
        except DecodeError as exc:
            logger.warning(
                "Rejected webhook %s: %s (%d bytes)", event_id, exc.reason, len(body),
            )
            return _bad_request(exc.reason)

        try:
            outcome = self.dispatcher.dispatch(envelope)
        except StoreFailure:
            logger.exception("Ledger store failed while handling %s %s", envelope.event, event_id)
            return WebhookResponse(500, {"error": "internal error"})
        except Exception:
            logger.exception("Unexpected failure while handling %s %s", envelope.event, event_id)
            return WebhookResponse(500, {"error": "internal error"})

        logger.info("Webhook %s %s handled: %s", envelope.event, event_id, outcome.value)
        return WebhookResponse(200, {"status": "ok", "outcome": outcome.value})
