import logging
from decimal import Decimal
from enum import Enum

from src.ledger.reconciler import LedgerReconciler
from src.models.webhook import WebhookEnvelope

logger = logging.getLogger(__name__)

SUBUNITS_PER_UNIT = Decimal(100)

PAYMENT_CAPTURED = "payment.captured"
PAYMENT_AUTHORIZED = "payment.authorized"
PAYMENT_FAILED = "payment.failed"

# Events we log but which carry no funds obligation
_OBSERVED_EVENTS = {PAYMENT_AUTHORIZED, PAYMENT_FAILED}


class DispatchOutcome(Enum):
    CREDITED = "credited"
    DUPLICATE = "duplicate"
    OBSERVED = "observed"
    IGNORED = "ignored"
    UNATTRIBUTED = "unattributed"


def subunits_to_major(amount: int) -> Decimal:
    return Decimal(amount) / SUBUNITS_PER_UNIT


class EventDispatcher:
    """Routes decoded envelopes by event tag."""

    def __init__(self, reconciler: LedgerReconciler):
        self.reconciler = reconciler

    def dispatch(self, envelope: WebhookEnvelope) -> DispatchOutcome:
        if envelope.event == PAYMENT_CAPTURED:
            return self._handle_capture(envelope)

        if envelope.event in _OBSERVED_EVENTS:
            payment = envelope.payment
            logger.info(
                "Observed %s for payment %s (no ledger change)",
                envelope.event,
                payment.id if payment else None,
            )
            return DispatchOutcome.OBSERVED

        logger.info("Ignoring unhandled event type %s", envelope.event)
        return DispatchOutcome.IGNORED

    def _handle_capture(self, envelope: WebhookEnvelope) -> DispatchOutcome:
        payment = envelope.payment
        if payment is None or payment.id is None:
            logger.warning("Capture event %s has no payment id, acknowledging", envelope.event_id)
            return DispatchOutcome.UNATTRIBUTED

        user_id = payment.user_id
        if user_id is None:
            logger.warning("Payment %s has no user_id in notes, cannot attribute", payment.id)
            return DispatchOutcome.UNATTRIBUTED

        if payment.amount is None or payment.amount < 0:
            logger.warning(
                "Payment %s for %s has unusable amount %r, cannot credit",
                payment.id, user_id, payment.amount,
            )
            return DispatchOutcome.UNATTRIBUTED

        result = self.reconciler.apply_credit(user_id, payment.id, subunits_to_major(payment.amount))
        return DispatchOutcome.CREDITED if result.applied else DispatchOutcome.DUPLICATE
