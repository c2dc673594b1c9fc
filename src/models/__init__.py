from .webhook import PaymentEntity, WebhookEnvelope, WebhookEvent
from .ledger import CreditResult, LedgerRecord
from .delivery import DeliveryAttempt, DeliveryStatus

__all__ = [
    "PaymentEntity", "WebhookEnvelope", "WebhookEvent",
    "CreditResult", "LedgerRecord",
    "DeliveryAttempt", "DeliveryStatus",
]
