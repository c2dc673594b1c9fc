from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class WebhookEvent:
    """Outbound event as the payment processor would send it."""

    event_id: str
    payment_id: str
    event_type: str  # "payment.captured", "payment.authorized", etc.
    timestamp: datetime
    payload: dict
    signature: str = ""


@dataclass(frozen=True)
class PaymentEntity:
    """Payment fields of a decoded envelope. Every field may be absent."""

    id: str | None = None
    amount: int | None = None  # smallest currency subunit
    currency: str | None = None
    status: str | None = None
    notes: dict[str, str] = field(default_factory=dict)

    @property
    def user_id(self) -> str | None:
        user_id = self.notes.get("user_id")
        return user_id or None


@dataclass(frozen=True)
class WebhookEnvelope:
    event: str
    payment: PaymentEntity | None = None
    event_id: str | None = None
