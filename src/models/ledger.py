from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

CENT = Decimal("0.01")


def to_major_units(value) -> Decimal:
    """Normalize a stored numeric value to a two-decimal Decimal."""
    if isinstance(value, Decimal):
        return value.quantize(CENT)
    return Decimal(str(value)).quantize(CENT)


@dataclass(frozen=True)
class LedgerRecord:
    """Per-user balance document."""

    balance: Decimal
    total_top_up: Decimal
    last_payment_id: str | None = None
    applied_payment_ids: tuple[str, ...] = ()
    updated_at: datetime | None = None

    def has_applied(self, payment_id: str) -> bool:
        return payment_id == self.last_payment_id or payment_id in self.applied_payment_ids

    def to_document(self) -> dict:
        return {
            "balance": float(self.balance),
            "totalTopUp": float(self.total_top_up),
            "lastPaymentId": self.last_payment_id,
            "appliedPaymentIds": list(self.applied_payment_ids),
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "LedgerRecord":
        applied = doc.get("appliedPaymentIds") or []
        return cls(
            balance=to_major_units(doc.get("balance", 0)),
            total_top_up=to_major_units(doc.get("totalTopUp", 0)),
            last_payment_id=doc.get("lastPaymentId"),
            applied_payment_ids=tuple(str(p) for p in applied),
            updated_at=doc.get("updatedAt"),
        )


@dataclass(frozen=True)
class CreditResult:
    applied: bool  # False when the payment had already been credited
    record: LedgerRecord = field(compare=False)
