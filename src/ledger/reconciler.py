import logging
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

from src.ledger.store import LedgerStore
from src.models.ledger import CreditResult, LedgerRecord, to_major_units

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerReconciler:
    """Applies captured payments to per-user ledger records exactly once.

    A payment counts as applied when it is the record's last_payment_id or
    one of the most recent ``payment_history_size`` ids kept alongside it.
    The check and the write happen inside a single store.update() so a
    concurrent redelivery cannot slip between them.
    """

    def __init__(
        self,
        store: LedgerStore,
        payment_history_size: int = 100,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if payment_history_size < 1:
            raise ValueError("payment_history_size must be at least 1")
        self.store = store
        self.payment_history_size = payment_history_size
        self._clock = clock

    def apply_credit(self, user_id: str, payment_id: str, amount: Decimal) -> CreditResult:
        if not user_id:
            raise ValueError("user_id is required")
        if not payment_id:
            raise ValueError("payment_id is required")
        amount = to_major_units(amount)
        if amount < 0:
            raise ValueError(f"credit amount must not be negative, got {amount}")

        duplicate = False

        def credit(current: LedgerRecord | None) -> LedgerRecord | None:
            nonlocal duplicate
            if current is not None and current.has_applied(payment_id):
                duplicate = True
                return None
            duplicate = False
            if current is None:
                return LedgerRecord(
                    balance=amount,
                    total_top_up=amount,
                    last_payment_id=payment_id,
                    applied_payment_ids=(payment_id,),
                    updated_at=self._clock(),
                )
            history = current.applied_payment_ids + (payment_id,)
            return LedgerRecord(
                balance=current.balance + amount,
                total_top_up=current.total_top_up + amount,
                last_payment_id=payment_id,
                applied_payment_ids=history[-self.payment_history_size:],
                updated_at=self._clock(),
            )

        record = self.store.update(user_id, credit)

        if duplicate:
            logger.info("Payment %s already credited to %s, skipping", payment_id, user_id)
            return CreditResult(applied=False, record=record)

        logger.info(
            "Credited %s to %s for payment %s (balance now %s)",
            amount, user_id, payment_id, record.balance,
        )
        return CreditResult(applied=True, record=record)
