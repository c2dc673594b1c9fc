from src.config import ReceiverConfig
from src.ledger.reconciler import LedgerReconciler
from src.ledger.store import InMemoryLedgerStore, LedgerStore

from .controller import WebhookController, WebhookResponse
from .dispatcher import DispatchOutcome, EventDispatcher
from .server import LedgerWebhookServer
from .verifier import SignatureVerifier, VerificationResult


def build_controller(config: ReceiverConfig, store: LedgerStore) -> WebhookController:
    """Wire verifier, reconciler and dispatcher from an explicit config."""
    reconciler = LedgerReconciler(store, payment_history_size=config.payment_history_size)
    return WebhookController(
        verifier=SignatureVerifier(config.webhook_secret),
        dispatcher=EventDispatcher(reconciler),
    )


def build_store(config: ReceiverConfig) -> LedgerStore:
    if config.ledger_backend == "firestore":
        from src.ledger.firestore_store import FirestoreLedgerStore

        return FirestoreLedgerStore(
            collection=config.ledger_collection,
            max_write_attempts=config.max_write_attempts,
        )
    return InMemoryLedgerStore(max_write_attempts=config.max_write_attempts)


__all__ = [
    "WebhookController", "WebhookResponse",
    "DispatchOutcome", "EventDispatcher",
    "LedgerWebhookServer",
    "SignatureVerifier", "VerificationResult",
    "build_controller", "build_store",
]
