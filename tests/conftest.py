from datetime import datetime, timezone

import pytest

from src.config import ReceiverConfig
from src.ledger.reconciler import LedgerReconciler
from src.ledger.store import InMemoryLedgerStore
from src.utils.factories import WebhookFactory
from src.webhook_receiver import build_controller
from src.webhook_receiver.dispatcher import EventDispatcher
from src.webhook_receiver.server import LedgerWebhookServer
from src.webhook_receiver.verifier import SignatureVerifier
from src.webhook_simulator.engine import WebhookDeliveryEngine
from src.webhook_simulator.logger import DeliveryLogger
from src.webhook_simulator.retry import RetryManager
from src.webhook_simulator.signer import WebhookSigner


WEBHOOK_SECRET = "test-secret-key-for-hmac"
FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def signer():
    return WebhookSigner(WEBHOOK_SECRET)


@pytest.fixture
def verifier():
    return SignatureVerifier(WEBHOOK_SECRET)


@pytest.fixture
def store():
    return InMemoryLedgerStore()


@pytest.fixture
def reconciler(store):
    return LedgerReconciler(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def dispatcher(reconciler):
    return EventDispatcher(reconciler)


@pytest.fixture
def config():
    return ReceiverConfig(webhook_secret=WEBHOOK_SECRET)


@pytest.fixture
def controller(config, store):
    return build_controller(config, store)


@pytest.fixture
def retry_manager():
    return RetryManager()


@pytest.fixture
def logger():
    return DeliveryLogger()


@pytest.fixture
def engine(signer, retry_manager, logger):
    return WebhookDeliveryEngine(
        signer=signer,
        retry_manager=retry_manager,
        logger=logger,
        timeout_seconds=5,
    )


@pytest.fixture
def ledger_server(controller):
    server = LedgerWebhookServer(controller)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def webhook_factory():
    return WebhookFactory
