import pytest

from src.config import ReceiverConfig
from src.ledger.store import InMemoryLedgerStore
from src.webhook_receiver import build_store


class TestFromEnv:

    @pytest.mark.unit
    def test_defaults(self):
        config = ReceiverConfig.from_env({})
        assert config.webhook_secret is None
        assert config.host == "0.0.0.0"
        assert config.port == 4000
        assert config.ledger_backend == "memory"
        assert config.ledger_collection == "users"
        assert config.max_write_attempts == 10
        assert config.payment_history_size == 100
        assert config.log_level == "INFO"

    @pytest.mark.unit
    def test_reads_every_variable(self):
        config = ReceiverConfig.from_env({
            "RAZORPAY_WEBHOOK_SECRET": "s3cret",
            "HOST": "127.0.0.1",
            "PORT": "8080",
            "LEDGER_BACKEND": "Firestore",
            "LEDGER_COLLECTION": "wallets",
            "LEDGER_MAX_WRITE_ATTEMPTS": "5",
            "LEDGER_PAYMENT_HISTORY_SIZE": "20",
            "LOG_LEVEL": "debug",
        })
        assert config == ReceiverConfig(
            webhook_secret="s3cret",
            host="127.0.0.1",
            port=8080,
            ledger_backend="firestore",
            ledger_collection="wallets",
            max_write_attempts=5,
            payment_history_size=20,
            log_level="DEBUG",
        )

    @pytest.mark.unit
    def test_empty_secret_means_unset(self):
        assert ReceiverConfig.from_env({"RAZORPAY_WEBHOOK_SECRET": ""}).webhook_secret is None

    @pytest.mark.unit
    def test_invalid_integer_names_the_variable(self):
        with pytest.raises(ValueError, match="PORT"):
            ReceiverConfig.from_env({"PORT": "http"})

    @pytest.mark.unit
    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError, match="LEDGER_BACKEND"):
            ReceiverConfig.from_env({"LEDGER_BACKEND": "redis"})

    @pytest.mark.unit
    def test_memory_backend_builds_in_memory_store(self):
        store = build_store(ReceiverConfig(max_write_attempts=4))
        assert isinstance(store, InMemoryLedgerStore)
        assert store.max_write_attempts == 4
