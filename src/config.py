import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class ReceiverConfig:
    """Settings handed to the receiver components at construction time."""

    webhook_secret: str | None = None
    host: str = "0.0.0.0"
    port: int = 4000
    ledger_backend: str = "memory"
    ledger_collection: str = "users"
    max_write_attempts: int = 10
    payment_history_size: int = 100
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ReceiverConfig":
        """Build a config from environment variables.

        When no mapping is given, a local .env file is loaded first and
        os.environ is used.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        backend = environ.get("LEDGER_BACKEND", "memory").strip().lower()
        if backend not in ("memory", "firestore"):
            raise ValueError(f"LEDGER_BACKEND must be 'memory' or 'firestore', got {backend!r}")

        return cls(
            webhook_secret=environ.get("RAZORPAY_WEBHOOK_SECRET") or None,
            host=environ.get("HOST", "0.0.0.0"),
            port=_int_setting(environ, "PORT", 4000),
            ledger_backend=backend,
            ledger_collection=environ.get("LEDGER_COLLECTION", "users"),
            max_write_attempts=_int_setting(environ, "LEDGER_MAX_WRITE_ATTEMPTS", 10),
            payment_history_size=_int_setting(environ, "LEDGER_PAYMENT_HISTORY_SIZE", 100),
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        )
