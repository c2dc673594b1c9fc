"""Error taxonomy for the webhook-to-ledger pipeline.

Only the webhook controller maps these onto HTTP status codes; everything
below it raises and lets the exception travel up.
"""


class LedgerWebhookError(Exception):
    """Base class for all pipeline errors."""


class AuthenticationFailure(LedgerWebhookError):
    """Signature header missing or digest mismatch (client error, 400)."""


class ConfigurationFault(LedgerWebhookError):
    """The service itself is misconfigured, e.g. no webhook secret (500)."""


class DecodeError(LedgerWebhookError):
    """Verified body is not a usable webhook envelope (client error, 400)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class StoreFailure(LedgerWebhookError):
    """Ledger store unavailable or write conflicts exhausted (500, processor retries)."""


class WriteConflict(LedgerWebhookError):
    """A conditional write lost against a concurrent writer. Retried by the store."""
