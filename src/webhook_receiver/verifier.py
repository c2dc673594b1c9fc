import logging
from enum import Enum

from src.errors import AuthenticationFailure, ConfigurationFault
from src.utils.crypto import verify_signature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-razorpay-signature"


class VerificationResult(Enum):
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class SignatureVerifier:
    """Checks the processor's HMAC-SHA256 signature over the raw request body."""

    def __init__(self, secret: str | None):
        self._secret = secret

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def ensure_configured(self) -> None:
        if not self._secret:
            logger.error("Webhook secret is not configured; every delivery will fail")
            raise ConfigurationFault("webhook secret is not configured")

    def verify(self, body: bytes, signature: str | None) -> VerificationResult:
        """Verify signature against the untouched body bytes.

        Raises:
            ConfigurationFault: no secret configured.
        """
        self.ensure_configured()
        if not signature or not signature.strip():
            return VerificationResult.REJECTED
        if not body:
            return VerificationResult.REJECTED
        if verify_signature(body, self._secret, signature):
            return VerificationResult.VERIFIED
        return VerificationResult.REJECTED

    def authenticate(self, body: bytes, signature: str | None) -> None:
        """Like verify(), but a rejection raises AuthenticationFailure."""
        if self.verify(body, signature) is not VerificationResult.VERIFIED:
            raise AuthenticationFailure("invalid signature")
