from src.utils.crypto import compute_signature, verify_signature


class WebhookSigner:
    """Signs and verifies webhook bodies the way the processor does (HMAC-SHA256 over wire bytes)."""

    def __init__(self, secret: str):
        self.secret = secret

    def sign(self, body: bytes) -> str:
        return compute_signature(body, self.secret)

    def verify(self, body: bytes, signature: str) -> bool:
        return verify_signature(body, self.secret, signature)
