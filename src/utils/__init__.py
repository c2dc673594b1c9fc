from .crypto import compute_signature, verify_signature
from .factories import WebhookFactory, encode_body

__all__ = [
    "compute_signature", "verify_signature",
    "WebhookFactory", "encode_body",
]
