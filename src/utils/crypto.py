import hashlib
import hmac


def compute_signature(body: bytes, secret: str) -> str:
    """HMAC-SHA256 hex digest over the exact request body bytes.

    The body must be the untouched wire bytes. Hashing a re-serialized
    JSON document is not equivalent: key order, whitespace and number
    formatting all change the digest.
    """
    if not isinstance(body, (bytes, bytearray)):
        raise TypeError(f"body must be bytes, got {type(body).__name__}")
    return hmac.new(
        secret.encode("utf-8"),
        bytes(body),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(body: bytes, secret: str, signature: str) -> bool:
    """Constant-time comparison of the expected digest against a supplied one."""
    expected = compute_signature(body, secret)
    return hmac.compare_digest(expected.encode("ascii"), signature.strip().encode("utf-8"))
