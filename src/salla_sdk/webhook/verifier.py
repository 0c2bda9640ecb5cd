import hashlib
import hmac
from collections.abc import Mapping

from salla_sdk.errors import SignatureInvalidError

SIGNATURE_HEADER = "X-Signature"
FALLBACK_SIGNATURE_HEADER = "Authorization"


def sign_payload(secret: str, body: bytes) -> str:
    """Hex HMAC-SHA256 of the raw body, as Salla puts it in X-Signature."""
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def verify_signature(secret: str | None, body: bytes, signature: str | None) -> bool:
    """Verify a Salla webhook HMAC-SHA256 signature.

    With no secret configured every request is accepted (open mode).
    """
    if not secret:
        return True
    if not signature:
        return False
    expected = sign_payload(secret, body)
    # Compare as bytes: compare_digest rejects non-ASCII str with TypeError
    return hmac.compare_digest(expected.encode(), signature.encode("utf-8", "surrogateescape"))


def extract_signature(headers: Mapping[str, str]) -> str | None:
    """Signature from X-Signature, falling back to Authorization."""
    lowered = {k.lower(): v for k, v in headers.items()}
    return lowered.get(SIGNATURE_HEADER.lower()) or lowered.get(FALLBACK_SIGNATURE_HEADER.lower())


def require_valid_signature(secret: str | None, body: bytes, headers: Mapping[str, str]) -> None:
    """Raise SignatureInvalidError unless the request headers carry a valid signature."""
    if not verify_signature(secret, body, extract_signature(headers)):
        raise SignatureInvalidError("Invalid signature")
