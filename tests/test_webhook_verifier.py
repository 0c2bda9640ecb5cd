import hashlib
import hmac

import pytest

from salla_sdk.errors import SignatureInvalidError
from salla_sdk.webhook.verifier import (
    extract_signature,
    require_valid_signature,
    sign_payload,
    verify_signature,
)

BODY = b'{"event":"product.created","merchant":12345,"data":{"id":1,"name":"Test"}}'


def _hmac(secret: str, body: bytes) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def test_correct_signature_accepted():
    for secret, body in [("s3cret", BODY), ("another-key", b""), ("k", b"\x00\xff binary")]:
        assert verify_signature(secret, body, _hmac(secret, body))


def test_sign_payload_matches_hmac():
    assert sign_payload("s3cret", BODY) == _hmac("s3cret", BODY)


def test_wrong_signature_rejected():
    good = _hmac("s3cret", BODY)
    for bad in ["", "invalid", good.upper(), good[:-1], good + "0", _hmac("other", BODY)]:
        assert not verify_signature("s3cret", BODY, bad)


def test_signature_over_modified_body_rejected():
    sig = _hmac("s3cret", BODY)
    assert not verify_signature("s3cret", BODY + b" ", sig)


def test_missing_signature_rejected():
    assert not verify_signature("s3cret", BODY, None)


def test_non_ascii_signature_does_not_raise():
    assert not verify_signature("s3cret", BODY, "ṡïġñåţüŕë")


def test_empty_secret_accepts_anything():
    for sig in ["", "invalid", None, _hmac("x", BODY)]:
        assert verify_signature("", BODY, sig)
        assert verify_signature(None, BODY, sig)


def test_extract_signature_prefers_x_signature():
    assert extract_signature({"X-Signature": "abc", "Authorization": "def"}) == "abc"


def test_extract_signature_falls_back_to_authorization():
    assert extract_signature({"authorization": "def"}) == "def"


def test_extract_signature_missing():
    assert extract_signature({"Content-Type": "application/json"}) is None


def test_require_valid_signature_raises():
    with pytest.raises(SignatureInvalidError):
        require_valid_signature("s3cret", BODY, {"X-Signature": "nope"})
    require_valid_signature("s3cret", BODY, {"X-Signature": _hmac("s3cret", BODY)})
    require_valid_signature("", BODY, {})
