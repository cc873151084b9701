"""HMAC-SHA1 signing of cookie payloads."""

from __future__ import annotations

import hmac

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac


def sign(data: bytes, secret: bytes) -> str:
    """Return the lowercase hex HMAC-SHA1 of ``data`` under ``secret``."""

    mac = crypto_hmac.HMAC(secret, hashes.SHA1())
    mac.update(data)
    return mac.finalize().hex()


def verify(data: bytes, claimed_digest: str, secret: bytes) -> bool:
    """Check ``claimed_digest`` against the digest of ``data``.

    The comparison runs in constant time with respect to the position of the
    first differing character. Digests of the wrong length or containing
    non-hex characters simply fail to verify.
    """

    expected = sign(data, secret).encode("ascii")
    return hmac.compare_digest(expected, claimed_digest.encode("utf-8", "surrogateescape"))
