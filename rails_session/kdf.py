"""PBKDF2 key derivation matching the framework's cookie key generator."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import DerivationError

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 1000
SIGNATURE_SECRET_LENGTH = 64
ENCRYPTION_SECRET_LENGTH = 32

DEFAULT_SIGNATURE_SALT = "signed encrypted cookie"
DEFAULT_ENCRYPTION_SALT = "encrypted cookie"


@dataclass(frozen=True)
class CookieSecrets:
    """The pair of derived secrets used by a codec."""

    signature_secret: bytes
    encryption_secret: bytes

    def __repr__(self) -> str:
        return "CookieSecrets(<redacted>)"


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def derive_key(base_secret: str | bytes, salt: str | bytes, length: int) -> bytes:
    """Derive ``length`` bytes from ``base_secret`` using PBKDF2-HMAC-SHA1.

    The iteration count is fixed at 1000 to match cookies issued by the
    framework. An empty ``base_secret`` is accepted; judging secret strength is
    left to the caller.
    """

    if length <= 0:
        raise DerivationError(f"Derived key length must be positive, got {length}")
    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA1(),
            length=length,
            salt=_to_bytes(salt),
            iterations=PBKDF2_ITERATIONS,
        )
        return kdf.derive(_to_bytes(base_secret))
    except (UnsupportedAlgorithm, ValueError, TypeError) as exc:
        raise DerivationError(f"PBKDF2 derivation failed: {exc}") from exc


def derive_cookie_secrets(
    base_secret: str | bytes,
    signature_salt: str | bytes = DEFAULT_SIGNATURE_SALT,
    encryption_salt: str | bytes = DEFAULT_ENCRYPTION_SALT,
) -> CookieSecrets:
    """Derive the signature and encryption secrets for ``base_secret``."""

    secrets = CookieSecrets(
        signature_secret=derive_key(base_secret, signature_salt, SIGNATURE_SECRET_LENGTH),
        encryption_secret=derive_key(base_secret, encryption_salt, ENCRYPTION_SECRET_LENGTH),
    )
    logger.debug("Derived cookie secrets using PBKDF2-HMAC-SHA1")
    return secrets
