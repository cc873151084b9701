"""AES-256-CBC encryption of serialized sessions."""

from __future__ import annotations

import logging
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import CipherError

logger = logging.getLogger(__name__)

KEY_SIZE = 32
IV_SIZE = 16
BLOCK_SIZE = 16


def generate_iv() -> bytes:
    return os.urandom(IV_SIZE)


def _build_cipher(key: bytes, iv: bytes) -> Cipher:
    if len(key) != KEY_SIZE:
        raise CipherError(f"AES-256 key must be {KEY_SIZE} bytes, got {len(key)}")
    if len(iv) != IV_SIZE:
        raise CipherError(f"IV must be {IV_SIZE} bytes, got {len(iv)}")
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def encrypt(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    """Encrypt ``plaintext`` with PKCS#7 padding."""

    padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = _build_cipher(key, iv).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def decrypt(key: bytes, iv: bytes, ciphertext: bytes, *, unpad: bool = True) -> bytes:
    """Decrypt ``ciphertext`` and remove its PKCS#7 padding.

    With ``unpad=False`` the raw CBC plaintext is returned, padding included.
    """

    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise CipherError(
            f"Ciphertext length {len(ciphertext)} is not a positive multiple of {BLOCK_SIZE}"
        )
    decryptor = _build_cipher(key, iv).decryptor()
    try:
        padded = decryptor.update(ciphertext) + decryptor.finalize()
    except ValueError as exc:  # pragma: no cover - alignment is checked above
        raise CipherError(f"Decryption failed: {exc}") from exc
    if not unpad:
        return padded

    unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise CipherError("Invalid padding") from exc


def strip_trailing_padding(plaintext: bytes) -> bytes:
    """Truncate pad bytes from a raw plaintext without validating them.

    Older cookie readers decrypted without padding and dropped the tail using
    the value of the last byte. Values outside ``1..16`` leave the plaintext
    untouched.
    """

    if not plaintext:
        return plaintext
    count = plaintext[-1]
    if 1 <= count <= BLOCK_SIZE and count <= len(plaintext):
        return plaintext[:-count]
    logger.debug("Legacy plaintext has no recognizable padding tail")
    return plaintext
