"""Unit tests for PBKDF2 cookie secret derivation."""

from __future__ import annotations

import pytest

from rails_session.errors import DerivationError
from rails_session.kdf import (
    DEFAULT_ENCRYPTION_SALT,
    DEFAULT_SIGNATURE_SALT,
    derive_cookie_secrets,
    derive_key,
)


def test_derive_key_is_deterministic() -> None:
    key_one = derive_key("super secret", DEFAULT_SIGNATURE_SALT, 64)
    key_two = derive_key("super secret", DEFAULT_SIGNATURE_SALT, 64)

    assert key_one == key_two
    assert len(key_one) == 64


def test_derive_key_accepts_bytes_and_str_equivalently() -> None:
    assert derive_key("abcd", "encrypted cookie", 32) == derive_key(b"abcd", b"encrypted cookie", 32)


def test_shorter_key_is_prefix_of_longer_key() -> None:
    long_key = derive_key("abcd", DEFAULT_ENCRYPTION_SALT, 64)
    short_key = derive_key("abcd", DEFAULT_ENCRYPTION_SALT, 32)

    assert short_key == long_key[:32]


def test_salts_produce_independent_keys() -> None:
    secrets = derive_cookie_secrets("abcd")

    assert len(secrets.signature_secret) == 64
    assert len(secrets.encryption_secret) == 32
    assert secrets.signature_secret[:32] != secrets.encryption_secret


def test_empty_base_secret_still_derives() -> None:
    assert len(derive_key("", DEFAULT_SIGNATURE_SALT, 64)) == 64


def test_non_positive_length_is_rejected() -> None:
    with pytest.raises(DerivationError):
        derive_key("abcd", DEFAULT_SIGNATURE_SALT, 0)


def test_cookie_secrets_repr_hides_material() -> None:
    secrets = derive_cookie_secrets("abcd")

    assert secrets.signature_secret.hex() not in repr(secrets)
    assert "redacted" in repr(secrets)
