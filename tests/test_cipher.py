import os

import pytest

from rails_session import cipher
from rails_session.errors import CipherError

KEY = bytes(range(32))
IV = bytes(range(16))


def test_encrypt_decrypt_round_trip() -> None:
    ciphertext = cipher.encrypt(KEY, IV, b'{"a":1}')

    assert len(ciphertext) == 16
    assert cipher.decrypt(KEY, IV, ciphertext) == b'{"a":1}'


def test_block_sized_plaintext_gets_full_padding_block() -> None:
    ciphertext = cipher.encrypt(KEY, IV, b"x" * 16)

    assert len(ciphertext) == 32
    assert cipher.decrypt(KEY, IV, ciphertext, unpad=False)[16:] == b"\x10" * 16


def test_generate_iv_is_random() -> None:
    assert len(cipher.generate_iv()) == 16
    assert cipher.generate_iv() != cipher.generate_iv()


@pytest.mark.parametrize("key", [b"", b"k" * 16, b"k" * 31, b"k" * 33])
def test_wrong_key_length_is_rejected(key: bytes) -> None:
    with pytest.raises(CipherError):
        cipher.encrypt(key, IV, b"data")


@pytest.mark.parametrize("iv", [b"", b"i" * 3, b"i" * 15, b"i" * 17])
def test_wrong_iv_length_is_rejected(iv: bytes) -> None:
    with pytest.raises(CipherError):
        cipher.decrypt(KEY, iv, b"c" * 16)


@pytest.mark.parametrize("length", [0, 3, 10, 17, 31])
def test_misaligned_ciphertext_is_rejected(length: int) -> None:
    with pytest.raises(CipherError):
        cipher.decrypt(KEY, IV, os.urandom(length))


def test_wrong_key_usually_fails_padding_check() -> None:
    ciphertext = cipher.encrypt(KEY, IV, b"x" * 15)
    raw = cipher.decrypt(bytes(32), IV, ciphertext, unpad=False)
    pad = raw[-1]
    valid_padding = 1 <= pad <= 16 and raw[-pad:] == bytes([pad]) * pad

    if not valid_padding:
        with pytest.raises(CipherError):
            cipher.decrypt(bytes(32), IV, ciphertext)


def test_strip_trailing_padding() -> None:
    assert cipher.strip_trailing_padding(b'{"a":1}' + b"\x00" * 8 + b"\x09") == b'{"a":1}'
    assert cipher.strip_trailing_padding(b"abc\x03\x03\x03") == b"abc"
    assert cipher.strip_trailing_padding(b"abc") == b"abc"
    assert cipher.strip_trailing_padding(b"") == b""
