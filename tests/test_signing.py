import hashlib
import hmac

from rails_session.signing import sign, verify

SECRET = b"k" * 64


def test_sign_matches_hmac_sha1_hex() -> None:
    expected = hmac.new(SECRET, b"payload", hashlib.sha1).hexdigest()

    assert sign(b"payload", SECRET) == expected
    assert sign(b"payload", SECRET) == sign(b"payload", SECRET).lower()
    assert len(sign(b"payload", SECRET)) == 40


def test_verify_accepts_matching_digest() -> None:
    digest = sign(b"payload", SECRET)

    assert verify(b"payload", digest, SECRET) is True


def test_verify_rejects_other_data_and_secret() -> None:
    digest = sign(b"payload", SECRET)

    assert verify(b"payload!", digest, SECRET) is False
    assert verify(b"payload", digest, b"other") is False


def test_verify_returns_false_for_malformed_digests() -> None:
    digest = sign(b"payload", SECRET)

    assert verify(b"payload", "", SECRET) is False
    assert verify(b"payload", digest[:-1], SECRET) is False
    assert verify(b"payload", digest + "0", SECRET) is False
    assert verify(b"payload", "zz" * 20, SECRET) is False
    assert verify(b"payload", "é" * 40, SECRET) is False
    assert verify(b"payload", digest.upper(), SECRET) is False
