"""Wire framing for session cookies.

A cookie nests two frames joined by the ``--`` delimiter::

    base64(base64(ciphertext) "--" base64(iv)) "--" hex_digest

Segment order is fixed at both levels. Swapping it still produces a
well-formed frame that no peer can decrypt.
"""

from __future__ import annotations

import base64
import binascii
from typing import Tuple

from .errors import DecodeError, FrameError

DELIMITER = "--"


def combine(first: str, second: str) -> str:
    return f"{first}{DELIMITER}{second}"


def split(frame: str) -> Tuple[str, str]:
    """Split ``frame`` into its two segments.

    Exactly one delimiter and two non-empty segments are required.
    """

    if not isinstance(frame, str):
        raise FrameError(f"Expected a frame string, got {type(frame).__name__}")
    parts = frame.split(DELIMITER)
    if len(parts) != 2:
        raise FrameError(f"Expected 2 frame segments, found {len(parts)}")
    first, second = parts
    if not first or not second:
        raise FrameError("Frame segment is empty")
    return first, second


def encode_segment(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_segment(segment: str) -> bytes:
    """Decode a standard-alphabet, padded base64 segment."""

    try:
        return base64.b64decode(segment.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise DecodeError(f"Invalid base64 segment: {exc}") from exc


def pack_inner(ciphertext: bytes, iv: bytes) -> str:
    return combine(encode_segment(ciphertext), encode_segment(iv))


def unpack_inner(inner: str) -> Tuple[bytes, bytes]:
    """Return ``(ciphertext, iv)`` from an inner frame."""

    ciphertext_segment, iv_segment = split(inner)
    return decode_segment(ciphertext_segment), decode_segment(iv_segment)


def wrap_blob(inner: str) -> str:
    return encode_segment(inner.encode("ascii"))


def unwrap_blob(blob: str) -> str:
    """Recover the inner frame text from the signed blob."""

    raw = decode_segment(blob)
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError as exc:
        raise DecodeError("Signed blob does not decode to an ASCII frame") from exc
