"""Exception hierarchy for the session cookie codec.

Every failure caused by the cookie itself derives from
:class:`InvalidSessionCookie`, so callers that only care whether a cookie is
usable can catch that one class. Failures that indicate a broken deployment
(derivation, configuration) derive from :class:`RailsSessionError` directly and
are never collapsed into "no session".
"""

from __future__ import annotations


class RailsSessionError(Exception):
    """Base class for all errors raised by :mod:`rails_session`."""


class DerivationError(RailsSessionError):
    """Raised when key material cannot be derived from the base secret."""


class ConfigurationError(RailsSessionError, RuntimeError):
    """Raised when configuration is invalid."""


class InvalidSessionCookie(RailsSessionError, ValueError):
    """Raised when a cookie value cannot be turned back into a session."""


class FrameError(InvalidSessionCookie):
    """Raised when a ``--`` delimited frame does not hold exactly two segments."""


class DecodeError(InvalidSessionCookie):
    """Raised when a frame segment is not valid base64."""


class DigestMismatch(InvalidSessionCookie):
    """Raised when the cookie digest does not match the signed payload."""


class CipherError(InvalidSessionCookie):
    """Raised when the ciphertext, key or IV cannot be decrypted."""


class DeserializeError(InvalidSessionCookie):
    """Raised when decrypted bytes are not a serialized session."""
