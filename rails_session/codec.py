"""Encrypted-and-signed session cookie codec.

:class:`SessionCodec` derives its secrets once at construction and then turns
session dictionaries into cookie values and back::

    codec = SessionCodec(secret_key_base)
    cookie = codec.encode({"user_id": 1})
    codec.decode(cookie)  # {"user_id": 1}

:meth:`SessionCodec.decode` never raises for a bad cookie; forged, truncated
or foreign cookies all come back as ``None``. :meth:`SessionCodec.load` runs the
same steps but raises the :class:`~rails_session.errors.InvalidSessionCookie`
subclass describing where decoding stopped.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import unquote as url_unquote

from . import cipher, framing, signing
from .errors import DeserializeError, DigestMismatch, InvalidSessionCookie
from .kdf import DEFAULT_ENCRYPTION_SALT, DEFAULT_SIGNATURE_SALT, CookieSecrets, derive_cookie_secrets

if TYPE_CHECKING:  # pragma: no cover
    from .config import CodecConfig

logger = logging.getLogger(__name__)

COMPACT_JSON_SEPARATORS = (",", ":")


class Serializer(Protocol):
    def dumps(self, value: Any) -> bytes: ...

    def loads(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Compact UTF-8 JSON, the framework's default cookie serializer."""

    def dumps(self, value: Any) -> bytes:
        return json.dumps(value, separators=COMPACT_JSON_SEPARATORS).encode("utf-8")

    def loads(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class SessionCodec:
    """Encode and decode session cookies for a single ``secret_key_base``."""

    def __init__(
        self,
        secret_key_base: str | bytes,
        signature_salt: str | bytes = DEFAULT_SIGNATURE_SALT,
        encryption_salt: str | bytes = DEFAULT_ENCRYPTION_SALT,
        *,
        legacy_no_padding: bool = False,
        serializer: Serializer | None = None,
    ) -> None:
        self._secrets = derive_cookie_secrets(secret_key_base, signature_salt, encryption_salt)
        self.legacy_no_padding = legacy_no_padding
        self.serializer = serializer if serializer is not None else JSONSerializer()
        logger.info(
            "Session codec ready",
            extra={"legacy_no_padding": legacy_no_padding},
        )

    @classmethod
    def from_config(cls, config: "CodecConfig") -> "SessionCodec":
        return cls(
            config.secret_key_base,
            config.signature_salt,
            config.encryption_salt,
            legacy_no_padding=config.legacy_no_padding,
        )

    @property
    def secrets(self) -> CookieSecrets:
        return self._secrets

    def encode(self, session: Any) -> str:
        """Return the cookie value for ``session``.

        Serializer errors for unserializable values propagate unchanged.
        """

        plaintext = self.serializer.dumps(session)
        iv = cipher.generate_iv()
        ciphertext = cipher.encrypt(self._secrets.encryption_secret, iv, plaintext)
        blob = framing.wrap_blob(framing.pack_inner(ciphertext, iv))
        digest = signing.sign(blob.encode("ascii"), self._secrets.signature_secret)
        return framing.combine(blob, digest)

    def load(self, cookie: str | None, *, unquote: bool = False) -> Any:
        """Decode ``cookie`` or raise :class:`InvalidSessionCookie`."""

        if unquote and isinstance(cookie, str):
            cookie = url_unquote(cookie)

        blob, digest = framing.split(cookie)
        if not signing.verify(blob.encode("ascii", "replace"), digest, self._secrets.signature_secret):
            raise DigestMismatch("Cookie digest does not match")

        ciphertext, iv = framing.unpack_inner(framing.unwrap_blob(blob))
        if self.legacy_no_padding:
            raw = cipher.decrypt(self._secrets.encryption_secret, iv, ciphertext, unpad=False)
            plaintext = cipher.strip_trailing_padding(raw)
        else:
            plaintext = cipher.decrypt(self._secrets.encryption_secret, iv, ciphertext)

        try:
            return self.serializer.loads(plaintext)
        except ValueError as exc:
            raise DeserializeError(f"Decrypted cookie is not a serialized session: {exc}") from exc

    def decode(self, cookie: str | None, *, unquote: bool = False) -> Any | None:
        """Return the session stored in ``cookie``, or ``None`` if it is invalid."""

        try:
            return self.load(cookie, unquote=unquote)
        except InvalidSessionCookie as exc:
            logger.debug("Rejected session cookie: %s (%s)", exc, type(exc).__name__)
            return None
