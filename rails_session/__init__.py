"""Read and write encrypted, signed Rails session cookies."""

from .codec import JSONSerializer, SessionCodec
from .config import CodecConfig, load_codec_config, set_default_config_path
from .errors import (
    CipherError,
    ConfigurationError,
    DecodeError,
    DerivationError,
    DeserializeError,
    DigestMismatch,
    FrameError,
    InvalidSessionCookie,
    RailsSessionError,
)
from .kdf import (
    DEFAULT_ENCRYPTION_SALT,
    DEFAULT_SIGNATURE_SALT,
    CookieSecrets,
    derive_cookie_secrets,
    derive_key,
)

__all__ = [
    "SessionCodec",
    "JSONSerializer",
    "CodecConfig",
    "load_codec_config",
    "set_default_config_path",
    "CookieSecrets",
    "derive_cookie_secrets",
    "derive_key",
    "DEFAULT_SIGNATURE_SALT",
    "DEFAULT_ENCRYPTION_SALT",
    "RailsSessionError",
    "DerivationError",
    "ConfigurationError",
    "InvalidSessionCookie",
    "FrameError",
    "DecodeError",
    "DigestMismatch",
    "CipherError",
    "DeserializeError",
]
