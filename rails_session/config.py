"""Configuration loader for session codecs.

Settings resolve in order: explicit overrides, environment variables, a YAML
file, then built-in defaults. The YAML file may hold a ``session`` mapping::

    session:
      secret_key_base: "..."
      signature_salt: "signed encrypted cookie"
      encryption_salt: "encrypted cookie"
      legacy_no_padding: false

or be a Rails ``secrets.yml`` with one section per environment, in which case
``RAILS_ENV`` (default ``development``) picks the section.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigurationError
from .kdf import DEFAULT_ENCRYPTION_SALT, DEFAULT_SIGNATURE_SALT

DEFAULT_CONFIG_PATH = Path.home() / ".rails_session.yaml"
DEFAULT_RAILS_ENV = "development"
_CONFIG_PATH_OVERRIDE: Path | None = None


@dataclass
class CodecConfig:
    """Settings needed to build a :class:`~rails_session.codec.SessionCodec`."""

    secret_key_base: str
    signature_salt: str = DEFAULT_SIGNATURE_SALT
    encryption_salt: str = DEFAULT_ENCRYPTION_SALT
    legacy_no_padding: bool = False

    def __repr__(self) -> str:
        return (
            "CodecConfig(secret_key_base=<redacted>, "
            f"signature_salt={self.signature_salt!r}, "
            f"encryption_salt={self.encryption_salt!r}, "
            f"legacy_no_padding={self.legacy_no_padding!r})"
        )


def set_default_config_path(path: str | Path | None) -> None:
    """Use ``path`` instead of ``~/.rails_session.yaml`` when no path is passed.

    ``None`` restores the home-directory default.
    """

    global _CONFIG_PATH_OVERRIDE
    _CONFIG_PATH_OVERRIDE = Path(path).expanduser() if path else None


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML mapping")
    return loaded


def _select_section(file_config: dict[str, Any], rails_env: str, path: Path) -> dict[str, Any]:
    if "session" in file_config:
        section = file_config["session"]
    elif rails_env in file_config:
        section = file_config[rails_env]
    else:
        section = file_config
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Expected session settings to be a mapping in {path}")
    return section


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    return None


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def load_codec_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CodecConfig:
    """Load codec settings from overrides, environment variables and optional YAML."""

    env_map = os.environ if env is None else env
    explicit_path = config_path is not None or _CONFIG_PATH_OVERRIDE is not None
    if config_path is not None:
        path = Path(config_path).expanduser()
    else:
        path = _CONFIG_PATH_OVERRIDE or DEFAULT_CONFIG_PATH

    rails_env = env_map.get("RAILS_ENV") or DEFAULT_RAILS_ENV
    file_config = _load_config_file(path, required=explicit_path)
    section = _select_section(file_config, rails_env, path)
    override_map = dict(overrides or {})

    env_secret = env_map.get("RAILS_SESSION_SECRET_KEY_BASE") or env_map.get("SECRET_KEY_BASE")
    env_legacy_raw = env_map.get("RAILS_SESSION_LEGACY_NO_PADDING")
    env_legacy = _coerce_bool(env_legacy_raw)
    if env_legacy_raw and env_legacy is None:
        raise ConfigurationError(
            f"Invalid boolean for RAILS_SESSION_LEGACY_NO_PADDING: {env_legacy_raw}"
        )

    secret_key_base = _first_value(
        override_map.get("secret_key_base"), env_secret, section.get("secret_key_base")
    )
    if not secret_key_base:
        raise ConfigurationError(
            "secret_key_base must be provided via SECRET_KEY_BASE, "
            "RAILS_SESSION_SECRET_KEY_BASE or a config file"
        )

    signature_salt = _first_value(
        override_map.get("signature_salt"),
        env_map.get("RAILS_SESSION_SIGNATURE_SALT"),
        section.get("signature_salt"),
        DEFAULT_SIGNATURE_SALT,
    )
    encryption_salt = _first_value(
        override_map.get("encryption_salt"),
        env_map.get("RAILS_SESSION_ENCRYPTION_SALT"),
        section.get("encryption_salt"),
        DEFAULT_ENCRYPTION_SALT,
    )
    legacy_no_padding = _first_value(
        _coerce_bool(override_map.get("legacy_no_padding")),
        env_legacy,
        _coerce_bool(section.get("legacy_no_padding")),
        False,
    )

    return CodecConfig(
        secret_key_base=str(secret_key_base),
        signature_salt=str(signature_salt),
        encryption_salt=str(encryption_salt),
        legacy_no_padding=bool(legacy_no_padding),
    )
