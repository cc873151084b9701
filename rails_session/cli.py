"""Command-line interface for inspecting and minting session cookies.

``rails-session decode`` prints the JSON session held in a cookie value and
``rails-session encode`` produces a cookie value from a JSON document. Both
read the secret from the same sources as :func:`rails_session.config.load_codec_config`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from .codec import COMPACT_JSON_SEPARATORS, SessionCodec
from .config import load_codec_config
from .errors import InvalidSessionCookie, RailsSessionError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid."""


def _add_codec_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="YAML config file with session settings")
    parser.add_argument(
        "--secret-key-base",
        default=None,
        help="Application secret_key_base (defaults to SECRET_KEY_BASE)",
    )
    parser.add_argument("--signature-salt", default=None, help="Override the signature salt")
    parser.add_argument("--encryption-salt", default=None, help="Override the encryption salt")
    parser.add_argument(
        "--legacy-no-padding",
        action="store_true",
        default=None,
        help="Decrypt without validating PKCS#7 padding (older cookie readers)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encrypted session cookie tool")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    decode_parser = subparsers.add_parser("decode", help="decode a cookie value into JSON")
    decode_parser.add_argument("cookie", help="Cookie value, or '-' to read from stdin")
    decode_parser.add_argument(
        "--unquote",
        action="store_true",
        help="URL-unquote the value first (raw Cookie header values)",
    )
    decode_parser.add_argument("--indent", type=int, default=None, help="Indent the JSON output")
    _add_codec_arguments(decode_parser)

    encode_parser = subparsers.add_parser("encode", help="encode a JSON session into a cookie value")
    source = encode_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--json", dest="payload_json", default=None, help="Session as a JSON object")
    source.add_argument("--json-file", default=None, help="Path to a JSON file holding the session")
    _add_codec_arguments(encode_parser)

    return parser


def _build_codec(args: argparse.Namespace) -> SessionCodec:
    overrides = {
        "secret_key_base": args.secret_key_base,
        "signature_salt": args.signature_salt,
        "encryption_salt": args.encryption_salt,
        "legacy_no_padding": args.legacy_no_padding,
    }
    config = load_codec_config(config_path=args.config, overrides=overrides)
    return SessionCodec.from_config(config)


def _read_cookie(raw: str) -> str:
    if raw == "-":
        return sys.stdin.read().strip()
    return raw.strip()


def _read_session(args: argparse.Namespace) -> Any:
    if args.json_file:
        path = Path(args.json_file).expanduser()
        try:
            text = path.read_text()
        except OSError as exc:
            raise CLIError(f"cannot read {path}: {exc}") from exc
    else:
        text = args.payload_json
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise CLIError(f"invalid session JSON: {exc}") from exc


def cmd_decode(args: argparse.Namespace) -> None:
    codec = _build_codec(args)
    cookie = _read_cookie(args.cookie)
    try:
        session = codec.load(cookie, unquote=args.unquote)
    except InvalidSessionCookie as exc:
        raise CLIError(f"invalid cookie ({type(exc).__name__}): {exc}") from exc
    if args.indent is None:
        print(json.dumps(session, separators=COMPACT_JSON_SEPARATORS))
    else:
        print(json.dumps(session, indent=args.indent))


def cmd_encode(args: argparse.Namespace) -> None:
    codec = _build_codec(args)
    session = _read_session(args)
    try:
        cookie = codec.encode(session)
    except (TypeError, ValueError) as exc:  # pragma: no cover - json.loads output always serializes
        raise CLIError(f"cannot serialize session: {exc}") from exc
    print(cookie)


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger("rails_session").setLevel(logging.DEBUG)
    try:
        if args.command == "decode":
            cmd_decode(args)
        elif args.command == "encode":
            cmd_encode(args)
        else:  # pragma: no cover - argparse enforces choices
            raise CLIError(f"Unknown command: {args.command}")
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        logger.info("Interrupted by user")
    except (CLIError, RailsSessionError) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
