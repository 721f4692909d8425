#!/usr/bin/env python3
"""binmod — small system utilities: locale, sizes, Base64, checksums, metadata.

Usage:
    binmod locale [--detailed]
    binmod size [<bytes>...] [--precision N]
    binmod to-base64 (<text> | --path <path>) [--encoding NAME]
    binmod from-base64 <data> [--encoding NAME]
    binmod checksum <path> [--algorithm NAME]
    binmod env-info
    binmod metadata [--detailed]
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

import yaml

import config
from base64codec import (
    ENCODINGS,
    Base64DecodeError,
    UnknownEncodingError,
    decode_text,
    encode_file,
    encode_text,
)
from checksum import ALGORITHMS, UnsupportedAlgorithmError, compute_checksum
from config import ConfigError, Settings
from environment import get_environment_info
from locales import describe_locale, get_normalized_system_locale
from metadata import __version__, get_metadata
from utils import PathResolutionError, format_size

log = logging.getLogger("binmod")

MAX_BYTES = 2**63 - 1


class CommandError(Exception):
    """Raised when a command cannot complete with the given input."""


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _byte_count(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer byte count")
    if not 0 <= n <= MAX_BYTES:
        raise argparse.ArgumentTypeError(f"{n} is outside the range 0..{MAX_BYTES}")
    return n


def _precision(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer")
    if not 0 <= n <= config.MAX_PRECISION:
        raise argparse.ArgumentTypeError(f"precision must be between 0 and {config.MAX_PRECISION}")
    return n


def emit(result, output: str = "text") -> None:
    """Print a string or dataclass result in the requested output format."""
    if isinstance(result, str):
        print(result)
        return

    data = dataclasses.asdict(result)
    if output == "json":
        print(json.dumps(data, indent=2))
    elif output == "yaml":
        print(yaml.safe_dump(data, sort_keys=False), end="")
    else:
        width = max(len(k) for k in data)
        for key, value in data.items():
            if value is not None:
                print(f"{key:<{width}} : {value}")


def cmd_locale(args: argparse.Namespace, settings: Settings) -> None:
    resolution = get_normalized_system_locale(fallback=settings.fallback_locale)
    if resolution.fallback:
        log.warning("Could not determine system locale, falling back to '%s'", resolution.locale)
    else:
        log.info("System locale %s (from %s)", resolution.locale, resolution.source)

    if getattr(args, "detailed", False):
        emit(describe_locale(resolution.locale), args.output)
    else:
        emit(resolution.locale, args.output)


def _read_byte_counts(stream) -> list[int]:
    counts = []
    for token in stream.read().split():
        try:
            counts.append(_byte_count(token))
        except argparse.ArgumentTypeError as e:
            raise CommandError(f"Invalid byte count on stdin: {e}")
    return counts


def cmd_size(args: argparse.Namespace, settings: Settings) -> None:
    precision = settings.precision if args.precision is None else args.precision
    if not args.bytes and sys.stdin.isatty():
        raise CommandError("No byte counts given (pass them as arguments or pipe them on stdin)")
    values = args.bytes or _read_byte_counts(sys.stdin)
    if not values:
        raise CommandError("No byte counts given")
    for value in values:
        emit(format_size(value, precision), args.output)


def cmd_to_base64(args: argparse.Namespace, settings: Settings) -> None:
    encoding = args.encoding or settings.encoding
    if args.path:
        result = encode_file(args.path, encoding)
    else:
        result = encode_text(args.text, encoding)
    emit(result, args.output)


def cmd_from_base64(args: argparse.Namespace, settings: Settings) -> None:
    emit(decode_text(args.data, args.encoding or settings.encoding), args.output)


def cmd_checksum(args: argparse.Namespace, settings: Settings) -> None:
    emit(compute_checksum(args.path, args.algorithm or settings.algorithm), args.output)


def cmd_env_info(args: argparse.Namespace, settings: Settings) -> None:
    emit(get_environment_info(), args.output)


def cmd_metadata(args: argparse.Namespace, settings: Settings) -> None:
    emit(get_metadata(settings, detailed=args.detailed), args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binmod",
        description="Small system utilities: locale, sizes, Base64, checksums, metadata.",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help=f"Config file path (default: $BINMOD_CONFIG or {config.DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-o", "--output",
        choices=("text", "json", "yaml"),
        default="text",
        help="Output format for record results (default: text)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # locale
    p_locale = subparsers.add_parser("locale", help="Show the normalized system locale")
    p_locale.add_argument("--detailed", action="store_true", help="Include display names")

    # size
    p_size = subparsers.add_parser("size", help="Convert byte counts to human-readable sizes")
    p_size.add_argument("bytes", nargs="*", type=_byte_count,
        help="Byte counts to convert (default: read from stdin)")
    p_size.add_argument("-p", "--precision", type=_precision, default=None, metavar="N",
        help="Decimal places, 0-10 (default: from config, 2)")

    # to-base64
    p_enc = subparsers.add_parser("to-base64", help="Encode a string or file to Base64")
    source = p_enc.add_mutually_exclusive_group(required=True)
    source.add_argument("text", nargs="?", help="String to encode")
    source.add_argument("--path", help="Path to a text file to encode")
    p_enc.add_argument("-e", "--encoding", choices=list(ENCODINGS), default=None,
        help="Text encoding (default: from config, UTF8)")

    # from-base64
    p_dec = subparsers.add_parser("from-base64", help="Decode a Base64 string")
    p_dec.add_argument("data", help="Base64 string to decode")
    p_dec.add_argument("-e", "--encoding", choices=list(ENCODINGS), default=None,
        help="Text encoding (default: from config, UTF8)")

    # checksum
    p_sum = subparsers.add_parser("checksum", help="Calculate a file checksum")
    p_sum.add_argument("path", help="File to hash (globs allowed, must match one file)")
    p_sum.add_argument("-a", "--algorithm", type=str.upper, choices=list(ALGORITHMS), default=None,
        help="Hash algorithm (default: from config, SHA256)")

    # env-info
    subparsers.add_parser("env-info", help="Show environment information")

    # metadata
    p_meta = subparsers.add_parser("metadata", help="Show binmod metadata")
    p_meta.add_argument("--detailed", action="store_true", help="Include runtime versions")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = config.get_settings(config.load(args.config))
        setup_logging("DEBUG" if args.verbose else settings.log_level)

        commands = {
            "locale": cmd_locale,
            "size": cmd_size,
            "to-base64": cmd_to_base64,
            "from-base64": cmd_from_base64,
            "checksum": cmd_checksum,
            "env-info": cmd_env_info,
            "metadata": cmd_metadata,
        }
        commands[args.command](args, settings)
    except (
        ConfigError,
        CommandError,
        Base64DecodeError,
        UnknownEncodingError,
        UnsupportedAlgorithmError,
        PathResolutionError,
    ) as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
