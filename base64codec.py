"""Base64 encoding and decoding of text and file contents."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path

from utils import preview, resolve_single_path

log = logging.getLogger(__name__)

# Map of encoding names accepted on the command line to Python codec names.
ENCODINGS = {
    "UTF8": "utf-8",
    "ASCII": "ascii",
    "Unicode": "utf-16-le",
}


class Base64DecodeError(Exception):
    """Raised when input is not valid Base64."""


class UnknownEncodingError(ValueError):
    """Raised for an encoding name not in ENCODINGS."""


@dataclass
class Base64Result:
    input: str  # preview of the input, truncated to 100 characters
    output: str
    encoding: str


def _codec(encoding: str) -> str:
    if encoding not in ENCODINGS:
        raise UnknownEncodingError(
            f"Unknown encoding '{encoding}'. "
            f"Available: {', '.join(ENCODINGS)}"
        )
    return ENCODINGS[encoding]


def encode_text(text: str, encoding: str = "UTF8") -> Base64Result:
    """Encode *text* to Base64 using the named text encoding.

    Characters the encoding cannot represent become '?'.
    """
    data = text.encode(_codec(encoding), errors="replace")
    return Base64Result(
        input=preview(text),
        output=base64.b64encode(data).decode("ascii"),
        encoding=encoding,
    )


def encode_file(path: str, encoding: str = "UTF8") -> Base64Result:
    """Read a text file and encode its contents to Base64."""
    resolved = resolve_single_path(path)
    log.debug("Encoding file %s as %s", resolved, encoding)
    return encode_text(Path(resolved).read_text(encoding="utf-8"), encoding)


def decode_text(data: str, encoding: str = "UTF8") -> Base64Result:
    """Decode a Base64 string back to text in the named encoding.

    Whitespace anywhere in *data* is ignored, so wrapped output decodes.
    Byte sequences invalid in the encoding become U+FFFD.
    """
    codec = _codec(encoding)
    try:
        raw = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(f"The input string is not a valid Base64 string: {exc}") from exc

    decoded = raw.decode(codec, errors="replace")
    return Base64Result(input=preview(data), output=decoded, encoding=encoding)
