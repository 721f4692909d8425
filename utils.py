"""Shared utility functions."""

from __future__ import annotations

import glob
import hashlib
import os
from decimal import ROUND_HALF_UP, Decimal

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB"]


class PathResolutionError(Exception):
    """Raised when a path does not resolve to exactly one regular file."""


def hash_file(path: str, algorithm: str = "sha256") -> str:
    """Compute the hex digest of a file with the given hashlib algorithm."""
    h = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def format_size(size_bytes: int, precision: int = 2) -> str:
    """Format a byte count as a human-readable string (B, KB, ... EB).

    The value is scaled by 1024 until it drops below 1024 or the unit table
    runs out, so anything past the last unit is shown as a large number of EB.
    Rounding is half away from zero on the exact value: 1536 bytes at
    precision 0 gives "2 KB".
    """
    size = float(size_bytes)
    order = 0
    while size >= 1024 and order < len(SIZE_UNITS) - 1:
        order += 1
        size /= 1024

    rounded = Decimal(size).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    return f"{rounded:f} {SIZE_UNITS[order]}"


def resolve_single_path(path: str) -> str:
    """Resolve *path* (with ~ and glob expansion) to exactly one existing file."""
    expanded = os.path.expanduser(path)
    matches = sorted(glob.glob(expanded)) if glob.has_magic(expanded) else (
        [expanded] if os.path.exists(expanded) else []
    )

    if not matches:
        raise PathResolutionError(f"Cannot find path '{path}' because it does not exist.")
    if len(matches) > 1:
        raise PathResolutionError(
            f"Path '{path}' resolves to multiple items. Please specify a single file."
        )

    resolved = os.path.abspath(matches[0])
    if os.path.isdir(resolved):
        raise PathResolutionError(f"Path '{resolved}' is a directory. Please specify a file.")
    return resolved


def preview(text: str, limit: int = 100) -> str:
    """Truncate *text* to *limit* characters, marking the cut with '...'."""
    return text if len(text) <= limit else text[:limit] + "..."
