"""File checksum calculation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from utils import hash_file, resolve_single_path

log = logging.getLogger(__name__)

# Map of algorithm names accepted on the command line to hashlib names.
ALGORITHMS = {
    "MD5": "md5",
    "SHA1": "sha1",
    "SHA256": "sha256",
    "SHA512": "sha512",
}


class UnsupportedAlgorithmError(ValueError):
    """Raised for a hash algorithm name not in ALGORITHMS."""


@dataclass
class ChecksumResult:
    path: str
    algorithm: str
    hash: str  # lowercase hex digest
    file_size: int


def compute_checksum(path: str, algorithm: str = "SHA256") -> ChecksumResult:
    """Hash the single file *path* resolves to.

    Raises:
        UnsupportedAlgorithmError: for an algorithm not in ALGORITHMS.
        PathResolutionError: when the path matches nothing, several files, or a directory.
    """
    name = algorithm.upper()
    if name not in ALGORITHMS:
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm '{algorithm}'. "
            f"Available: {', '.join(ALGORITHMS)}"
        )

    resolved = resolve_single_path(path)
    log.debug("Computing %s of %s", name, resolved)
    return ChecksumResult(
        path=resolved,
        algorithm=name,
        hash=hash_file(resolved, ALGORITHMS[name]),
        file_size=os.path.getsize(resolved),
    )
