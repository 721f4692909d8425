"""Metadata about the binmod tool itself."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from datetime import datetime

from config import Settings

__version__ = "1.0.0"

TOOL_NAME = "binmod"


@dataclass
class ModuleMetadata:
    name: str
    version: str
    author: str
    description: str
    company_name: str
    copyright: str
    python_version: str | None = None
    implementation: str | None = None
    platform: str | None = None


def get_metadata(settings: Settings, detailed: bool = False) -> ModuleMetadata:
    """Build tool metadata; runtime details are only filled in when *detailed*."""
    meta = settings.metadata
    result = ModuleMetadata(
        name=TOOL_NAME,
        version=__version__,
        author=meta.author,
        description=meta.description,
        company_name=meta.company_name,
        copyright=f"(c) {datetime.now().year} {meta.author}. All rights reserved.",
    )

    if detailed:
        result.python_version = sys.version.split()[0]
        result.implementation = platform.python_implementation()
        result.platform = platform.system()

    return result
