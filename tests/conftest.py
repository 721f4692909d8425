"""Shared fixtures for binmod tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add the binmod root to sys.path so imports work like they do at runtime.
_pkg_root = str(Path(__file__).resolve().parent.parent)
if _pkg_root not in sys.path:
    sys.path.insert(0, _pkg_root)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Keep tests away from the user's real config file."""
    monkeypatch.delenv("BINMOD_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
