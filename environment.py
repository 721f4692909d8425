"""Environment information about the running host and interpreter."""

from __future__ import annotations

import getpass
import os
import platform
import socket
import sys
from dataclasses import dataclass


@dataclass
class EnvironmentInfo:
    machine_name: str
    user_name: str
    python_version: str
    implementation: str
    os_platform: str
    is_admin: bool


def is_admin() -> bool:
    """Return True when the process runs with elevated privileges."""
    if hasattr(os, "geteuid"):
        return os.geteuid() == 0
    try:
        import ctypes
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False


def _user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # no passwd entry and no LOGNAME/USER, e.g. in minimal containers
        return ""


def get_environment_info() -> EnvironmentInfo:
    return EnvironmentInfo(
        machine_name=socket.gethostname(),
        user_name=_user_name(),
        python_version=sys.version.split()[0],
        implementation=platform.python_implementation(),
        os_platform=platform.platform(),
        is_admin=is_admin(),
    )
