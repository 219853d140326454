from __future__ import annotations

import os
import platform
import sys
import tempfile
from pathlib import Path

TOOL_NAME = "hdfs"

DEFAULT_MIRROR = "https://archive.apache.org/dist/hadoop/common"

NAMENODE_ADDR = "127.0.0.1:9000"
NAMENODE_HTTP_ADDR = "127.0.0.1:9870"

# platform.machine() -> the arch names the runner tool cache uses
_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "armv7l": "arm",
    "armv6l": "arm",
}


def mirror() -> str:
    return os.environ.get("SETUP_HDFS_MIRROR", DEFAULT_MIRROR).rstrip("/")


def tool_cache_dir() -> Path:
    value = os.environ.get("RUNNER_TOOL_CACHE")
    if value:
        return Path(value)
    return Path.home() / ".setup-hdfs" / "tool-cache"


def temp_dir() -> Path:
    value = os.environ.get("RUNNER_TEMP")
    if value:
        return Path(value)
    return Path(tempfile.gettempdir()) / "setup-hdfs"


def arch() -> str:
    machine = platform.machine()
    return _ARCH_ALIASES.get(machine.lower(), machine.lower() or "unknown")


def is_windows() -> bool:
    return sys.platform == "win32"


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"
