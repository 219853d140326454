# cache.py
from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import settings

# ---------------------------------------------------------------------
# Core idea
# ---------------------------------------------------------------------
# Same layout as the hosted runner tool cache:
#
#   root/
#     <tool>/
#       <version>/
#         <arch>/             <- install root
#         <arch>.complete     <- marker written last
#
# An entry without its .complete marker is treated as missing, so a copy
# interrupted halfway is never handed out.
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class CacheEntry:
    tool: str
    version: str
    arch: str
    path: Path


class ToolCache:
    """File-based tool cache keyed by (tool, version, arch)."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root if root is not None else settings.tool_cache_dir()).resolve()

    def entry_path(self, tool: str, version: str, arch: str) -> Path:
        return self.root / tool / version / arch

    def marker_path(self, tool: str, version: str, arch: str) -> Path:
        return self.root / tool / version / f"{arch}.complete"

    def cache_dir(
        self,
        source_dir: str | Path,
        tool: str,
        version: str,
        arch: str | None = None,
    ) -> Path:
        """
        Copy the contents of `source_dir` into the cache and return the
        cached directory.

        Any previous entry for the same key is replaced, so repeated calls
        with the same (tool, version) return the same path.
        """
        arch = arch or settings.arch()
        src = Path(source_dir).resolve()
        if not src.is_dir():
            raise NotADirectoryError(f"sourceDir is not a directory: {src}")

        dest = self.entry_path(tool, version, arch)
        marker = self.marker_path(tool, version, arch)

        # Drop the marker first: a half-replaced entry must read as a miss
        marker.unlink(missing_ok=True)
        if dest.exists():
            shutil.rmtree(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)

        shutil.copytree(src, dest, symlinks=True)
        marker.write_text("", encoding="utf-8")
        return dest

    def find(self, tool: str, version: str, arch: str | None = None) -> Optional[Path]:
        arch = arch or settings.arch()
        dest = self.entry_path(tool, version, arch)
        if dest.is_dir() and self.marker_path(tool, version, arch).exists():
            return dest
        return None

    def entries(self, tool: str) -> List[CacheEntry]:
        """All completed entries for a tool, sorted by version then arch."""
        tool_dir = self.root / tool
        if not tool_dir.is_dir():
            return []

        out: List[CacheEntry] = []
        for version_dir in sorted(p for p in tool_dir.iterdir() if p.is_dir()):
            for marker in sorted(version_dir.glob("*.complete")):
                arch = marker.name[: -len(".complete")]
                path = version_dir / arch
                if path.is_dir():
                    out.append(CacheEntry(tool=tool, version=version_dir.name, arch=arch, path=path))
        return out
