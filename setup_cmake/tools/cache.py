"""Versioned tool cache.

Layout matches the hosted runner tool cache, so runners that pre-install
CMake into ``RUNNER_TOOL_CACHE`` are picked up as well:

    <root>/cmake/3.29.0/x86_64/          extracted tree
    <root>/cmake/3.29.0/x86_64.complete  marker, written last

An entry without its marker is a half-finished copy and is ignored.
"""

from __future__ import annotations

import json
import shutil
from datetime import datetime
from pathlib import Path

from setup_cmake.core.result import Err, Ok, Result
from setup_cmake.platform.files import atomic_write_text
from setup_cmake.tools.installer import InstallError

__all__ = ["ToolCache"]


class ToolCache:
    """Stores extracted tool directories keyed by (tool, version, arch)."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def entry_dir(self, tool: str, version: str, arch: str) -> Path:
        return self._root / tool / version / arch

    def _marker(self, tool: str, version: str, arch: str) -> Path:
        return self._root / tool / version / f"{arch}.complete"

    def find(self, tool: str, version: str, arch: str) -> Path | None:
        """Return the cached directory, or None if absent or incomplete."""
        entry = self.entry_dir(tool, version, arch)
        if entry.is_dir() and self._marker(tool, version, arch).is_file():
            return entry
        return None

    def store(
        self, source_dir: Path, tool: str, version: str, arch: str
    ) -> Result[Path, InstallError]:
        """Copy ``source_dir`` into the cache, replacing any previous entry."""
        entry = self.entry_dir(tool, version, arch)
        marker = self._marker(tool, version, arch)
        try:
            marker.unlink(missing_ok=True)
            if entry.exists():
                shutil.rmtree(entry)
            entry.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source_dir, entry, symlinks=True)
            atomic_write_text(
                marker,
                json.dumps({"version": version, "cached_at": datetime.now().isoformat()}),
            )
        except OSError as e:
            return Err(InstallError(archive=source_dir, message=f"Cannot store in tool cache ({e})"))
        return Ok(entry)
