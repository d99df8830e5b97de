"""Host platform detection.

Detection happens once at the CLI edge. The release engine itself only
ever sees the plain strings CMake's asset names map to ("linux",
"darwin", "win32"; "x86_64", "x86"), passed in explicitly.
"""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "arch_candidates",
    "detect_platform",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def release_name(self) -> str:
        """Platform label used by the asset naming rules ("" if unsupported)."""
        return {
            Platform.LINUX: "linux",
            Platform.MACOS: "darwin",
            Platform.WINDOWS: "win32",
            Platform.UNKNOWN: "",
        }[self]


def arch_candidates(use_32bit: bool = False) -> tuple[str, ...]:
    """Architectures to try, best first.

    64-bit is preferred with a 32-bit fallback for releases that only ship
    an i386 build. ``use_32bit`` restricts the search to 32-bit builds.
    """
    if use_32bit:
        return ("x86",)
    return ("x86_64", "x86")


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN
