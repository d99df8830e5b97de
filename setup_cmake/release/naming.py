"""Infer platform, architecture and file kind from CMake asset filenames.

CMake's naming has changed several times over its release history:

    cmake-2.8.12.2-Darwin-universal.tar.gz     (32 and 64 bit fat binary)
    cmake-2.8.12.2-Darwin64-universal.tar.gz
    cmake-3.1.0-Linux-i386.tar.gz
    cmake-3.19.3-macos-universal.tar.gz
    cmake-3.19.3-macos10.10-universal.tar.gz   (older deployment target)
    cmake-3.20.0-linux-x86_64.tar.gz           (lower-case from 3.20 on)
    cmake-3.20.0-windows-x86_64.zip

Each rule below is independent of the others and of selection, so a new
convention only needs a new branch here.
"""

from __future__ import annotations

__all__ = [
    "KNOWN_EXTENSIONS",
    "infer_platform",
    "infer_arch",
    "infer_filetype",
]

KNOWN_EXTENSIONS: dict[str, str] = {
    "dmg": "package",
    "msi": "package",
    "gz": "archive",
    "zip": "archive",
    "sh": "script",
    "txt": "text",
    "asc": "text",
}


def infer_platform(filename: str) -> str:
    """Return "linux", "darwin", "win32" or "" for unrecognized names."""
    if "Linux" in filename or "-linux-" in filename:
        return "linux"
    if "Darwin" in filename or "macos" in filename:
        return "darwin"
    if "win32" in filename or "windows" in filename or "win64" in filename:
        return "win32"
    return ""


def infer_arch(filename: str) -> str:
    """Return "x86_64", "x86" or "".

    Universal macOS binaries count as 64-bit capable. Anything else
    (aarch64, arm64, ppc) is left empty and never matches an x86 request.
    """
    if "x86_64" in filename:
        return "x86_64"
    if "universal" in filename:
        return "x86_64"
    if "x64" in filename:
        return "x86_64"
    if "x86" in filename or "i386" in filename:
        return "x86"
    return ""


def infer_filetype(filename: str) -> str:
    """Classify by the final extension only: ``.tar.gz`` is "archive"."""
    ext = filename.rsplit(".", 1)[-1]
    return KNOWN_EXTENSIONS.get(ext, "")
