"""Platform-aware locations for the tool cache."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import Platform, detect_platform

__all__ = [
    "home",
    "user_cache_dir",
    "tool_cache_dir",
    "download_dir",
    "clear_caches",
]

APP_NAME = "setup-cmake"


@lru_cache(maxsize=1)
def home() -> Path:
    """User's home directory. Env vars win so CI containers can override it."""
    if detect_platform() == Platform.WINDOWS:
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)
    return Path.home()


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """Per-user cache directory.

    Location: $XDG_CACHE_HOME/setup-cmake or ~/.cache/setup-cmake (Linux),
    ~/Library/Caches/setup-cmake (macOS), %LOCALAPPDATA%/setup-cmake (Windows).
    """
    match detect_platform():
        case Platform.WINDOWS:
            local = os.environ.get("LOCALAPPDATA")
            if local:
                return Path(local) / APP_NAME
            return home() / "AppData" / "Local" / APP_NAME
        case Platform.MACOS:
            return home() / "Library" / "Caches" / APP_NAME
        case _:
            xdg_cache = os.environ.get("XDG_CACHE_HOME")
            if xdg_cache:
                return Path(xdg_cache) / APP_NAME
            return home() / ".cache" / APP_NAME


def tool_cache_dir(configured: str | None = None) -> Path:
    """Root of the versioned tool cache.

    Order: explicit config value, then ``RUNNER_TOOL_CACHE`` (set on GitHub
    Actions runners), then the user cache directory.
    """
    if configured:
        return Path(configured).expanduser()
    runner_cache = os.environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)
    return user_cache_dir() / "toolcache"


def download_dir() -> Path:
    """Scratch directory for archives (``RUNNER_TEMP`` when on a runner)."""
    runner_temp = os.environ.get("RUNNER_TEMP")
    if runner_temp:
        return Path(runner_temp) / APP_NAME
    return user_cache_dir() / "downloads"


def clear_caches() -> None:
    """Clear cached paths. Useful in tests when env vars change."""
    home.cache_clear()
    user_cache_dir.cache_clear()
