"""Platform abstraction layer."""

from .detection import (
    Platform,
    arch_candidates,
    detect_platform,
)
from .paths import (
    download_dir,
    tool_cache_dir,
    user_cache_dir,
)
from .search_path import PathUpdateError, add_to_path

__all__ = [
    # detection
    "Platform",
    "arch_candidates",
    "detect_platform",
    # paths
    "download_dir",
    "tool_cache_dir",
    "user_cache_dir",
    # search path
    "PathUpdateError",
    "add_to_path",
]
