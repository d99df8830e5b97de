"""Install a CMake release matching a semver range and put it on PATH."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("setup-cmake")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
