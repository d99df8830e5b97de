"""Infrastructure collaborators: HTTP, download, extraction, tool cache."""

from setup_cmake.tools.cache import ToolCache
from setup_cmake.tools.download import Downloader, DownloadResult
from setup_cmake.tools.http import (
    HttpClient,
    HttpError,
    HttpResponse,
    MockHttpClient,
    RealHttpClient,
)
from setup_cmake.tools.installer import InstallError, Installer, InstallResult

__all__ = [
    # HTTP
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
    # Download
    "Downloader",
    "DownloadResult",
    # Install
    "Installer",
    "InstallError",
    "InstallResult",
    # Cache
    "ToolCache",
]
