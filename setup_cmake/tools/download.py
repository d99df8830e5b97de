"""Archive downloader.

Archives land in a scratch directory under a name derived from the URL,
so a retried run reuses a completed download instead of fetching it again.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from setup_cmake.core.result import Err, Ok, Result
from setup_cmake.tools.http import HttpError

if TYPE_CHECKING:
    from collections.abc import Callable

    from setup_cmake.tools.http import HttpClient

__all__ = ["Downloader", "DownloadResult"]


@dataclass(frozen=True, slots=True)
class DownloadResult:
    """Result of a download operation.

    Attributes:
        path: Path to the downloaded file
        from_cache: True if an earlier download was reused
        size: File size in bytes
    """

    path: Path
    from_cache: bool
    size: int


class Downloader:
    """Downloads archives into ``download_dir``.

    Usage:
        downloader = Downloader(http_client, download_dir)
        result = downloader.download(asset.url)
        if is_ok(result):
            print(f"Downloaded to: {result.value.path}")
    """

    def __init__(self, http: HttpClient, download_dir: Path) -> None:
        self._http = http
        self._download_dir = download_dir

    @property
    def download_dir(self) -> Path:
        return self._download_dir

    def cache_key(self, url: str) -> str:
        """File name for ``url``: short URL hash plus the original file name.

        The original name is kept because extraction picks the archive
        format from the file suffix, e.g. "a1b2c3d4_cmake-3.29.0-linux-x86_64.tar.gz".
        """
        filename = Path(unquote(urlparse(url).path)).name or "download"
        url_hash = hashlib.sha256(url.encode()).hexdigest()[:8]
        return f"{url_hash}_{filename}"

    def target_path(self, url: str) -> Path:
        return self._download_dir / self.cache_key(url)

    def download(
        self,
        url: str,
        *,
        force: bool = False,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[DownloadResult, HttpError]:
        """Download ``url`` unless a previous download is still on disk.

        A partial file left by a failed transfer is removed.
        """
        target = self.target_path(url)

        if not force and target.exists():
            return Ok(DownloadResult(path=target, from_cache=True, size=target.stat().st_size))

        self._download_dir.mkdir(parents=True, exist_ok=True)
        # Download under a temporary name so an interrupted transfer is never reused.
        partial = target.with_name(f"{target.name}.part")
        result = self._http.download(url, partial, progress=progress)

        if isinstance(result, Err):
            partial.unlink(missing_ok=True)
            return result

        partial.replace(target)
        return Ok(DownloadResult(path=target, from_cache=False, size=target.stat().st_size))
