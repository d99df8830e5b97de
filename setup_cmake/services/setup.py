"""Resolve, fetch, cache and expose a CMake release.

The service wires the release engine to its collaborators:

    fetch_catalog -> select_version -> select_asset -> tool cache lookup
        (miss) -> download -> extract -> cache store (keyed by asset arch)
    -> add <tool>/bin to PATH
"""

from __future__ import annotations

import shutil
from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from setup_cmake.core.config import Config
from setup_cmake.core.result import Err, Ok, Result
from setup_cmake.platform.detection import arch_candidates
from setup_cmake.platform.search_path import PathUpdateError, add_to_path
from setup_cmake.release.catalog import fetch_catalog
from setup_cmake.release.errors import NetworkError, ResolveError
from setup_cmake.release.model import AssetInfo, VersionInfo
from setup_cmake.release.selector import select_asset, select_version
from setup_cmake.tools.installer import InstallError, Installer

if TYPE_CHECKING:
    from setup_cmake.output.console import ConsoleProtocol
    from setup_cmake.tools.cache import ToolCache
    from setup_cmake.tools.download import Downloader
    from setup_cmake.tools.http import HttpClient

__all__ = ["Resolution", "SetupOutcome", "SetupError", "SetupService", "find_bin_dir"]

SetupError = ResolveError | InstallError | PathUpdateError


@dataclass(frozen=True, slots=True)
class Resolution:
    version: VersionInfo
    asset: AssetInfo


@dataclass(frozen=True, slots=True)
class SetupOutcome:
    """What ``install`` put on PATH.

    Attributes:
        version: Installed version name
        tool_dir: Cache entry holding the extracted release
        bin_dir: Directory added to PATH
        from_cache: True if no download was needed
    """

    version: str
    tool_dir: Path
    bin_dir: Path
    from_cache: bool


def find_bin_dir(tool_dir: Path) -> Path:
    """Locate the directory holding the ``cmake`` executable.

    macOS archives wrap everything in an app bundle
    (``CMake.app/Contents/bin``); other platforms use ``bin`` directly.
    """
    for bundle_bin in sorted(tool_dir.glob("*.app/Contents/bin")):
        if bundle_bin.is_dir():
            return bundle_bin
    return tool_dir / "bin"


class SetupService:
    def __init__(
        self,
        *,
        http: HttpClient,
        config: Config,
        platform: str,
        console: ConsoleProtocol,
        cache: ToolCache,
        downloader: Downloader,
        installer: Installer | None = None,
        env: MutableMapping[str, str] | None = None,
    ) -> None:
        self._http = http
        self._config = config
        self._platform = platform
        self._console = console
        self._cache = cache
        self._downloader = downloader
        self._installer = installer or Installer()
        self._env = env

    @property
    def tool_name(self) -> str:
        return self._config.cache.tool_name

    def resolve_version(
        self, requested: str, *, api_token: str | None = None
    ) -> Result[VersionInfo, ResolveError]:
        catalog = fetch_catalog(
            self._http, api_token, config=self._config.github, console=self._console
        )
        if isinstance(catalog, Err):
            return catalog
        return select_version(requested, catalog.value)

    def resolve(
        self,
        requested: str,
        *,
        api_token: str | None = None,
        use_32bit: bool = False,
    ) -> Result[Resolution, ResolveError]:
        """Pick the release and the archive without downloading anything."""
        version = self.resolve_version(requested, api_token=api_token)
        if isinstance(version, Err):
            return version
        asset = select_asset(
            version.value, self._platform, arch_candidates(use_32bit), console=self._console
        )
        if isinstance(asset, Err):
            return asset
        return Ok(Resolution(version=version.value, asset=asset.value))

    def install(
        self,
        requested: str,
        *,
        api_token: str | None = None,
        use_32bit: bool = False,
    ) -> Result[SetupOutcome, SetupError]:
        """Make the best matching release available on PATH."""
        resolution = self.resolve(requested, api_token=api_token, use_32bit=use_32bit)
        if isinstance(resolution, Err):
            return resolution
        name = resolution.value.version.name
        asset = resolution.value.asset

        tool_dir = self._cache.find(self.tool_name, name, asset.arch)
        from_cache = tool_dir is not None

        if tool_dir is None:
            fetched = self._fetch_into_cache(name, asset)
            if isinstance(fetched, Err):
                return fetched
            tool_dir = fetched.value
        else:
            self._console.debug(f"Found {self.tool_name} {name} in tool cache: {tool_dir}")

        bin_dir = find_bin_dir(tool_dir)
        path_result = add_to_path(bin_dir, env=self._env)
        if isinstance(path_result, Err):
            return path_result

        self._console.success(f"{self.tool_name} {name} added to PATH ({bin_dir})")
        return Ok(SetupOutcome(version=name, tool_dir=tool_dir, bin_dir=bin_dir, from_cache=from_cache))

    def _fetch_into_cache(self, version: str, asset: AssetInfo) -> Result[Path, SetupError]:
        self._console.info(f"Downloading {asset.name}")
        download = self._downloader.download(asset.url)
        if isinstance(download, Err):
            return Err(NetworkError.from_http(download.error))

        extract_dir = self._downloader.download_dir / "extract" / f"{self.tool_name}-{version}"
        try:
            extracted = self._installer.install(download.value.path, extract_dir, strip_components=1)
            if isinstance(extracted, Err):
                return extracted
            self._console.debug(f"Extracted {extracted.value.files_count} files")
            return self._cache.store(extract_dir, self.tool_name, version, asset.arch)
        finally:
            shutil.rmtree(extract_dir, ignore_errors=True)
