"""Version and asset selection over a normalized catalog."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from setup_cmake.core.result import Err, Ok, Result
from setup_cmake.release.errors import NoMatchingAsset, NoMatchingVersion
from setup_cmake.release.model import AssetInfo, VersionInfo
from setup_cmake.release.semver import SemVer, VersionRange, parse_version

if TYPE_CHECKING:
    from setup_cmake.output.console import ConsoleProtocol

__all__ = [
    "select_version",
    "select_asset",
    "select_asset_url",
    "prefer_64bit",
]


def select_version(
    requested: str, catalog: Iterable[VersionInfo]
) -> Result[VersionInfo, NoMatchingVersion]:
    """Pick the highest stable release satisfying ``requested``.

    Drafts and prereleases are never eligible. When the same version is
    listed twice the first occurrence wins. A malformed range matches
    nothing.
    """
    version_range = VersionRange.parse(requested)
    if version_range is None:
        return Err(NoMatchingVersion(requested))

    best: VersionInfo | None = None
    best_version: SemVer | None = None
    for info in catalog:
        if info.draft or info.prerelease:
            continue
        v = parse_version(info.name)
        if v is None or v not in version_range:
            continue
        if best_version is None or v > best_version:
            best, best_version = info, v

    if best is None:
        return Err(NoMatchingVersion(requested))
    return Ok(best)


def prefer_64bit(assets: Sequence[AssetInfo]) -> list[AssetInfo]:
    """Assets that look like the 64-bit or non-deployment-target build.

    Old releases ship ``Darwin-universal`` next to ``Darwin64-universal``
    and newer ones ``macos-universal`` next to ``macos10.10-universal``.
    Both pairs infer to the same arch.
    """
    return [
        a for a in assets if "64" in a.name or "64" in a.url or "macos-universal" in a.name
    ]


def select_asset(
    version: VersionInfo,
    platform: str,
    arch_candidates: Sequence[str],
    *,
    console: ConsoleProtocol | None = None,
) -> Result[AssetInfo, NoMatchingAsset]:
    """Pick the single archive to download for ``platform``.

    Args:
        version: The chosen release
        platform: "linux", "darwin" or "win32"
        arch_candidates: Architectures in priority order, e.g. ("x86_64", "x86")
        console: Receives a warning when the choice is ambiguous

    Returns:
        Ok with the asset, or Err when no archive matches the platform and
        any candidate architecture.
    """
    archives = [a for a in version.assets if a.filetype == "archive" and a.platform == platform]
    if not archives:
        return Err(NoMatchingAsset(platform=platform, version=version.name))

    matching: list[AssetInfo] = []
    for arch in arch_candidates:
        matching = [a for a in archives if a.arch == arch]
        if matching:
            break
    if not matching:
        return Err(
            NoMatchingAsset(
                platform=platform,
                version=version.name,
                arch_candidates=tuple(arch_candidates),
            )
        )

    if len(matching) > 1:
        narrowed = prefer_64bit(matching)
        if narrowed:
            matching = narrowed

    chosen = matching[0]
    if len(matching) > 1 and console:
        names = ", ".join(a.name for a in matching)
        console.warning(
            f"Found {len(matching)} {platform} assets for cmake version {version.name} "
            f"({names}); using {chosen.name}"
        )
    if console:
        console.debug(f"Using asset url {chosen.url}")
    return Ok(chosen)


def select_asset_url(
    version: VersionInfo,
    platform: str,
    arch_candidates: Sequence[str],
    *,
    console: ConsoleProtocol | None = None,
) -> Result[str, NoMatchingAsset]:
    """Like ``select_asset`` but return only the download URL."""
    result = select_asset(version, platform, arch_candidates, console=console)
    if isinstance(result, Err):
        return result
    return Ok(result.value.url)
