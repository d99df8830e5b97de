"""Normalized release catalog model."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["AssetInfo", "VersionInfo", "Catalog"]


@dataclass(frozen=True, slots=True)
class AssetInfo:
    """One downloadable file attached to a release.

    ``platform``, ``arch`` and ``filetype`` are inferred from ``name`` and
    are empty strings when nothing was recognized. Empty is an ordinary
    value here: an ``aarch64`` build has ``arch == ""`` and simply never
    matches an x86 request.

    Attributes:
        name: Filename as published
        platform: "linux", "darwin", "win32" or ""
        arch: "x86_64", "x86" or ""
        filetype: "archive", "package", "script", "text" or ""
        url: Absolute download URL, passed through untouched
    """

    name: str
    platform: str
    arch: str
    filetype: str
    url: str


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """One accepted release.

    Attributes:
        name: Canonical ``MAJOR.MINOR.PATCH`` coerced from the tag
        assets: Assets in the order the listing reported them
        url: The release's own API URL
        draft: Copied from the listing
        prerelease: Copied from the listing
    """

    name: str
    assets: tuple[AssetInfo, ...]
    url: str
    draft: bool = False
    prerelease: bool = False


# All accepted releases across every page, in request order.
type Catalog = tuple[VersionInfo, ...]
