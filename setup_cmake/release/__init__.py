"""Release resolution: catalog building, version and asset selection."""

from setup_cmake.release.catalog import fetch_catalog, normalize_releases
from setup_cmake.release.errors import (
    NetworkError,
    NoMatchingAsset,
    NoMatchingVersion,
    ResolveError,
)
from setup_cmake.release.model import AssetInfo, Catalog, VersionInfo
from setup_cmake.release.selector import select_asset, select_asset_url, select_version

__all__ = [
    # model
    "AssetInfo",
    "Catalog",
    "VersionInfo",
    # errors
    "NetworkError",
    "NoMatchingAsset",
    "NoMatchingVersion",
    "ResolveError",
    # operations
    "fetch_catalog",
    "normalize_releases",
    "select_version",
    "select_asset",
    "select_asset_url",
]
