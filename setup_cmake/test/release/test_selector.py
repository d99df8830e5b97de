"""Tests for setup_cmake.release.selector module."""

from __future__ import annotations

import pytest

from setup_cmake.core.result import Err, Ok
from setup_cmake.output.console import MockConsole
from setup_cmake.release.catalog import normalize_asset
from setup_cmake.release.errors import NoMatchingAsset, NoMatchingVersion
from setup_cmake.release.model import AssetInfo, VersionInfo
from setup_cmake.release.semver import parse_version, satisfies
from setup_cmake.release.selector import (
    prefer_64bit,
    select_asset,
    select_asset_url,
    select_version,
)

DOWNLOAD = "https://github.com/Kitware/CMake/releases/download"


def _asset(name: str) -> AssetInfo:
    asset = normalize_asset({"name": name, "browser_download_url": f"{DOWNLOAD}/{name}"})
    assert asset is not None
    return asset


def _version(name: str, *assets: str, draft: bool = False, prerelease: bool = False) -> VersionInfo:
    return VersionInfo(
        name=name,
        assets=tuple(_asset(a) for a in assets),
        url=f"https://api.github.com/repos/Kitware/CMake/releases/{name}",
        draft=draft,
        prerelease=prerelease,
    )


CATALOG = (
    _version("3.16.2"),
    _version("3.16.1"),
    _version("3.15.6"),
    _version("3.15.5"),
    _version("2.8.12"),
    _version("2.8.10"),
)


def _selected(requested: str, catalog: tuple[VersionInfo, ...] = CATALOG) -> str:
    result = select_version(requested, catalog)
    assert isinstance(result, Ok), result
    return result.value.name


class TestSelectVersion:
    """Highest stable release satisfying the request."""

    def test_empty_request_selects_latest(self) -> None:
        assert _selected("") == "3.16.2"

    def test_exact_version(self) -> None:
        assert _selected("3.15.5") == "3.15.5"

    def test_minor_release(self) -> None:
        assert _selected("3.15") == "3.15.6"

    def test_minor_release_with_x(self) -> None:
        assert _selected("3.15.x") == "3.15.6"

    def test_major_release_with_x(self) -> None:
        assert _selected("3.x") == "3.16.2"

    def test_older_major(self) -> None:
        assert _selected("2.x") == "2.8.12"

    def test_exact_older_version(self) -> None:
        assert _selected("2.8.10") == "2.8.10"

    def test_order_of_catalog_does_not_matter(self) -> None:
        assert _selected("3.x", tuple(reversed(CATALOG))) == "3.16.2"

    def test_non_existent_full_version(self) -> None:
        result = select_version("100.0.0", CATALOG)
        assert result == Err(NoMatchingVersion("100.0.0"))
        assert str(result.error) == "Unable to find version matching 100.0.0"

    def test_non_existent_part_version(self) -> None:
        result = select_version("100.0.x", CATALOG)
        assert isinstance(result, Err)
        assert "Unable to find version matching 100.0" in str(result.error)
        assert result.error.requested == "100.0.x"

    def test_malformed_range(self) -> None:
        result = select_version("latest", CATALOG)
        assert result == Err(NoMatchingVersion("latest"))

    def test_empty_catalog(self) -> None:
        assert isinstance(select_version("", ()), Err)

    def test_drafts_and_prereleases_are_skipped(self) -> None:
        catalog = (
            _version("3.18.0", prerelease=True),
            _version("3.17.0", draft=True),
            *CATALOG,
        )
        assert _selected("", catalog) == "3.16.2"
        assert isinstance(select_version("3.18.0", catalog), Err)

    def test_duplicate_versions_first_wins(self) -> None:
        first = _version("3.16.2", "cmake-3.16.2-Linux-x86_64.tar.gz")
        second = _version("3.16.2")
        result = select_version("", (first, second))
        assert isinstance(result, Ok)
        assert result.value is first

    @pytest.mark.parametrize("requested", ["", "3", "3.15", "2.x", ">=2.8.11 <3.16", "~3.16.0"])
    def test_result_satisfies_range_and_is_maximal(self, requested: str) -> None:
        chosen = parse_version(_selected(requested))
        assert chosen is not None
        assert satisfies(str(chosen), requested)
        for info in CATALOG:
            v = parse_version(info.name)
            assert v is not None
            if satisfies(info.name, requested):
                assert v <= chosen


class TestPrefer64bit:
    def test_keeps_64bit_names(self) -> None:
        assets = [
            _asset("cmake-2.8.12.2-Darwin-universal.tar.gz"),
            _asset("cmake-2.8.12.2-Darwin64-universal.tar.gz"),
        ]
        assert [a.name for a in prefer_64bit(assets)] == ["cmake-2.8.12.2-Darwin64-universal.tar.gz"]

    def test_keeps_macos_universal(self) -> None:
        assets = [
            _asset("cmake-3.19.3-macos10.10-universal.tar.gz"),
            _asset("cmake-3.19.3-macos-universal.tar.gz"),
        ]
        assert [a.name for a in prefer_64bit(assets)] == ["cmake-3.19.3-macos-universal.tar.gz"]


class TestSelectAsset:
    """Single archive for the running platform and architecture."""

    def test_linux_x86_64(self) -> None:
        version = _version(
            "3.19.3",
            "cmake-3.19.3-Linux-x86_64.sh",
            "cmake-3.19.3-Linux-x86_64.tar.gz",
            "cmake-3.19.3-win64-x64.zip",
            "cmake-3.19.3-macos-universal.tar.gz",
        )
        result = select_asset(version, "linux", ("x86_64", "x86"))
        assert isinstance(result, Ok)
        assert result.value.name == "cmake-3.19.3-Linux-x86_64.tar.gz"

    def test_darwin64_beats_darwin(self) -> None:
        version = _version(
            "2.8.12",
            "cmake-2.8.12.2-Darwin-universal.dmg",
            "cmake-2.8.12.2-Darwin-universal.tar.gz",
            "cmake-2.8.12.2-Darwin64-universal.dmg",
            "cmake-2.8.12.2-Darwin64-universal.tar.gz",
        )
        console = MockConsole()
        result = select_asset(version, "darwin", ("x86_64", "x86"), console=console)
        assert isinstance(result, Ok)
        assert result.value.name == "cmake-2.8.12.2-Darwin64-universal.tar.gz"
        assert not console.has_warning()

    def test_macos_universal_beats_deployment_target(self) -> None:
        version = _version(
            "3.19.3",
            "cmake-3.19.3-macos10.10-universal.tar.gz",
            "cmake-3.19.3-macos-universal.tar.gz",
        )
        result = select_asset(version, "darwin", ("x86_64", "x86"))
        assert isinstance(result, Ok)
        assert result.value.name == "cmake-3.19.3-macos-universal.tar.gz"

    def test_linux_i386_fallback(self) -> None:
        version = _version("3.1.0", "cmake-3.1.0-Linux-i386.tar.gz", "cmake-3.1.0-Linux-i386.sh")
        result = select_asset(version, "linux", ("x86_64", "x86"))
        assert isinstance(result, Ok)
        assert result.value.name == "cmake-3.1.0-Linux-i386.tar.gz"

    def test_unrecognized_arch_never_chosen(self) -> None:
        version = _version(
            "3.19.3",
            "cmake-3.19.3-Linux-aarch64.tar.gz",
            "cmake-3.19.3-Linux-x86_64.tar.gz",
        )
        result = select_asset(version, "linux", ("x86_64", "x86"))
        assert isinstance(result, Ok)
        assert result.value.name == "cmake-3.19.3-Linux-x86_64.tar.gz"

    def test_only_unrecognized_arch(self) -> None:
        version = _version("3.19.3", "cmake-3.19.3-Linux-aarch64.tar.gz")
        result = select_asset(version, "linux", ("x86_64", "x86"))
        assert result == Err(
            NoMatchingAsset(platform="linux", version="3.19.3", arch_candidates=("x86_64", "x86"))
        )

    def test_lowercase_names_from_3_20(self) -> None:
        version = _version(
            "3.20.0",
            "cmake-3.20.0-linux-x86_64.tar.gz",
            "cmake-3.20.0-windows-x86_64.zip",
            "cmake-3.20.0-windows-i386.zip",
        )
        linux = select_asset(version, "linux", ("x86_64", "x86"))
        windows = select_asset(version, "win32", ("x86_64", "x86"))
        windows_32 = select_asset(version, "win32", ("x86",))
        assert isinstance(linux, Ok) and linux.value.name == "cmake-3.20.0-linux-x86_64.tar.gz"
        assert isinstance(windows, Ok) and windows.value.name == "cmake-3.20.0-windows-x86_64.zip"
        assert isinstance(windows_32, Ok) and windows_32.value.name == "cmake-3.20.0-windows-i386.zip"

    def test_use_32bit_without_32bit_build(self) -> None:
        version = _version("3.19.3", "cmake-3.19.3-win64-x64.zip")
        result = select_asset(version, "win32", ("x86",))
        assert isinstance(result, Err)
        assert result.error.arch_candidates == ("x86",)

    def test_no_archive_for_platform(self) -> None:
        version = _version("3.19.3", "cmake-3.19.3-win64-x64.msi", "cmake-3.19.3-Linux-x86_64.tar.gz")
        result = select_asset(version, "win32", ("x86_64", "x86"))
        assert result == Err(NoMatchingAsset(platform="win32", version="3.19.3"))
        assert str(result.error) == "Could not find win32 asset for cmake version 3.19.3"

    def test_unknown_platform(self) -> None:
        version = _version("3.19.3", "cmake-3.19.3-Linux-x86_64.tar.gz")
        assert isinstance(select_asset(version, "", ("x86_64", "x86")), Err)

    def test_ambiguous_choice_warns(self) -> None:
        version = _version(
            "3.19.3",
            "cmake-3.19.3-Linux-x86_64.tar.gz",
            "cmake-3.19.3-Linux-x86_64-symbols.tar.gz",
        )
        console = MockConsole()
        result = select_asset(version, "linux", ("x86_64", "x86"), console=console)
        assert isinstance(result, Ok)
        assert result.value.name == "cmake-3.19.3-Linux-x86_64.tar.gz"
        assert console.has_warning()
        assert console.find("Found 2 linux assets for cmake version 3.19.3")

    @pytest.mark.parametrize("candidates", [("x86_64", "x86"), ("x86",)])
    def test_select_asset_url(self, candidates: tuple[str, ...]) -> None:
        version = _version("3.1.0", "cmake-3.1.0-Linux-i386.tar.gz")
        assert select_asset_url(version, "linux", candidates) == Ok(
            f"{DOWNLOAD}/cmake-3.1.0-Linux-i386.tar.gz"
        )
