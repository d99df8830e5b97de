"""Tests for setup_cmake.platform.detection module."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import patch

import pytest

from setup_cmake.platform.detection import (
    Platform,
    arch_candidates,
    detect_platform,
)


@pytest.fixture(autouse=True)
def clear_detection_cache() -> Iterator[None]:
    """Detection results are cached; reset them around each test."""
    detect_platform.cache_clear()
    yield
    detect_platform.cache_clear()


class TestPlatformEnum:
    """Test Platform enum properties."""

    def test_str(self) -> None:
        assert str(Platform.LINUX) == "linux"
        assert str(Platform.MACOS) == "macos"

    def test_release_names(self) -> None:
        """Release names follow the asset naming rules, not the enum names."""
        assert Platform.LINUX.release_name == "linux"
        assert Platform.MACOS.release_name == "darwin"
        assert Platform.WINDOWS.release_name == "win32"
        assert Platform.UNKNOWN.release_name == ""


class TestArchCandidates:
    """Priority order of architectures handed to asset selection."""

    def test_default_prefers_64bit(self) -> None:
        assert arch_candidates() == ("x86_64", "x86")

    def test_32bit_only(self) -> None:
        assert arch_candidates(use_32bit=True) == ("x86",)


class TestDetectPlatform:
    @pytest.mark.parametrize(
        ("sys_platform", "expected"),
        [
            ("linux", Platform.LINUX),
            ("darwin", Platform.MACOS),
            ("win32", Platform.WINDOWS),
            ("cygwin", Platform.WINDOWS),
            ("freebsd13", Platform.UNKNOWN),
        ],
    )
    def test_mapping(self, sys_platform: str, expected: Platform) -> None:
        with patch("setup_cmake.platform.detection._sys.platform", sys_platform):
            assert detect_platform() == expected

    def test_cached(self) -> None:
        assert detect_platform() is detect_platform()
