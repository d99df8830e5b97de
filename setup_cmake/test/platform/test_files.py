"""Tests for setup_cmake.platform.files module."""

from __future__ import annotations

from pathlib import Path

from setup_cmake.platform.files import append_line, atomic_write_text


class TestAtomicWriteText:
    def test_creates_parents_and_writes(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "marker.json"
        atomic_write_text(target, '{"version": "3.19.3"}')
        assert target.read_text(encoding="utf-8") == '{"version": "3.19.3"}'

    def test_replaces_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "x.txt"
        atomic_write_text(target, "old")
        atomic_write_text(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["x.txt"]


class TestAppendLine:
    def test_appends(self, tmp_path: Path) -> None:
        target = tmp_path / "path.txt"
        append_line(target, "/one")
        append_line(target, "/two")
        assert target.read_text(encoding="utf-8") == "/one\n/two\n"
