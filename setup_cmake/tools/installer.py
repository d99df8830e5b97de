"""Archive extraction.

CMake ships ``.tar.gz`` archives for Linux and macOS and ``.zip`` for
Windows. Both wrap everything in one top-level directory
(``cmake-3.29.0-linux-x86_64/``), which ``strip_components=1`` removes.

Entries that would escape the destination (absolute paths, ``..``,
drive letters) are skipped. Tar symlinks are recreated when they stay
inside the destination (macOS app bundles rely on them); other links
are skipped.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import stat
import tarfile
import zipfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import IO

from setup_cmake.core.result import Err, Ok, Result

__all__ = ["Installer", "InstallResult", "InstallError", "archive_format"]


@dataclass(frozen=True, slots=True)
class InstallError:
    """Extraction or tool cache failure.

    Attributes:
        archive: The archive (or directory) involved
        message: Human-readable error message
    """

    archive: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.archive}"


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of an extraction.

    Attributes:
        install_dir: Directory the archive was extracted into
        files_count: Number of regular files written
    """

    install_dir: Path
    files_count: int


def archive_format(name: str) -> str | None:
    """Return "zip" or "tar.gz" from a file name, or None if unsupported."""
    lowered = name.lower()
    if lowered.endswith(".zip"):
        return "zip"
    if lowered.endswith((".tar.gz", ".tgz")):
        return "tar.gz"
    return None


def _relative_target(member_name: str, strip_components: int) -> Path | None:
    """Sanitized relative path for an archive member, or None to skip it."""
    posix = PurePosixPath(member_name.replace("\\", "/"))
    if posix.is_absolute():
        return None
    kept = posix.parts[strip_components:]
    if not kept:
        return None
    if any(part in ("", ".", "..") for part in kept) or kept[0].endswith(":"):
        return None
    return Path(*kept)


class Installer:
    """Extracts downloaded archives.

    Usage:
        installer = Installer()
        result = installer.install(archive_path, dest_dir, strip_components=1)
    """

    def install(
        self,
        archive: Path,
        install_dir: Path,
        *,
        strip_components: int = 0,
    ) -> Result[InstallResult, InstallError]:
        """Extract ``archive`` into a fresh ``install_dir``.

        Returns:
            Ok with InstallResult, or Err when the archive is missing, has
            an unsupported format or cannot be read.
        """
        if not archive.exists():
            return Err(InstallError(archive=archive, message="Archive not found"))

        fmt = archive_format(archive.name)
        if fmt is None:
            return Err(InstallError(archive=archive, message="Unsupported archive format"))

        try:
            if install_dir.exists():
                shutil.rmtree(install_dir)
            install_dir.mkdir(parents=True)
            if fmt == "zip":
                count = self._extract_zip(archive, install_dir, strip_components)
            else:
                count = self._extract_tar(archive, install_dir, strip_components)
        except zipfile.BadZipFile as e:
            return Err(InstallError(archive=archive, message=f"Invalid zip file: {e}"))
        except tarfile.TarError as e:
            return Err(InstallError(archive=archive, message=f"Tar extraction failed: {e}"))
        except OSError as e:
            return Err(InstallError(archive=archive, message=f"IO error: {e}"))

        return Ok(InstallResult(install_dir=install_dir, files_count=count))

    def _write(
        self,
        root: Path,
        rel_path: Path,
        open_src: Callable[[], IO[bytes] | None],
        mode: int,
    ) -> bool:
        target = root / rel_path
        if not target.resolve().is_relative_to(root.resolve()):
            return False
        src = open_src()
        if src is None:
            return False
        target.parent.mkdir(parents=True, exist_ok=True)
        with src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
        if mode:
            with contextlib.suppress(OSError):
                os.chmod(target, mode)
        return True

    def _extract_tar(self, archive: Path, install_dir: Path, strip_components: int) -> int:
        count = 0
        links: list[tuple[Path, str]] = []
        with tarfile.open(archive, "r:gz") as tar:
            for member in tar.getmembers():
                if not (member.isreg() or member.issym()):
                    continue
                rel_path = _relative_target(member.name, strip_components)
                if rel_path is None:
                    continue
                if member.issym():
                    links.append((rel_path, member.linkname))
                    continue
                if self._write(
                    install_dir, rel_path, lambda m=member: tar.extractfile(m), member.mode & 0o777
                ):
                    count += 1
        # Links last, so no regular file is ever written through one
        created = [
            link
            for rel_path, link_target in links
            if (link := self._symlink(install_dir, rel_path, link_target)) is not None
        ]
        base = install_dir.resolve()
        for link in created:
            try:
                inside = link.resolve().is_relative_to(base)
            except (OSError, RuntimeError):
                inside = False
            if not inside:
                link.unlink()
        return count

    def _symlink(self, root: Path, rel_path: Path, link_target: str) -> Path | None:
        """Recreate a relative symlink whose target stays inside ``root``."""
        if not link_target or PurePosixPath(link_target).is_absolute():
            return None
        base = root.resolve()
        target = root / rel_path
        parent = target.parent.resolve()
        if not parent.is_relative_to(base):
            return None
        pointee = Path(os.path.normpath(parent / link_target))
        if not pointee.is_relative_to(base):
            return None
        if target.exists() or target.is_symlink():
            return None
        parent.mkdir(parents=True, exist_ok=True)
        os.symlink(link_target, target)
        return target

    def _extract_zip(self, archive: Path, install_dir: Path, strip_components: int) -> int:
        count = 0
        with zipfile.ZipFile(archive, "r") as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue
                unix_mode = info.external_attr >> 16
                if stat.S_ISLNK(unix_mode):
                    continue
                rel_path = _relative_target(info.filename, strip_components)
                if rel_path is None:
                    continue
                if self._write(
                    install_dir, rel_path, lambda i=info: zf.open(i), unix_mode & 0o777
                ):
                    count += 1
        return count
