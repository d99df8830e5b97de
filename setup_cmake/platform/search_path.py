"""Adding directories to the executable search path.

Two audiences see the change:
- the current process (and its children), through ``PATH``;
- later steps of a GitHub Actions job, through the file named by
  ``GITHUB_PATH``. The runner prepends each line of that file to ``PATH``
  before the next step starts.
"""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path

from setup_cmake.core.result import Err, Ok, Result

from .files import append_line

__all__ = ["PathUpdateError", "add_to_path"]


@dataclass(frozen=True, slots=True)
class PathUpdateError:
    """The ``GITHUB_PATH`` file could not be written."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


def add_to_path(
    directory: Path,
    *,
    env: MutableMapping[str, str] | None = None,
) -> Result[None, PathUpdateError]:
    """Prepend ``directory`` to PATH in ``env`` (default: ``os.environ``).

    A directory already at the front of PATH is not added twice.
    """
    env = os.environ if env is None else env
    entry = str(directory)

    github_path = env.get("GITHUB_PATH")
    if github_path:
        try:
            append_line(Path(github_path), entry)
        except OSError as e:
            return Err(PathUpdateError(path=Path(github_path), message=f"Cannot update PATH file ({e})"))

    current = env.get("PATH", "")
    parts = current.split(os.pathsep) if current else []
    if not parts or parts[0] != entry:
        env["PATH"] = os.pathsep.join([entry, *parts])
    return Ok(None)
