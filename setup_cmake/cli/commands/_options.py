"""Options shared by ``install`` and ``resolve``.

Environment variable names follow the GitHub Actions input convention
(``INPUT_<NAME>`` with the input name upper-cased and dashes kept), so the
CLI can run unchanged as an action step.
"""

from __future__ import annotations

import typer

__all__ = [
    "ApiTokenOption",
    "CMakeVersionOption",
    "ConfigOption",
    "DEFAULT_CMAKE_VERSION",
    "Use32BitOption",
    "VerboseOption",
    "normalize_token",
    "normalize_version",
]

DEFAULT_CMAKE_VERSION = ""

CMakeVersionOption = typer.Option(
    DEFAULT_CMAKE_VERSION,
    "--cmake-version",
    envvar="INPUT_CMAKE-VERSION",
    help="Semver range of the CMake release (e.g. 3.x, ~3.20, 3.19.3). Empty means latest.",
)
ApiTokenOption = typer.Option(
    None,
    "--github-api-token",
    envvar="INPUT_GITHUB-API-TOKEN",
    help="GitHub token used to list releases (raises the API rate limit).",
)
Use32BitOption = typer.Option(
    False,
    "--use-32bit",
    envvar="INPUT_USE-32BIT",
    help="Only consider 32-bit (x86) archives.",
)
ConfigOption = typer.Option(
    None,
    "--config",
    help="Path to a TOML config file.",
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Show diagnostic output.")


def normalize_token(token: str | None) -> str | None:
    """Treat an empty or blank token as no token."""
    if token is None:
        return None
    token = token.strip()
    return token or None


def normalize_version(requested: str | None) -> str:
    return (requested or "").strip()

