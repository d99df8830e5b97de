"""Error presentation utilities.

Centralized error formatting and exit code mapping for the CLI commands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from setup_cmake.core.errors import ErrorCode
from setup_cmake.output.console import Style
from setup_cmake.platform.search_path import PathUpdateError
from setup_cmake.release.errors import NetworkError, NoMatchingAsset, NoMatchingVersion
from setup_cmake.tools.installer import InstallError

if TYPE_CHECKING:
    from setup_cmake.output.console import ConsoleProtocol
    from setup_cmake.services.setup import SetupError

__all__ = ["print_setup_error", "setup_error_exit_code"]


def print_setup_error(error: SetupError, console: ConsoleProtocol) -> None:
    """Print a setup error to the console with a hint where one helps."""
    match error:
        case NetworkError(status=401 | 403):
            console.error(str(error))
            console.print("hint: check --github-api-token (or INPUT_GITHUB-API-TOKEN)", Style.DIM)
        case NetworkError():
            console.error(str(error))
        case NoMatchingVersion():
            console.error(str(error))
            console.print("hint: stable releases only; try a range such as 3.x", Style.DIM)
        case NoMatchingAsset(arch_candidates=candidates) if (
            candidates and "x86_64" not in candidates
        ):
            console.error(str(error))
            console.print("hint: drop --use-32bit to allow 64-bit archives", Style.DIM)
        case NoMatchingAsset():
            console.error(str(error))
        case InstallError() | PathUpdateError():
            console.error(str(error))


def setup_error_exit_code(error: SetupError) -> int:
    """Get exit code for a setup error."""
    match error:
        case NoMatchingVersion():
            return int(ErrorCode.USER_ERROR)
        case NoMatchingAsset():
            return int(ErrorCode.ENV_ERROR)
        case NetworkError():
            return int(ErrorCode.NETWORK_ERROR)
        case InstallError() | PathUpdateError():
            return int(ErrorCode.IO_ERROR)
