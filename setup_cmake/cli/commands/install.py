from __future__ import annotations

from pathlib import Path

import typer

from setup_cmake.cli.commands._options import (
    ApiTokenOption,
    CMakeVersionOption,
    ConfigOption,
    Use32BitOption,
    VerboseOption,
    normalize_token,
    normalize_version,
)
from setup_cmake.cli.context import build_context, build_service
from setup_cmake.core.result import Err
from setup_cmake.output.errors import print_setup_error, setup_error_exit_code


def install(
    cmake_version: str = CMakeVersionOption,
    github_api_token: str | None = ApiTokenOption,
    use_32bit: bool = Use32BitOption,
    config: Path | None = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Install the best matching CMake release and add it to PATH."""
    ctx = build_context(config, verbose=verbose)
    service = build_service(ctx)
    result = service.install(
        normalize_version(cmake_version),
        api_token=normalize_token(github_api_token),
        use_32bit=use_32bit,
    )
    if isinstance(result, Err):
        print_setup_error(result.error, ctx.console)
        raise typer.Exit(code=setup_error_exit_code(result.error))
