from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from setup_cmake.core.config import Config, load_config_or_default
from setup_cmake.core.errors import ErrorCode
from setup_cmake.core.result import Err
from setup_cmake.output.console import ConsoleProtocol, RichConsole
from setup_cmake.platform.detection import Platform, detect_platform
from setup_cmake.platform.paths import download_dir, tool_cache_dir
from setup_cmake.services.setup import SetupService
from setup_cmake.tools.cache import ToolCache
from setup_cmake.tools.download import Downloader
from setup_cmake.tools.http import HttpClient, RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    platform: Platform
    console: ConsoleProtocol


def build_context(config_path: Path | None = None, *, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)
    config_result = load_config_or_default(config_path)
    if isinstance(config_result, Err):
        console.error(str(config_result.error))
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(config=config_result.value, platform=detect_platform(), console=console)


def build_service(ctx: CLIContext, *, http: HttpClient | None = None) -> SetupService:
    """Wire a SetupService with the real network, cache and download dirs."""
    github = ctx.config.github
    client = http or RealHttpClient(timeout=github.timeout, user_agent=github.user_agent)
    return SetupService(
        http=client,
        config=ctx.config,
        platform=ctx.platform.release_name,
        console=ctx.console,
        cache=ToolCache(tool_cache_dir(ctx.config.cache.root)),
        downloader=Downloader(client, download_dir()),
    )
