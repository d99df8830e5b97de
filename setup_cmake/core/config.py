"""Typed configuration loading.

Configuration is optional. Every field has a default that targets the
upstream CMake releases on GitHub, so a missing file is not an error.

Example ``setup-cmake.toml``:

    [github]
    repo = "Kitware/CMake"
    max_pages = 20
    timeout = 30

    [cache]
    root = "/opt/hostedtoolcache"
    tool_name = "cmake"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GitHubConfig",
    "CacheConfig",
    "load_config",
    "load_config_or_default",
    "DEFAULT_REPO",
    "DEFAULT_API_URL",
    "DEFAULT_MAX_PAGES",
]

DEFAULT_REPO = "Kitware/CMake"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "setup-cmake"
# Upper bound for page-number pagination when no Link header is sent.
DEFAULT_MAX_PAGES = 20
DEFAULT_TIMEOUT = 30.0
DEFAULT_TOOL_NAME = "cmake"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Where and how to query the release listing."""

    repo: str = DEFAULT_REPO
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    max_pages: int = DEFAULT_MAX_PAGES
    timeout: float = DEFAULT_TIMEOUT

    @property
    def releases_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/repos/{self.repo}/releases"


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Tool cache location. ``root=None`` means auto-detect."""

    root: str | None = None
    tool_name: str = DEFAULT_TOOL_NAME


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    github: GitHubConfig = field(default_factory=GitHubConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        github: StrDict = get_table(data, "github") or {}
        cache: StrDict = get_table(data, "cache") or {}

        max_pages = get_int(github, "max_pages")
        if max_pages is not None and max_pages < 1:
            raise ValueError(f"github.max_pages must be >= 1, got {max_pages}")

        timeout_obj = github.get("timeout")
        timeout = DEFAULT_TIMEOUT
        if isinstance(timeout_obj, (int, float)) and not isinstance(timeout_obj, bool):
            if timeout_obj <= 0:
                raise ValueError(f"github.timeout must be positive, got {timeout_obj}")
            timeout = float(timeout_obj)

        return cls(
            github=GitHubConfig(
                repo=get_str(github, "repo") or DEFAULT_REPO,
                api_url=get_str(github, "api_url") or DEFAULT_API_URL,
                user_agent=get_str(github, "user_agent") or DEFAULT_USER_AGENT,
                max_pages=max_pages or DEFAULT_MAX_PAGES,
                timeout=timeout,
            ),
            cache=CacheConfig(
                root=get_str(cache, "root"),
                tool_name=get_str(cache, "tool_name") or DEFAULT_TOOL_NAME,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path | None) -> Result[Config, ConfigError]:
    """Load config if ``path`` is given and exists, else return defaults.

    An explicitly given file that exists but is invalid is still an error.
    """
    if path is None or not path.exists():
        return Ok(Config())
    return load_config(path)
