"""Error types for release resolution."""

from __future__ import annotations

from dataclasses import dataclass

from setup_cmake.tools.http import HttpError

__all__ = [
    "NetworkError",
    "NoMatchingVersion",
    "NoMatchingAsset",
    "ResolveError",
]


@dataclass(frozen=True, slots=True)
class NetworkError:
    """A page of the release listing (or a download) could not be fetched.

    ``status`` is 0 for transport-level failures such as a refused
    connection, a timeout or a rejected credential.
    """

    url: str
    status: int
    message: str

    @classmethod
    def from_http(cls, error: HttpError) -> NetworkError:
        return cls(url=error.url, status=error.status, message=error.message)

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class NoMatchingVersion:
    """No stable release satisfies the requested specifier."""

    requested: str

    def __str__(self) -> str:
        return f"Unable to find version matching {self.requested}"


@dataclass(frozen=True, slots=True)
class NoMatchingAsset:
    """No archive matches the platform and any candidate architecture."""

    platform: str
    version: str
    arch_candidates: tuple[str, ...] = ()

    def __str__(self) -> str:
        msg = f"Could not find {self.platform} asset for cmake version {self.version}"
        if self.arch_candidates:
            msg += f" (architectures tried: {', '.join(self.arch_candidates)})"
        return msg


ResolveError = NetworkError | NoMatchingVersion | NoMatchingAsset
