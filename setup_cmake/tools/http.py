"""HTTP client abstraction.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Canned responses keyed by URL, for tests
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from setup_cmake.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "RealHttpClient",
    "MockHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for transport errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


def _lower_keys(headers: Mapping[str, str]) -> dict[str, str]:
    return {k.lower(): v for k, v in headers.items()}


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A completed HTTP response.

    Header names are stored lower-cased; use ``header()`` for lookups.
    """

    url: str
    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        """Return a header value, or None when the header is absent."""
        return self.headers.get(name.lower())

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations."""

    def get(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[HttpResponse, HttpError]:
        """GET ``url`` with extra request headers.

        Returns:
            Ok with the response, or Err when the request could not be
            completed or the server answered with an error status.
        """
        ...

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Download ``url`` into ``dest``.

        Args:
            url: URL to download
            dest: Destination path
            progress: Optional callback(downloaded, total)
        """
        ...


class RealHttpClient:
    """HTTP client on top of urllib.

    Handles HTTPS with system certificates, timeouts and redirects. Every
    failure (bad status, DNS, refused connection, timeout) is returned as an
    ``HttpError``; nothing is raised.
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = "setup-cmake") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _build_request(self, url: str, headers: Mapping[str, str] | None) -> urllib.request.Request:
        merged = {"User-Agent": self.user_agent}
        if headers:
            merged.update(headers)
        return urllib.request.Request(url, headers=merged)

    def get(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[HttpResponse, HttpError]:
        try:
            req = self._build_request(url, headers)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(
                    HttpResponse(
                        url=url,
                        status=response.status,
                        body=response.read(),
                        headers=_lower_keys(dict(response.headers.items())),
                    )
                )
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        try:
            req = self._build_request(url, None)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                total = int(response.headers.get("Content-Length", 0))
                downloaded = 0
                chunk_size = 64 * 1024

                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    while True:
                        chunk = response.read(chunk_size)
                        if not chunk:
                            break
                        f.write(chunk)
                        downloaded += len(chunk)
                        if progress:
                            progress(downloaded, total)

                return Ok(dest)

        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


@dataclass(frozen=True, slots=True)
class _CannedResponse:
    status: int
    body: bytes
    headers: dict[str, str]


class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are keyed by the exact URL (query string included). Unknown
    URLs answer 404, like a real server would.

    Usage:
        client = MockHttpClient()
        client.set_json(RELEASES_URL, [{"tag_name": "v3.19.2", "assets": []}])
        result = client.get(RELEASES_URL)
    """

    def __init__(self) -> None:
        self._responses: dict[str, _CannedResponse | HttpError] = {}
        self._downloads: dict[str, bytes | HttpError] = {}
        self.calls: list[tuple[str, str]] = []
        self.request_headers: list[dict[str, str]] = []

    def set_json(
        self,
        url: str,
        payload: object,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Serve ``payload`` encoded as JSON for ``url``."""
        self.set_body(url, json.dumps(payload).encode("utf-8"), status=status, headers=headers)

    def set_body(
        self,
        url: str,
        body: bytes,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._responses[url] = _CannedResponse(
            status=status, body=body, headers=_lower_keys(headers or {})
        )

    def set_error(self, url: str, error: HttpError) -> None:
        self._responses[url] = error

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._downloads[url] = response

    def get(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append(("get", url))
        self.request_headers.append(dict(headers or {}))

        canned = self._responses.get(url)
        if canned is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(canned, HttpError):
            return Err(canned)
        return Ok(
            HttpResponse(url=url, status=canned.status, body=canned.body, headers=canned.headers)
        )

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        self.calls.append(("download", url))

        response = self._downloads.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        if progress:
            progress(len(response), len(response))
        return Ok(dest)
