"""Release catalog builder.

Fetches every page of the GitHub release listing and normalizes each
release into a ``VersionInfo``.

Pagination is chosen from the first response:
- with a ``Link`` header, ``rel="next"`` URLs are followed until a page
  has none;
- without one, ``?page=2``, ``?page=3``, ... are requested until a page
  comes back empty or ``max_pages`` is reached.

Any failed page aborts the whole fetch. A partial catalog could silently
resolve an older version than the one requested, so none is returned.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from setup_cmake.core.config import GitHubConfig
from setup_cmake.core.result import Err, Ok, Result
from setup_cmake.core.structured import as_obj_list, as_str_dict, get_bool, get_list, get_str
from setup_cmake.release.errors import NetworkError
from setup_cmake.release.model import AssetInfo, Catalog, VersionInfo
from setup_cmake.release.naming import infer_arch, infer_filetype, infer_platform
from setup_cmake.release.semver import coerce_version

if TYPE_CHECKING:
    from setup_cmake.output.console import ConsoleProtocol
    from setup_cmake.tools.http import HttpClient

__all__ = [
    "ACCEPT_HEADER",
    "ReleasePage",
    "fetch_catalog",
    "next_link",
    "normalize_asset",
    "normalize_release",
    "normalize_releases",
    "request_headers",
]

ACCEPT_HEADER = "application/vnd.github.v3+json"

_LINK_RE = re.compile(r'<(?P<url>[^>]*)>\s*;\s*rel="(?P<rel>[^"]*)"')


@dataclass(frozen=True, slots=True)
class ReleasePage:
    """One page of the raw listing.

    Attributes:
        releases: Raw release objects, untouched
        link: The ``Link`` header, or None when the server sent none
    """

    releases: tuple[object, ...]
    link: str | None


def request_headers(api_token: str | None) -> dict[str, str]:
    """Headers sent with every listing request."""
    headers = {"Accept": ACCEPT_HEADER}
    if api_token:
        headers["Authorization"] = f"token {api_token}"
    return headers


def next_link(link: str | None) -> str | None:
    """Return the ``rel="next"`` URL from a Link header, if any.

    The header looks like ``<url>; rel="next", <url>; rel="last"``.
    """
    if not link:
        return None
    for m in _LINK_RE.finditer(link):
        if "next" in m["rel"].split():
            return m["url"]
    return None


def normalize_asset(raw: object) -> AssetInfo | None:
    data = as_str_dict(raw)
    if data is None:
        return None
    name = get_str(data, "name")
    url = get_str(data, "browser_download_url")
    if name is None or url is None:
        return None
    return AssetInfo(
        name=name,
        platform=infer_platform(name),
        arch=infer_arch(name),
        filetype=infer_filetype(name),
        url=url,
    )


def normalize_release(raw: object) -> VersionInfo | None:
    """Convert one raw release. Returns None if the tag has no version in it."""
    data = as_str_dict(raw)
    if data is None:
        return None
    tag = get_str(data, "tag_name")
    if tag is None:
        return None
    version = coerce_version(tag)
    if version is None:
        return None

    assets: list[AssetInfo] = []
    for raw_asset in get_list(data, "assets") or []:
        asset = normalize_asset(raw_asset)
        if asset is not None:
            assets.append(asset)

    return VersionInfo(
        name=str(version),
        assets=tuple(assets),
        url=get_str(data, "url") or "",
        draft=get_bool(data, "draft"),
        prerelease=get_bool(data, "prerelease"),
    )


def normalize_releases(raw_releases: Iterable[object]) -> Catalog:
    """Normalize in order, dropping releases whose tag is not a version."""
    catalog: list[VersionInfo] = []
    for raw in raw_releases:
        info = normalize_release(raw)
        if info is not None:
            catalog.append(info)
    return tuple(catalog)


def _fetch_page(
    http: HttpClient, url: str, headers: dict[str, str]
) -> Result[ReleasePage, NetworkError]:
    result = http.get(url, headers)
    if isinstance(result, Err):
        return Err(NetworkError.from_http(result.error))

    response = result.value
    if response.status != 200:
        return Err(NetworkError(url=url, status=response.status, message="Unexpected status"))

    try:
        payload: object = json.loads(response.text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(NetworkError(url=url, status=response.status, message=f"JSON parse error: {e}"))

    releases = as_obj_list(payload)
    if releases is None:
        return Err(
            NetworkError(url=url, status=response.status, message="Expected JSON array of releases")
        )
    return Ok(ReleasePage(releases=tuple(releases), link=response.header("link")))


def fetch_catalog(
    http: HttpClient,
    api_token: str | None = None,
    *,
    config: GitHubConfig | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[Catalog, NetworkError]:
    """Fetch and normalize every release of the configured repository.

    Args:
        http: HTTP client used for each page request
        api_token: Optional GitHub token, sent as ``Authorization: token ...``
        config: Listing location and page limit (defaults to Kitware/CMake)
        console: Receives debug output about pagination

    Returns:
        Ok with the catalog (empty if the first page is empty), or Err with
        the NetworkError of the first page that failed.
    """
    config = config or GitHubConfig()
    headers = request_headers(api_token)

    first = _fetch_page(http, config.releases_url, headers)
    if isinstance(first, Err):
        return first

    raw: list[object] = list(first.value.releases)

    if first.value.link is not None:
        if console:
            console.debug("Using link headers for pagination")
        visited = {config.releases_url}
        url = next_link(first.value.link)
        while url is not None and url not in visited:
            visited.add(url)
            page = _fetch_page(http, url, headers)
            if isinstance(page, Err):
                return page
            raw.extend(page.value.releases)
            url = next_link(page.value.link)
    elif raw:
        if console:
            console.debug("Using page count for pagination")
        # Stop at the first empty page, even if later pages might not be.
        for page_number in range(2, config.max_pages + 1):
            page = _fetch_page(http, f"{config.releases_url}?page={page_number}", headers)
            if isinstance(page, Err):
                return page
            if not page.value.releases:
                break
            raw.extend(page.value.releases)

    catalog = normalize_releases(raw)
    if console:
        console.debug(f"Fetched {len(raw)} releases, {len(catalog)} with a usable version")
    return Ok(catalog)
