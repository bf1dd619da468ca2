"""Fetching and parsing of package-list resources.

A package list is a UTF-8 text resource with one package name per line. It is read
from ``file:`` URIs directly and from ``http(s):`` URIs with aiohttp.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

import aiohttp

from umldoclet.core.outcome import Outcome, Recoverable, Success

PACKAGE_LIST = "package-list"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Newer doclets list modules in the same file; they are not packages.
_MODULE_PREFIX = "module:"


def parse_package_list(text: str) -> frozenset[str]:
    """Parse package-list content: trimmed, non-blank lines."""
    packages: set[str] = set()
    for line in text.splitlines():
        name = line.strip()
        if name and not name.startswith(_MODULE_PREFIX):
            packages.add(name)
    return frozenset(packages)


class PackageListFetcher:
    """Reads a package list from an absolute URI.

    Failures never raise: they are returned as ``Recoverable`` with an empty package set,
    so that a broken external link only drops its cross-references.
    """

    def __init__(self, *, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        """Initialize the fetcher.

        Args:
            timeout_seconds: Total timeout for one HTTP fetch

        """
        self.timeout_seconds = timeout_seconds

    def __call__(self, uri: str) -> Outcome[frozenset[str]]:
        """Fetch and parse the package list at ``uri``.

        Must not be called from a thread that runs an event loop; the HTTP fetch
        runs its own loop.
        """
        scheme = urlsplit(uri).scheme.lower()
        try:
            if scheme == "file":
                text = self._read_file(uri)
            elif scheme in ("http", "https"):
                text = asyncio.run(self._fetch_http(uri))
            else:
                return Recoverable(frozenset(), f"Unsupported package-list location: {uri}")
        except (OSError, aiohttp.ClientError, TimeoutError, UnicodeDecodeError, ValueError) as e:
            return Recoverable(frozenset(), f"Cannot read package-list from {uri}: {e}")
        return Success(parse_package_list(text))

    @staticmethod
    def _read_file(uri: str) -> str:
        path = Path(url2pathname(urlsplit(uri).path))
        return path.read_bytes().decode("utf-8")

    async def _fetch_http(self, uri: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session, session.get(uri) as response:
            response.raise_for_status()
            return await response.text(encoding="utf-8")
