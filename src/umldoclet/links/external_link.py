"""Links to externally hosted API documentation.

Each external link is a document root plus a package list. The package list is
fetched on the first lookup and cached for the rest of the run, also when the fetch
fails (as an empty set).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit, urlunsplit

from umldoclet.core.exceptions import ConfigurationError
from umldoclet.core.once import OnceCell
from umldoclet.core.outcome import Recoverable, Success
from umldoclet.links.package_list import PACKAGE_LIST, PackageListFetcher

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Iterable

    from umldoclet.core.models.config_models import AppConfig
    from umldoclet.core.outcome import Outcome

    PackageListSource = Callable[[str], Outcome[frozenset[str]]]

EXTERNAL_MARKER = ("is-external", "true")


def _is_wellformed_uri(value: str) -> bool:
    if not value or "\\" in value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        _ = parts.port
    except ValueError:
        return False
    # A single-letter scheme is a drive letter, not a URI
    return len(parts.scheme) != 1


def create_uri(value: str) -> str:
    """Return ``value`` as a URI, falling back to an existing filesystem path.

    Raises:
        ConfigurationError: If ``value`` is neither a well-formed URI nor an existing path.

    """
    if _is_wellformed_uri(value):
        return value
    candidate = Path(value).expanduser()
    if candidate.exists():
        return candidate.resolve().as_uri()
    msg = f"Invalid link location '{value}': not a URI and not an existing path"
    raise ConfigurationError(msg)


def add_path_component(uri: str, component: str) -> str:
    """Append a path component to the path of ``uri``, keeping query and fragment."""
    parts = urlsplit(uri)
    path = parts.path
    if not path:
        path = component
    elif path.endswith("/") or component.startswith("/"):
        path = path + component
    else:
        path = f"{path}/{component}"
    return urlunsplit(parts._replace(path=path))


def add_query_param(uri: str, name: str, value: str) -> str:
    """Append ``name=value`` to the query of ``uri``."""
    parts = urlsplit(uri)
    query = f"{parts.query}&{name}={value}" if parts.query else f"{name}={value}"
    return urlunsplit(parts._replace(query=query))


class ExternalLink:
    """One externally hosted documentation root.

    Online style (no separate package list): the package list is read from
    ``<apidoc>/package-list`` and resolved references carry the external marker.
    Offline style: the package list is configured separately, for example a local
    copy of the list for remote documents.
    """

    def __init__(
        self,
        destination_directory: str | os.PathLike[str],
        apidoc: str,
        package_list: str | None = None,
        *,
        error_logger: logging.Logger,
        console_logger: logging.Logger | None = None,
        fetcher: PackageListSource | None = None,
    ) -> None:
        """Initialize the external link.

        Args:
            destination_directory: Root of the generated documentation, base for relative URIs
            apidoc: Document root URI (or existing path)
            package_list: Package list URI (or existing path); ``None`` for online style
            error_logger: Logger for package-list failures
            console_logger: Logger for debug output
            fetcher: Package list source, ``PackageListFetcher`` by default

        Raises:
            ConfigurationError: If a location is malformed and not an existing path.

        """
        self.destination_directory = Path(destination_directory)
        self.online = package_list is None
        self.doc_uri = create_uri(apidoc)
        self.package_list_uri = add_path_component(self.doc_uri, PACKAGE_LIST) if package_list is None else create_uri(package_list)
        self.error_logger = error_logger
        self.console_logger = console_logger or error_logger
        self._fetcher: PackageListSource = fetcher or PackageListFetcher()
        self._packages: OnceCell[frozenset[str]] = OnceCell()

    def __repr__(self) -> str:
        """Short description for logs."""
        style = "online" if self.online else "offline"
        return f"ExternalLink({self.doc_uri!r}, {style})"

    def packages(self) -> frozenset[str]:
        """Packages documented at this location, fetched at most once."""
        return self._packages.get_or_compute(self._load_packages)

    def _load_packages(self) -> frozenset[str]:
        location = self.make_absolute(self.package_list_uri)
        outcome = self._fetcher(location)
        match outcome:
            case Success(value=packages):
                self.console_logger.debug("Read %d packages from %s", len(packages), location)
            case Recoverable(warning=warning):
                self.error_logger.warning("%s; no external references to %s will be created.", warning, self.doc_uri)
        return outcome.unwrap()

    def make_absolute(self, uri: str) -> str:
        """Resolve a relative URI against the destination directory as a ``file:`` URI."""
        parts = urlsplit(uri)
        if parts.scheme:
            return uri
        path = os.path.normpath(os.path.abspath(self.destination_directory / unquote(parts.path)))
        absolute = urlsplit(Path(path).as_uri())
        return urlunsplit(absolute._replace(query=parts.query, fragment=parts.fragment))

    def resolve_type(self, package_name: str, type_name: str) -> str | None:
        """Return the absolute URI of the documentation page of a type, if documented here.

        Args:
            package_name: Package of the type, e.g. ``java.io``
            type_name: Type name within the package, e.g. ``Serializable``

        Returns:
            URI of ``<pkg/as/path>/<Type>.html`` under the document root, or ``None``.

        """
        if not package_name or package_name not in self.packages():
            return None
        document = f"{package_name.replace('.', '/')}/{type_name}.html"
        uri = self.make_absolute(add_path_component(self.doc_uri, document))
        if self.online:
            uri = add_query_param(uri, *EXTERNAL_MARKER)
        return uri


class ExternalLinks:
    """All configured external links, consulted in configuration order."""

    def __init__(self, links: Iterable[ExternalLink] = ()) -> None:
        """Initialize with already constructed links."""
        self.links: tuple[ExternalLink, ...] = tuple(links)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        error_logger: logging.Logger,
        console_logger: logging.Logger | None = None,
        fetcher: PackageListSource | None = None,
    ) -> ExternalLinks:
        """Create the links declared in ``config``, failing fast on malformed locations."""
        source = fetcher or PackageListFetcher(timeout_seconds=config.package_list_timeout_seconds)
        return cls(
            ExternalLink(
                config.destination_directory,
                link.apidoc,
                link.package_list,
                error_logger=error_logger,
                console_logger=console_logger,
                fetcher=source,
            )
            for link in config.links
        )

    def __len__(self) -> int:
        """Number of configured links."""
        return len(self.links)

    def resolve_type(self, package_name: str, type_name: str) -> str | None:
        """First external URI for the type, or ``None`` when no link documents its package."""
        for link in self.links:
            if uri := link.resolve_type(package_name, type_name):
                return uri
        return None
