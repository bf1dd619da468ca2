"""Cross-reference helpers: relative paths and external documentation links."""

from umldoclet.links.external_link import ExternalLink, ExternalLinks
from umldoclet.links.relativize import relative_location, relative_path

__all__ = ["ExternalLink", "ExternalLinks", "relative_location", "relative_path"]
