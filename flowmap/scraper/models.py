"""Data models for the crawl pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class LinkContext:
    """Where on the page a link was found."""

    in_header: bool = False
    in_footer: bool = False
    in_nav: bool = False
    in_sidebar: bool = False
    is_global_nav: bool = False
    position: str = "middle"  # top | middle | bottom


@dataclass
class RawLink:
    """An internal ``<a href>`` resolved to an absolute, fragment-free URL."""

    href: str
    text: str = ""
    context: LinkContext = field(default_factory=LinkContext)


@dataclass
class CrawledPage:
    """A fetched page with its extracted title and internal links."""

    url: str
    title: str
    html: str
    depth: int
    links: List[RawLink] = field(default_factory=list)
    referrer: Optional[str] = None


@dataclass
class Credentials:
    """HTTP basic-auth credentials for sites behind a login."""

    username: str
    password: str
