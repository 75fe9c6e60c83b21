"""Link extraction: turns a :class:`RawPage` into a title plus internal links.

Each link records where on the page it was found (header, footer, nav,
sidebar, rough vertical position).  The classifier uses that context to
separate global navigation from in-content links.
"""

from __future__ import annotations

import re
from typing import List, Tuple
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from flowmap.scraper.models import LinkContext, RawLink, RawPage

_NAV_CLASS_RE = re.compile(r"nav|menu|header|footer")
_SKIPPED_SCHEMES = ("javascript:", "mailto:", "tel:", "data:")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_title(soup: BeautifulSoup) -> str:
    """Return the ``<title>`` text, else the first ``<h1>``, else ``"Untitled"``."""
    if soup.title and soup.title.get_text(strip=True):
        return soup.title.get_text(strip=True)
    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        return h1.get_text(strip=True)
    return "Untitled"


def _has_parent(elem: Tag, name: str, role: str) -> bool:
    return elem.find_parent(name) is not None or elem.find_parent(attrs={"role": role}) is not None


def _class_string(elem: Tag | None) -> str:
    if elem is None:
        return ""
    classes = elem.get("class") or []
    return " ".join(classes) if isinstance(classes, list) else str(classes)


def _position(index: int, total: int) -> str:
    ratio = index / total if total else 0.0
    if ratio < 0.2:
        return "top"
    if ratio > 0.8:
        return "bottom"
    return "middle"


def _link_context(elem: Tag, index: int, total: int) -> LinkContext:
    in_header = _has_parent(elem, "header", "banner")
    in_footer = _has_parent(elem, "footer", "contentinfo")
    in_nav = _has_parent(elem, "nav", "navigation")
    in_sidebar = (
        _has_parent(elem, "aside", "complementary")
        or elem.find_parent(class_="sidebar") is not None
    )
    nav_classes = bool(
        _NAV_CLASS_RE.search(_class_string(elem))
        or _NAV_CLASS_RE.search(_class_string(elem.parent))
    )
    return LinkContext(
        in_header=in_header,
        in_footer=in_footer,
        in_nav=in_nav,
        in_sidebar=in_sidebar,
        is_global_nav=in_header or in_footer or in_nav or in_sidebar or nav_classes,
        position=_position(index, total),
    )


def _resolve(base_url: str, href: str) -> str | None:
    """Return the absolute, fragment-free form of *href*, or ``None`` to skip it."""
    href = href.strip()
    if not href or href.startswith("#") or href.lower().startswith(_SKIPPED_SCHEMES):
        return None
    absolute = urldefrag(urljoin(base_url, href))[0]
    if urlparse(absolute).scheme not in ("http", "https"):
        return None
    return absolute


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def extract_links(soup: BeautifulSoup, base_url: str, base_domain: str | None = None) -> List[RawLink]:
    """Return internal links in document order.

    Only links on *base_domain* (default: the host of *base_url*) are kept.
    Repeated hrefs are kept as separate links; the graph builder collapses them.
    """
    domain = base_domain or urlparse(base_url).hostname
    body = soup.body or soup
    elements = body.find_all(True)
    positions = {id(el): i for i, el in enumerate(elements)}
    total = len(elements)

    links: List[RawLink] = []
    for anchor in soup.find_all("a", href=True):
        absolute = _resolve(base_url, anchor["href"])
        if absolute is None or urlparse(absolute).hostname != domain:
            continue
        links.append(
            RawLink(
                href=absolute,
                text=anchor.get_text(" ", strip=True),
                context=_link_context(anchor, positions.get(id(anchor), 0), total),
            )
        )
    return links


def extract_page(raw: RawPage, base_domain: str | None = None) -> Tuple[str, List[RawLink]]:
    """Return ``(title, links)`` for *raw*."""
    soup = parse_html(raw.html)
    return _extract_title(soup), extract_links(soup, raw.url, base_domain)
