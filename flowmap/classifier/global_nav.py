"""Frequency-based global navigation detection.

Links that appear on most pages of a site are almost always header, footer
or menu chrome.  This pass refines the per-page split made by
:func:`~flowmap.classifier.page_analyzer.analyze_page`: a link stays global
if the analyzer marked it so, and also becomes global when its target is
frequent across the site.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence
from urllib.parse import urlparse, urlunparse

from flowmap.graph.models import ClassifiedPage, LinkClass, LinkEdge
from flowmap.scraper.models import CrawledPage

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.6
# Below this many pages every link looks "frequent", so the signal is skipped.
MIN_PAGES_FOR_FREQUENCY = 3


def normalize_href(href: str) -> Optional[str]:
    """Drop query, fragment and trailing slashes; ``None`` for unparsable input."""
    try:
        parsed = urlparse(href)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    path = parsed.path.rstrip("/") or "/"
    return urlunparse((parsed.scheme, parsed.netloc, path, "", "", ""))


def global_hrefs(pages: Sequence[CrawledPage], threshold: float = DEFAULT_THRESHOLD) -> set[str]:
    """Return normalised hrefs linked from at least *threshold* of the pages."""
    if len(pages) < MIN_PAGES_FOR_FREQUENCY:
        return set()
    total = len(pages)
    counts: Dict[str, int] = {}
    for page in pages:
        unique = {normalize_href(link.href) for link in page.links}
        unique.discard(None)
        for href in unique:
            counts[href] = counts.get(href, 0) + 1  # type: ignore[index]
    return {href for href, count in counts.items() if count / total >= threshold}


def classify_global_navigation(
    crawled: Sequence[CrawledPage],
    classified: Sequence[ClassifiedPage],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[ClassifiedPage]:
    """Return new classified pages with the analyzer split refined by frequency.

    *crawled* and *classified* are parallel sequences (same page order).  A
    link is global when the analyzer already put its target in the page's
    global links or when its normalised target is frequent across the site;
    all others are contextual.  Links keep their on-page order.
    """
    frequent = global_hrefs(crawled, threshold)
    logger.debug("[CLASSIFY] %s frequent link target(s) marked global", len(frequent))

    result: List[ClassifiedPage] = []
    for page, classified_page in zip(crawled, classified):
        by_context = {edge.target for edge in classified_page.global_links}
        contextual: List[LinkEdge] = []
        global_: List[LinkEdge] = []
        for link in page.links:
            by_frequency = normalize_href(link.href) in frequent
            if by_frequency or link.href in by_context:
                global_.append(LinkEdge(page.url, link.href, link.text, LinkClass.GLOBAL))
            else:
                contextual.append(LinkEdge(page.url, link.href, link.text, LinkClass.CONTEXTUAL))
        result.append(
            ClassifiedPage(
                node=classified_page.node,
                contextual_links=tuple(contextual),
                global_links=tuple(global_),
            )
        )
    return result
