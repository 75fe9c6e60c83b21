"""Entry point selection: which nodes the pattern detectors start from."""

from __future__ import annotations

from urllib.parse import urlparse

from flowmap.graph.builder import FlowGraph, canonical_url
from flowmap.graph.models import PageNode, PageType


def _is_entry(page: PageNode) -> bool:
    if page.page_type is PageType.HOME or page.depth == 0:
        return True
    return urlparse(page.url).path.endswith("/") and page.depth <= 1


def select_entry_points(graph: FlowGraph, start_url: str | None = None) -> list[str]:
    """Return the deduplicated list of search roots.

    The union, in order, of the explicit *start_url*, every ``home`` page,
    every depth-0 page and every page whose URL path ends in ``/`` at depth
    1 or less.  The start URL is kept even when it is not a node of the graph.
    """
    start = canonical_url(start_url) if start_url else None
    entry_points: dict[str, None] = {}

    if start:
        entry_points[start] = None

    for node in graph:
        if _is_entry(node.page):
            entry_points.setdefault(node.page.url, None)

    if not entry_points and start:
        return [start]
    return list(entry_points)
