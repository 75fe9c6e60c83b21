"""End-to-end flow mapping pipeline.

``map_site_flows`` orchestrates the full run from a start URL to formatted
output:

    crawl → analyze pages → global-nav pass → extract flows → format
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence

from flowmap.classifier import analyze_page, classify_global_navigation
from flowmap.config import settings
from flowmap.engine import extract_flows
from flowmap.exceptions import CrawlCancelled
from flowmap.formatter import format_output
from flowmap.graph.models import ClassifiedPage
from flowmap.scraper.crawler import Fetcher, crawl_site
from flowmap.scraper.models import CrawledPage, Credentials

logger = logging.getLogger(__name__)


def classify_pages(crawled: Sequence[CrawledPage], threshold: Optional[float] = None) -> List[ClassifiedPage]:
    """Analyze every crawled page, then re-split links by cross-page frequency."""
    threshold = settings.global_nav_threshold if threshold is None else threshold
    analyzed = [analyze_page(page) for page in crawled]
    return classify_global_navigation(crawled, analyzed, threshold)


def map_site_flows(
    start_url: str,
    max_depth: Optional[int] = None,
    max_pages: Optional[int] = None,
    credentials: Optional[Credentials] = None,
    cancel_event: Optional[threading.Event] = None,
    fetch: Optional[Fetcher] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """Crawl *start_url* and return formatted, ranked flows.

    Pipeline:
        1. :func:`~flowmap.scraper.crawler.crawl_site` — BFS crawl.
        2. :func:`~flowmap.classifier.page_analyzer.analyze_page` — page types
           and context-based link split.
        3. :func:`~flowmap.classifier.global_nav.classify_global_navigation` —
           frequency-based global links.
        4. :func:`~flowmap.engine.extract_flows` — detection, noise reduction,
           ranking.
        5. :func:`~flowmap.formatter.format_output` — view-models.

    Raises:
        CrawlError: If the start URL cannot be fetched.
        CrawlCancelled: If *cancel_event* is set before extraction starts.
    """
    logger.info("[PIPELINE] Crawling %s", start_url)
    crawled = crawl_site(
        start_url,
        max_depth=max_depth,
        max_pages=max_pages,
        credentials=credentials,
        cancel_event=cancel_event,
        fetch=fetch,
        timeout=timeout,
    )

    pages = classify_pages(crawled)
    logger.info("[PIPELINE] Analyzed %s page(s)", len(pages))

    # The core always runs to completion, so cancellation is checked here only.
    if cancel_event is not None and cancel_event.is_set():
        raise CrawlCancelled(f"Flow extraction for {start_url} cancelled")

    flows = extract_flows(pages, start_url)
    logger.info("[PIPELINE] %s flow(s) ranked", len(flows))
    return format_output(flows, pages, start_url)
