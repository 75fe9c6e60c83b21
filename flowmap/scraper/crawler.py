"""Breadth-first site crawler.

Strategy:
- BFS from the start URL, limited by ``max_depth`` and ``max_pages``
- internal links only (same host as the start URL)
- each URL fetched at most once
- a failed page is logged and skipped; only a failed start URL is fatal
- the cancellation event is checked before every fetch
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable, List, Optional
from urllib.parse import urldefrag, urlparse

import httpx

from flowmap.config import settings
from flowmap.exceptions import CrawlCancelled, CrawlError
from flowmap.scraper.extractor import extract_page
from flowmap.scraper.fetcher import fetch_url, make_client
from flowmap.scraper.models import CrawledPage, Credentials, RawPage

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], RawPage]


def crawl_site(
    start_url: str,
    max_depth: Optional[int] = None,
    max_pages: Optional[int] = None,
    credentials: Optional[Credentials] = None,
    cancel_event: Optional[threading.Event] = None,
    fetch: Optional[Fetcher] = None,
    timeout: Optional[float] = None,
) -> List[CrawledPage]:
    """Crawl *start_url* and return the fetched pages in visit order.

    Args:
        start_url: Absolute URL to start from.
        max_depth: Link distance limit (default ``settings.max_depth``).
        max_pages: Page count limit (default ``settings.max_pages``).
        credentials: Optional HTTP basic-auth credentials.
        cancel_event: Checked before every fetch; when set the crawl stops
            with :class:`~flowmap.exceptions.CrawlCancelled`.
        fetch: Replacement for :func:`~flowmap.scraper.fetcher.fetch_url`,
            mainly for tests.
        timeout: Per-request timeout in seconds (default
            ``settings.request_timeout``).

    Raises:
        CrawlError: If the start URL itself cannot be fetched.
        CrawlCancelled: If *cancel_event* is set.
    """
    max_depth = settings.max_depth if max_depth is None else max_depth
    max_pages = settings.max_pages if max_pages is None else max_pages
    start_url = urldefrag(start_url)[0]
    base_domain = urlparse(start_url).hostname

    client: Optional[httpx.Client] = None
    if fetch is None:
        client = make_client(credentials, timeout)
        fetch = lambda url: fetch_url(url, client=client)  # noqa: E731

    visited: set[str] = set()
    pages: List[CrawledPage] = []
    queue: deque[tuple[str, int, Optional[str]]] = deque([(start_url, 0, None)])

    try:
        while queue and len(pages) < max_pages:
            url, depth, referrer = queue.popleft()
            if url in visited or depth > max_depth:
                continue
            if cancel_event is not None and cancel_event.is_set():
                raise CrawlCancelled(f"Crawl of {start_url} cancelled")

            visited.add(url)
            if pages and settings.rate_limit_delay > 0:
                time.sleep(settings.rate_limit_delay)

            logger.info("[CRAWL] depth=%s %s", depth, url)
            try:
                raw = fetch(url)
            except (httpx.HTTPError, OSError) as exc:
                if url == start_url:
                    raise CrawlError(f"Failed to fetch {url}: {exc}") from exc
                logger.warning("[CRAWL] Failed to fetch %s: %s", url, exc)
                continue

            title, links = extract_page(raw, base_domain)
            pages.append(
                CrawledPage(
                    url=url,
                    title=title,
                    html=raw.html,
                    depth=depth,
                    links=links,
                    referrer=referrer,
                )
            )

            if depth < max_depth:
                for link in links:
                    if link.href not in visited:
                        queue.append((link.href, depth + 1, url))
    finally:
        if client is not None:
            client.close()

    logger.info("[CRAWL] Finished %s | pages=%s", start_url, len(pages))
    return pages
