"""HTTP fetcher with optional Playwright fallback for JS-rendered pages."""

from __future__ import annotations

import logging
import re

import httpx

from flowmap.config import settings
from flowmap.scraper.models import Credentials, RawPage

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# SPA / JS-rendered page detection heuristics
# ---------------------------------------------------------------------------
_SPA_PATTERNS = [
    re.compile(r'<div[^>]+id=["\'](?:root|app)["\']', re.IGNORECASE),
    re.compile(r"window\.__NEXT_DATA__", re.IGNORECASE),
    re.compile(r"ng-version=", re.IGNORECASE),
    re.compile(r"data-reactroot", re.IGNORECASE),
]


def _is_spa(html: str) -> bool:
    """Return ``True`` if *html* looks like a JavaScript SPA that needs rendering."""
    for pattern in _SPA_PATTERNS:
        if pattern.search(html):
            return True
    # Very little visible text relative to total HTML size.
    no_scripts = re.sub(
        r"<(script|style)[^>]*>.*?</(script|style)>", "", html, flags=re.IGNORECASE | re.DOTALL
    )
    stripped = re.sub(r"<[^>]+>", "", no_scripts).strip()
    return len(html) > 2000 and len(stripped) < 200


def _fetch_with_playwright(url: str) -> RawPage:
    """Render *url* with a headless Chromium browser and return its HTML.

    Playwright is imported lazily; install the ``browser`` extra to use it.
    """
    from playwright.sync_api import sync_playwright  # noqa: PLC0415

    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=True)
        page = browser.new_page(user_agent=settings.user_agent)
        page.goto(
            url,
            timeout=int(settings.request_timeout * 1000),
            wait_until="networkidle",
        )
        html = page.content()
        browser.close()

    return RawPage(url=url, html=html, status_code=200)


def make_client(credentials: Credentials | None = None, timeout: float | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` configured from ``settings``."""
    auth = (credentials.username, credentials.password) if credentials else None
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout if timeout is None else timeout,
        follow_redirects=True,
        auth=auth,
    )


def fetch_url(url: str, client: httpx.Client | None = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Uses *client* when given, otherwise a short-lived client built by
    :func:`make_client`.  When ``settings.render_js`` is enabled and the
    response looks like a JavaScript SPA, the page is re-rendered with a
    headless Playwright browser.  If rendering fails for any reason the
    static HTML is kept and a warning is logged.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
    """
    if client is None:
        with make_client() as own_client:
            response = own_client.get(url)
    else:
        response = client.get(url)
    response.raise_for_status()

    raw = RawPage(url=url, html=response.text, status_code=response.status_code)

    if settings.render_js and _is_spa(raw.html):
        logger.debug("[CRAWL] %s looks like an SPA, rendering with Playwright", url)
        try:
            raw = _fetch_with_playwright(url)
        except Exception as exc:  # noqa: BLE001
            logger.warning("[CRAWL] Rendering %s failed, keeping static HTML: %s", url, exc)

    return raw
