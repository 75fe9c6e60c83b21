"""Page classification: turns a :class:`CrawledPage` into a :class:`ClassifiedPage`.

Responsibilities:
- assign a page type (home, login, product, checkout, ...)
- detect structural flags (forms, login fields, product grids, ...)
- split outbound links into global navigation and contextual links
"""

from __future__ import annotations

from typing import Iterable, List, Set
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from flowmap.graph.models import ClassifiedPage, LinkClass, LinkEdge, PageMetadata, PageNode, PageType
from flowmap.scraper.extractor import parse_html
from flowmap.scraper.models import CrawledPage, RawLink

# Checked in order; the first matching fragment wins.
_URL_PATTERNS: list[tuple[tuple[str, ...], PageType]] = [
    (("/login", "/signin"), PageType.LOGIN),
    (("/signup", "/register"), PageType.SIGNUP),
    (("/checkout", "/cart"), PageType.CHECKOUT),
    (("/product/",), PageType.PRODUCT_DETAIL),
    (("/products", "/shop", "/catalog"), PageType.PRODUCT_LIST),
    (("/contact",), PageType.CONTACT),
    (("/support", "/help"), PageType.SUPPORT),
    (("/about",), PageType.ABOUT),
]

_TITLE_PATTERNS: list[tuple[tuple[str, ...], PageType]] = [
    (("login", "sign in"), PageType.LOGIN),
    (("checkout", "cart"), PageType.CHECKOUT),
    (("contact",), PageType.CONTACT),
]

_PRODUCT_SELECTOR = '.product, .item, [class*="product"], [data-product]'
_PRICE_SELECTOR = '.price, [class*="price"]'


# ---------------------------------------------------------------------------
# Content detectors
# ---------------------------------------------------------------------------

def detect_login_page(soup: BeautifulSoup) -> bool:
    has_password = bool(soup.select('input[type="password"]'))
    has_user = bool(soup.select('input[type="email"], input[type="text"]'))
    return has_password and has_user


def detect_checkout_page(soup: BeautifulSoup) -> bool:
    body = soup.body or soup
    text = body.get_text(" ", strip=True).lower()
    mentions_payment = "checkout" in text or "payment" in text
    has_fields = len(soup.select('input[type="text"]')) > 3 or bool(soup.find("form"))
    return mentions_payment and has_fields


def detect_product_list_page(soup: BeautifulSoup) -> bool:
    return len(soup.select(_PRODUCT_SELECTOR)) > 3


def detect_product_detail_page(soup: BeautifulSoup) -> bool:
    if not soup.select(_PRICE_SELECTOR):
        return False
    for elem in soup.find_all(["button", "a"]):
        text = elem.get_text(" ", strip=True).lower()
        if "add to cart" in text or "buy now" in text:
            return True
    return False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def identify_page_type(url: str, title: str, soup: BeautifulSoup) -> PageType:
    """Classify a page from URL patterns, then title keywords, then content."""
    parsed = urlparse(url)
    # Match against the path only; host names like "shop.example" must not count.
    lowered = parsed.path.lower()
    for fragments, page_type in _URL_PATTERNS:
        if any(f in lowered for f in fragments):
            return page_type

    if parsed.path in ("", "/") and not parsed.query:
        return PageType.HOME

    lowered_title = (title or "").lower()
    for keywords, page_type in _TITLE_PATTERNS:
        if any(k in lowered_title for k in keywords):
            return page_type

    if detect_login_page(soup):
        return PageType.LOGIN
    if detect_checkout_page(soup):
        return PageType.CHECKOUT
    if detect_product_list_page(soup):
        return PageType.PRODUCT_LIST
    if detect_product_detail_page(soup):
        return PageType.PRODUCT_DETAIL
    return PageType.CONTENT


def is_global_link(link: RawLink) -> bool:
    """A link is global if it sits in the footer, or in site chrome with near-empty text.

    Chrome links with real text ("Shop all products") stay contextual.
    """
    ctx = link.context
    structural = ctx.in_header or ctx.in_footer or ctx.in_nav or ctx.is_global_nav
    generic_text = len(link.text) < 3
    return ctx.in_footer or (structural and generic_text)


def split_links(url: str, links: Iterable[RawLink]) -> tuple[List[LinkEdge], List[LinkEdge]]:
    """Return ``(contextual, global)`` edges for the links of page *url*.

    A target marked global once is global for every occurrence on the page.
    """
    links = list(links)
    global_hrefs: Set[str] = {link.href for link in links if is_global_link(link)}

    contextual: List[LinkEdge] = []
    global_: List[LinkEdge] = []
    for link in links:
        if link.href in global_hrefs:
            global_.append(LinkEdge(url, link.href, link.text, LinkClass.GLOBAL))
        else:
            contextual.append(LinkEdge(url, link.href, link.text, LinkClass.CONTEXTUAL))
    return contextual, global_


def analyze_page(page: CrawledPage) -> ClassifiedPage:
    soup = parse_html(page.html)
    metadata = PageMetadata(
        has_form=soup.find("form") is not None,
        has_login=detect_login_page(soup),
        has_checkout=detect_checkout_page(soup),
        has_product_list=detect_product_list_page(soup),
        has_product_detail=detect_product_detail_page(soup),
    )
    node = PageNode(
        url=page.url,
        page_type=identify_page_type(page.url, page.title, soup),
        title=page.title,
        depth=page.depth,
        metadata=metadata,
    )
    contextual, global_ = split_links(page.url, page.links)
    return ClassifiedPage(node=node, contextual_links=tuple(contextual), global_links=tuple(global_))
