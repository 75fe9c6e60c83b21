"""Tests for page classification and global navigation detection."""

from __future__ import annotations

import pytest

from flowmap.classifier.global_nav import classify_global_navigation, global_hrefs, normalize_href
from flowmap.classifier.page_analyzer import analyze_page, identify_page_type, is_global_link, split_links
from flowmap.graph.models import LinkClass, PageType
from flowmap.scraper.extractor import parse_html
from flowmap.scraper.models import CrawledPage, LinkContext, RawLink

SITE = "https://shop.test"

_EMPTY = parse_html("<html><body></body></html>")

_LOGIN_FORM = """\
<html><body>
  <form>
    <input type="email" name="email">
    <input type="password" name="password">
    <button>Sign in</button>
  </form>
</body></html>
"""

_PRODUCT_GRID = """\
<html><body>
  <div class="product">A</div><div class="product">B</div>
  <div class="product">C</div><div class="product">D</div>
</body></html>
"""

_PRODUCT_PAGE = """\
<html><body>
  <h1>Blue mug</h1><span class="price">$12</span>
  <button>Add to cart</button>
</body></html>
"""


def _link(href: str, text: str = "Link text", **context) -> RawLink:
    return RawLink(href=f"{SITE}{href}", text=text, context=LinkContext(**context))


def _crawled(path: str, links: list[RawLink], html: str = "<html></html>", depth: int = 1) -> CrawledPage:
    return CrawledPage(url=f"{SITE}{path}", title="Page", html=html, depth=depth, links=links)


# ---------------------------------------------------------------------------
# identify_page_type
# ---------------------------------------------------------------------------

class TestIdentifyPageType:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/login", PageType.LOGIN),
            ("/account/signin", PageType.LOGIN),
            ("/register", PageType.SIGNUP),
            ("/cart", PageType.CHECKOUT),
            ("/product/blue-mug", PageType.PRODUCT_DETAIL),
            ("/products", PageType.PRODUCT_LIST),
            ("/shop/mugs", PageType.PRODUCT_LIST),
            ("/contact-us", PageType.CONTACT),
            ("/help/shipping", PageType.SUPPORT),
            ("/about", PageType.ABOUT),
            ("/", PageType.HOME),
            ("", PageType.HOME),
            ("/blog/post", PageType.CONTENT),
        ],
    )
    def test_url_patterns(self, path: str, expected: PageType) -> None:
        assert identify_page_type(f"{SITE}{path}", "", _EMPTY) is expected

    def test_root_with_query_is_not_home(self) -> None:
        assert identify_page_type(f"{SITE}/?page=2", "", _EMPTY) is PageType.CONTENT

    def test_title_keywords(self) -> None:
        assert identify_page_type(f"{SITE}/members", "Please Sign In", _EMPTY) is PageType.LOGIN
        assert identify_page_type(f"{SITE}/basket", "Your cart", _EMPTY) is PageType.CHECKOUT
        assert identify_page_type(f"{SITE}/reach-us", "Contact the team", _EMPTY) is PageType.CONTACT

    def test_content_detectors(self) -> None:
        assert identify_page_type(f"{SITE}/members", "", parse_html(_LOGIN_FORM)) is PageType.LOGIN
        assert identify_page_type(f"{SITE}/mugs", "", parse_html(_PRODUCT_GRID)) is PageType.PRODUCT_LIST
        assert identify_page_type(f"{SITE}/mug", "", parse_html(_PRODUCT_PAGE)) is PageType.PRODUCT_DETAIL


# ---------------------------------------------------------------------------
# Context-based link split
# ---------------------------------------------------------------------------

class TestSplitLinks:
    def test_footer_links_are_global(self) -> None:
        assert is_global_link(_link("/terms", "Terms of service", in_footer=True))

    def test_header_link_with_real_text_is_contextual(self) -> None:
        assert not is_global_link(_link("/products", "Products", in_header=True))

    def test_header_link_with_short_text_is_global(self) -> None:
        assert is_global_link(_link("/", "", in_header=True, in_nav=True))

    def test_global_once_means_global_everywhere_on_page(self) -> None:
        links = [
            _link("/about", "About us"),
            _link("/about", "", in_footer=True),
            _link("/products", "Products"),
        ]
        contextual, global_ = split_links(f"{SITE}/", links)
        assert [e.target for e in contextual] == [f"{SITE}/products"]
        assert [e.target for e in global_] == [f"{SITE}/about", f"{SITE}/about"]
        assert all(e.link_class is LinkClass.GLOBAL for e in global_)
        assert all(e.source == f"{SITE}/" for e in contextual + global_)


class TestAnalyzePage:
    def test_builds_node_and_links(self) -> None:
        page = _crawled("/login", [_link("/signup", "Create an account")], html=_LOGIN_FORM, depth=2)
        classified = analyze_page(page)

        assert classified.node.page_type is PageType.LOGIN
        assert classified.node.depth == 2
        assert classified.node.title == "Page"
        assert classified.node.metadata.has_form
        assert classified.node.metadata.has_login
        assert [e.target for e in classified.contextual_links] == [f"{SITE}/signup"]
        assert classified.global_links == ()


# ---------------------------------------------------------------------------
# Frequency-based global navigation
# ---------------------------------------------------------------------------

class TestGlobalNavigation:
    def test_normalize_href(self) -> None:
        assert normalize_href(f"{SITE}/about/?ref=nav#team") == f"{SITE}/about"
        assert normalize_href(f"{SITE}") == f"{SITE}/"
        assert normalize_href("/relative") is None

    def test_frequent_targets(self) -> None:
        pages = [
            _crawled("/", [_link("/about"), _link("/products")]),
            _crawled("/a", [_link("/about/")]),
            _crawled("/b", [_link("/about"), _link("/about")]),
            _crawled("/c", []),
        ]
        assert global_hrefs(pages, threshold=0.6) == {f"{SITE}/about"}

    def test_small_sites_skip_frequency(self) -> None:
        pages = [_crawled("/", [_link("/about")]), _crawled("/a", [_link("/about")])]
        assert global_hrefs(pages) == set()

    def test_reclassification(self) -> None:
        crawled = [
            _crawled("/", [_link("/about", "About us"), _link("/products", "Products"), _link("/x", "X", is_global_nav=True)]),
            _crawled("/a", [_link("/about", "About us")]),
            _crawled("/b", [_link("/about", "About us")]),
        ]
        analyzed = [analyze_page(page) for page in crawled]
        result = classify_global_navigation(crawled, analyzed, threshold=0.6)

        home = result[0]
        assert home.node is analyzed[0].node
        assert [e.target for e in home.contextual_links] == [f"{SITE}/products"]
        assert [e.target for e in home.global_links] == [f"{SITE}/about", f"{SITE}/x"]
        assert result[1].contextual_links == ()

    def test_header_link_with_real_text_stays_contextual(self) -> None:
        crawled = [
            _crawled(
                "/",
                [
                    _link("/products", "Shop all products", in_header=True, in_nav=True, is_global_nav=True),
                    _link("/", "", in_header=True, is_global_nav=True),
                ],
            )
        ]
        analyzed = [analyze_page(page) for page in crawled]
        home = classify_global_navigation(crawled, analyzed)[0]

        assert [e.target for e in home.contextual_links] == [f"{SITE}/products"]
        assert [e.target for e in home.global_links] == [f"{SITE}/"]
