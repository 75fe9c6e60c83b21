"""Scraper package — site crawl, HTTP fetch & link extraction."""

from flowmap.scraper.crawler import crawl_site
from flowmap.scraper.extractor import extract_page
from flowmap.scraper.fetcher import fetch_url
from flowmap.scraper.models import CrawledPage, Credentials, LinkContext, RawLink, RawPage

__all__ = [
    "crawl_site",
    "extract_page",
    "fetch_url",
    "CrawledPage",
    "Credentials",
    "LinkContext",
    "RawLink",
    "RawPage",
]
