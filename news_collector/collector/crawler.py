"""Naver News section crawler."""

import logging
from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import Tag

from news_collector.collector.article_types import Candidate
from news_collector.collector.fetcher import FetchError, PageFetcher
from news_collector.collector.ingestion import IngestionGate
from news_collector.collector.parser import parse_detail
from news_collector.collector.sections import (
    NEWS_SECTIONS,
    Section,
    detect_section_from_url,
    get_section_map,
)
from news_collector.config.settings import (
    BASE_URL,
    DETAIL_TIMEOUT,
    LIST_TIMEOUT,
    MAX_LIST_ITEMS,
    MAX_POPULAR_ITEMS,
    NEWS_HOST,
    SECTION_URL_TEMPLATE,
)
from news_collector.database.models import ArticleStore

logger = logging.getLogger(__name__)

# Section page list area
LIST_ITEM_SELECTOR = ".sa_item, .sa_item_flex, .section_article .sa_item"
# "Popular in section" area on the same page (not the ranking page)
POPULAR_ITEM_SELECTOR = ".section_article.as_main_popular .sa_item, .section_main_popular .sa_item"

LIST_TITLE_SELECTOR = ".sa_text_title, .sa_text_strong, a[class*=title], a[href]"


def extract_link(item: Tag) -> Optional[str]:
    """Absolute article URL of a listing item."""
    a = item.select_one("a[href]")
    if a is None:
        return None
    href = (a.get("href") or "").strip()
    if not href:
        return None
    url, _ = urldefrag(urljoin(BASE_URL, href))
    return url


def extract_list_title(item: Tag) -> str:
    el = item.select_one(LIST_TITLE_SELECTOR)
    return " ".join(el.get_text(" ").split()) if el else ""


def extract_list_thumbnail(item: Tag) -> Optional[str]:
    img = item.select_one("img")
    if img is None:
        return None
    return (img.get("data-src") or "").strip() or (img.get("src") or "").strip() or None


def is_news_url(url: str) -> bool:
    """Check the URL points at a Naver News host (n.news, m.news, ...)."""
    host = (urlparse(url).hostname or "").lower()
    return host == NEWS_HOST or host.endswith("." + NEWS_HOST)


class NewsCrawler:
    """Crawls Naver News sections and stores new articles."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        gate: Optional[IngestionGate] = None,
    ):
        self.fetcher = fetcher or PageFetcher()
        self.gate = gate or IngestionGate(ArticleStore())

    def build_candidates(
        self,
        items: list[Tag],
        default_section: Section,
        seen: Optional[set[str]] = None,
    ) -> list[Candidate]:
        """Resolve listing items into candidates, one per URL.

        Args:
            items: Listing item elements, in page order
            default_section: Section the listing page belongs to
            seen: URLs already handled in this run; updated in place

        Returns:
            Candidates in first-seen order
        """
        seen = set() if seen is None else seen
        candidates = []

        for item in items:
            link = extract_link(item)
            if not link or not is_news_url(link):
                continue
            if link in seen:
                continue
            seen.add(link)

            list_title = extract_list_title(item)
            list_thumb = extract_list_thumbnail(item)

            try:
                doc = self.fetcher.fetch(link, DETAIL_TIMEOUT)
                detail = parse_detail(doc)
            except FetchError as e:
                logger.warning(f"  Skipping {link}: {e}")
                continue
            except Exception as e:
                logger.warning(f"  Skipping {link}: detail parse failed: {e}")
                continue

            title = detail.title or list_title
            if not title:
                logger.debug(f"  Skipping {link}: no title")
                continue

            candidates.append(Candidate(
                url=link,
                section=detect_section_from_url(link) or default_section,
                title=title,
                content=detail.content,
                published_at=detail.published_at,
                thumbnail_url=detail.thumbnail_url or list_thumb,
                publisher=detail.publisher,
                byline=detail.byline,
            ))

        return candidates

    def crawl_section(
        self,
        section_id: str,
        default_section: Section,
        seen: Optional[set[str]] = None,
    ) -> int:
        """Crawl one section page and save its new articles.

        Returns:
            Number of articles saved
        """
        url = SECTION_URL_TEMPLATE.format(section_id=section_id)
        doc = self.fetcher.fetch(url, LIST_TIMEOUT)

        list_items = doc.select(LIST_ITEM_SELECTOR)[:MAX_LIST_ITEMS]
        popular_items = doc.select(POPULAR_ITEM_SELECTOR)[:MAX_POPULAR_ITEMS]
        logger.debug(f"  {section_id}: {len(list_items)} list / {len(popular_items)} popular items")

        candidates = self.build_candidates(list_items + popular_items, default_section, seen)
        return self.gate.persist(candidates)

    def crawl_all(self) -> dict:
        """Crawl all sections.

        A failing section is logged and skipped; the others still run.
        """
        logger.info("Naver news crawl started")
        results = {"total": 0, "new": 0, "errors": 0, "sections": {}}
        seen: set[str] = set()

        for section_id, section in get_section_map().items():
            seen_before = len(seen)
            try:
                saved = self.crawl_section(section_id, section, seen)
            except Exception as e:
                logger.exception(f"Section {section.value} failed: {e}")
                results["errors"] += 1
                results["sections"][section.value] = {"collected": 0, "new": 0, "error": str(e)}
                continue

            collected = len(seen) - seen_before
            results["sections"][section.value] = {"collected": collected, "new": saved}
            results["total"] += collected
            results["new"] += saved

            if saved > 0:
                logger.info(f"  {NEWS_SECTIONS[section_id]['name_ko']} ({section.value}): {saved} saved")

        logger.info(f"Naver news crawl finished: {results['new']} saved")
        return results
