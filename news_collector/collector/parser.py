"""Naver article detail page parsing.

The same article is served with different markup depending on device
(PC / mobile) and section, so every field is looked up through an ordered
list of selectors; the first non-blank value wins.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bs4 import BeautifulSoup, Tag

from news_collector.collector.date_parser import parse_published_at
from news_collector.collector.formatter import format_content

UNKNOWN_PUBLISHER = "Unknown"


@dataclass(frozen=True)
class FieldSelector:
    """CSS selector plus the attribute to read (element text when None)."""

    css: str
    attr: Optional[str] = None

    def extract(self, doc: Tag) -> Optional[str]:
        el = doc.select_one(self.css)
        if el is None:
            return None
        value = el.get(self.attr) if self.attr else el.get_text(" ")
        if isinstance(value, list):
            value = " ".join(value)
        value = (value or "").strip()
        return value or None


@dataclass
class ArticleDetail:
    title: str
    content: str
    published_at: datetime
    publisher: str
    thumbnail_url: Optional[str] = None
    byline: Optional[str] = None


TITLE_SELECTORS = [
    FieldSelector(".media_end_head_headline"),
    FieldSelector("#title_area span"),
    FieldSelector(".end_tit"),
    FieldSelector("meta[property='og:title']", "content"),
]

DATE_SELECTORS = [
    FieldSelector(".media_end_head_info_datestamp_time", "data-date-time"),
    FieldSelector(".media_end_head_info_datestamp_time"),
    FieldSelector("span._ARTICLE_DATE_TIME", "data-date-time"),  # mobile
    FieldSelector("span._ARTICLE_DATE_TIME"),
]

PUBLISHER_SELECTORS = [
    FieldSelector(".media_end_head_top_logo img", "title"),
    FieldSelector(".media_end_head_top_logo img", "alt"),
    FieldSelector(".media_end_head_top_logo_text"),
    FieldSelector(".media_end_linked_more_point"),
]

# Body containers (PC / mobile / older layouts)
BODY_SELECTORS = [
    "#dic_area",
    "#newsct_article",
    ".newsct_article",
    "#articeBody",
    "article._article_content",
]

THUMBNAIL_SELECTORS = [
    FieldSelector("meta[property='og:image']", "content"),
]

BYLINE_SELECTORS = [
    FieldSelector(".media_end_head_journalist_name"),
    FieldSelector(".media_end_head_journalist"),
    FieldSelector(".byline"),
    FieldSelector(".journalistcard_summary_name"),
    FieldSelector(".reporter_area"),
    FieldSelector(".reporter"),
    FieldSelector("span.byline_s"),
    FieldSelector("meta[name='author']", "content"),
]

REPORTER_MARKER = "기자"
_BYLINE_DELIMITERS = re.compile(r"[(\[<|/·]")
_EMAIL = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def first_match(doc: Tag, selectors: list[FieldSelector]) -> Optional[str]:
    """Return the first non-blank value produced by the selectors."""
    for selector in selectors:
        value = selector.extract(doc)
        if value:
            return value
    return None


def find_body(doc: Tag) -> Optional[Tag]:
    """Locate the article body container."""
    for css in BODY_SELECTORS:
        el = doc.select_one(css)
        if el is not None and el.get_text().strip():
            return el
    return None


def clean_byline(raw: Optional[str]) -> Optional[str]:
    """Reduce a byline region to the reporter's name.

    Handles "홍길동 기자", "정치부 홍길동 기자 hong@example.com",
    "홍길동(서울=연합뉴스)" and similar shapes. The result is a plausible
    name token, not a verified one.

    Returns:
        Name, or None if nothing usable remains
    """
    if not raw:
        return None

    text = " ".join(_EMAIL.sub(" ", raw).split())
    if not text:
        return None

    # "<부서> <이름> 기자 ..." -> 이름
    before_marker, found, _ = text.partition(REPORTER_MARKER)
    before_marker = before_marker.strip()
    if found and before_marker:
        name = before_marker.split(" ")[-1].strip()
        return name or None

    cleaned = _BYLINE_DELIMITERS.split(text, maxsplit=1)[0].strip()
    if not cleaned:
        return None
    return cleaned.split(" ")[-1].strip() or None


def extract_byline(doc: Tag) -> Optional[str]:
    """Find the byline region on a detail page and clean it."""
    return clean_byline(first_match(doc, BYLINE_SELECTORS))


def parse_detail(doc: BeautifulSoup) -> ArticleDetail:
    """Parse an article detail page.

    Never raises on missing markup: absent fields fall back to an empty
    title/body, "Unknown" publisher and the current time.
    """
    title = first_match(doc, TITLE_SELECTORS) or ""
    published_at = parse_published_at(first_match(doc, DATE_SELECTORS))
    publisher = first_match(doc, PUBLISHER_SELECTORS) or UNKNOWN_PUBLISHER
    thumbnail_url = first_match(doc, THUMBNAIL_SELECTORS)

    # Read the byline before formatting: the formatter drops byline boxes
    byline = extract_byline(doc)
    content = format_content(find_body(doc))

    return ArticleDetail(
        title=" ".join(title.split()),
        content=content,
        published_at=published_at,
        publisher=publisher,
        thumbnail_url=thumbnail_url,
        byline=byline,
    )
