"""Shared ingestion data types."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from news_collector.collector.sections import Section
from news_collector.config.settings import PLATFORM_SOURCE


@dataclass
class Article:
    """Article row as written to the store."""

    url: str
    section: Section
    title: str
    published_at: datetime
    content: Optional[str] = None
    thumbnail_url: Optional[str] = None
    source: Optional[str] = None
    publisher: Optional[str] = None
    likes: int = 0
    dislikes: int = 0
    id: Optional[int] = None


@dataclass(frozen=True)
class Candidate:
    """Article discovered in the current crawl run, not yet persisted."""

    url: str
    section: Section
    title: str
    content: str
    published_at: datetime = field(default_factory=datetime.now)
    thumbnail_url: Optional[str] = None
    publisher: Optional[str] = None
    byline: Optional[str] = None

    @property
    def source(self) -> str:
        """Reporter name when known, otherwise the platform label."""
        return self.byline or PLATFORM_SOURCE

    def to_article(self) -> Article:
        return Article(
            url=self.url,
            section=self.section,
            title=self.title,
            content=self.content or None,
            published_at=self.published_at,
            thumbnail_url=self.thumbnail_url,
            source=self.source,
            publisher=self.publisher,
        )
