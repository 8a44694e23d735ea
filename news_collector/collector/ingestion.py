"""Deduplicating bulk persistence of crawl candidates."""

import logging
import sqlite3
from typing import Protocol, Sequence

from news_collector.collector.article_types import Article, Candidate

logger = logging.getLogger(__name__)


class ArticleStoreLike(Protocol):
    def find_existing_urls(self, urls: set[str]) -> set[str]: ...

    def save_all(self, articles: Sequence[Article]) -> int: ...


class IngestionGate:
    """Filters out already stored URLs and saves the rest in one batch.

    The existence check and the write are not atomic. If another writer
    stores one of the URLs in between, the unique constraint on `url`
    rejects the whole batch; it is counted as zero saved and the next
    scheduled run picks up whatever is still missing.
    """

    def __init__(self, store: ArticleStoreLike):
        self.store = store

    def persist(self, candidates: Sequence[Candidate]) -> int:
        """Save candidates whose URL is not stored yet.

        Returns:
            Number of articles saved
        """
        if not candidates:
            return 0

        urls = {c.url for c in candidates}
        existing = self.store.find_existing_urls(urls)

        to_save = [c.to_article() for c in candidates if c.url not in existing]
        if not to_save:
            logger.debug(f"All {len(candidates)} candidate(s) already stored")
            return 0

        try:
            return self.store.save_all(to_save)
        except sqlite3.IntegrityError as e:
            logger.warning(f"UNIQUE(url) conflict while saving {len(to_save)} article(s), skipped: {e}")
            return 0
