# tests/test_ingestion.py
import sqlite3
from datetime import datetime

from news_collector.collector.article_types import Candidate
from news_collector.collector.ingestion import IngestionGate
from news_collector.collector.sections import Section
from news_collector.database.models import ArticleStore


def candidate(n, byline=None, content="본문"):
    return Candidate(
        url=f"https://n.news.naver.com/mnews/article/001/{n:010d}",
        section=Section.POLITICS,
        title=f"기사 {n}",
        content=content,
        published_at=datetime(2025, 12, 11, 14, 30),
        publisher="연합뉴스",
        byline=byline,
    )


class StaleLookupStore(ArticleStore):
    """Store whose existence check never sees rows written by others."""

    def find_existing_urls(self, urls):
        return set()


class TestPersist:
    def test_empty_input(self, store):
        assert IngestionGate(store).persist([]) == 0
        assert store.count_articles() == 0

    def test_saves_new_candidates(self, store):
        gate = IngestionGate(store)

        assert gate.persist([candidate(1), candidate(2)]) == 2
        assert store.count_articles() == 2

        row = store.get_by_url(candidate(1).url)
        assert row["title"] == "기사 1"
        assert row["section"] == "POLITICS"
        assert row["publisher"] == "연합뉴스"
        assert row["published_at"] == "2025-12-11 14:30:00"
        assert row["likes"] == 0
        assert row["dislikes"] == 0

    def test_second_run_saves_nothing(self, store):
        gate = IngestionGate(store)
        batch = [candidate(1), candidate(2)]

        gate.persist(batch)
        assert gate.persist(batch) == 0
        assert store.count_articles() == 2

    def test_only_new_urls_saved(self, store):
        gate = IngestionGate(store)
        gate.persist([candidate(1)])

        assert gate.persist([candidate(1), candidate(3)]) == 1
        assert store.exists_by_url(candidate(3).url)
        assert store.count_articles() == 2

    def test_source_falls_back_to_platform(self, store):
        IngestionGate(store).persist([candidate(1), candidate(2, byline="홍길동")])

        assert store.get_by_url(candidate(1).url)["source"] == "NAVER"
        assert store.get_by_url(candidate(2).url)["source"] == "홍길동"

    def test_empty_content_stored_as_null(self, store):
        IngestionGate(store).persist([candidate(1, content="")])
        assert store.get_by_url(candidate(1).url)["content"] is None


class TestConcurrentWriter:
    def test_unique_conflict_counts_as_zero(self, db_path):
        ArticleStore(db_path).save_all([candidate(1).to_article()])
        gate = IngestionGate(StaleLookupStore(db_path))

        assert gate.persist([candidate(1), candidate(2)]) == 0

    def test_conflicting_batch_is_rolled_back(self, db_path):
        store = ArticleStore(db_path)
        store.save_all([candidate(1).to_article()])

        IngestionGate(StaleLookupStore(db_path)).persist([candidate(2), candidate(1)])

        assert store.count_articles() == 1
        assert not store.exists_by_url(candidate(2).url)

    def test_integrity_error_from_any_store(self):
        class RacingStore:
            def find_existing_urls(self, urls):
                return set()

            def save_all(self, articles):
                raise sqlite3.IntegrityError("UNIQUE constraint failed: articles.url")

        assert IngestionGate(RacingStore()).persist([candidate(1)]) == 0
