"""Database models and initialization."""

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from news_collector.collector.article_types import Article
from news_collector.config.settings import DATABASE_PATH

logger = logging.getLogger(__name__)

# SQLite default SQLITE_MAX_VARIABLE_NUMBER on older builds
MAX_QUERY_PARAMS = 900

PathLike = Union[str, Path]


def get_connection(db_path: Optional[PathLike] = None) -> sqlite3.Connection:
    """Get database connection."""
    conn = sqlite3.connect(str(db_path or DATABASE_PATH))
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Optional[PathLike] = None):
    """Initialize database with schema."""
    path = Path(db_path or DATABASE_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(path)
    cursor = conn.cursor()

    # Articles table (url is the dedup key across crawl runs)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS articles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            section VARCHAR(50) NOT NULL,
            title TEXT NOT NULL,
            content TEXT,
            url TEXT NOT NULL UNIQUE,
            thumbnail_url TEXT,
            source TEXT,
            publisher TEXT,
            published_at DATETIME NOT NULL,
            likes INTEGER NOT NULL DEFAULT 0,
            dislikes INTEGER NOT NULL DEFAULT 0,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Indexes
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_articles_section ON articles(section)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_articles_published ON articles(published_at DESC)")

    conn.commit()
    conn.close()
    logger.info(f"Database initialized: {path}")


def _chunks(items: list, size: int) -> Iterable[list]:
    for i in range(0, len(items), size):
        yield items[i:i + size]


class ArticleStore:
    """SQLite-backed article store used by the ingestion pipeline."""

    def __init__(self, db_path: Optional[PathLike] = None):
        self.db_path = Path(db_path or DATABASE_PATH)

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def exists_by_url(self, url: str) -> bool:
        conn = self._connect()
        try:
            cursor = conn.execute("SELECT 1 FROM articles WHERE url = ? LIMIT 1", (url,))
            return cursor.fetchone() is not None
        finally:
            conn.close()

    def find_existing_urls(self, urls: set[str]) -> set[str]:
        """Return the subset of urls that are already stored."""
        if not urls:
            return set()

        existing = set()
        conn = self._connect()
        try:
            for chunk in _chunks(sorted(urls), MAX_QUERY_PARAMS):
                placeholders = ", ".join("?" for _ in chunk)
                cursor = conn.execute(
                    f"SELECT url FROM articles WHERE url IN ({placeholders})",
                    chunk,
                )
                existing.update(row["url"] for row in cursor.fetchall())
        finally:
            conn.close()
        return existing

    def save_all(self, articles: Sequence[Article]) -> int:
        """Insert articles in a single transaction.

        Raises:
            sqlite3.IntegrityError: If any url is already stored; nothing
                from the batch is written in that case.
        """
        if not articles:
            return 0

        rows = [
            (
                article.section.value,
                article.title,
                article.content,
                article.url,
                article.thumbnail_url,
                article.source,
                article.publisher,
                article.published_at.isoformat(sep=" ", timespec="seconds"),
                article.likes,
                article.dislikes,
            )
            for article in articles
        ]

        conn = self._connect()
        try:
            with conn:
                conn.executemany("""
                    INSERT INTO articles
                    (section, title, content, url, thumbnail_url, source, publisher,
                     published_at, likes, dislikes)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, rows)
        finally:
            conn.close()
        return len(rows)

    def get_by_url(self, url: str) -> Optional[sqlite3.Row]:
        conn = self._connect()
        try:
            return conn.execute("SELECT * FROM articles WHERE url = ?", (url,)).fetchone()
        finally:
            conn.close()

    def count_articles(self) -> int:
        conn = self._connect()
        try:
            return conn.execute("SELECT COUNT(*) FROM articles").fetchone()[0]
        finally:
            conn.close()
