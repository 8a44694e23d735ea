#!/usr/bin/env python3
"""Main entry point for Naver news collection."""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from news_collector.collector.crawler import NewsCrawler
from news_collector.config.settings import DATABASE_PATH, LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL
from news_collector.database.models import ArticleStore, init_db


def main(argv=None):
    parser = argparse.ArgumentParser(description="Naver News Collector")
    parser.add_argument("--init-db", action="store_true", help="Create the database schema")
    parser.add_argument("--crawl", action="store_true", help="Run one crawl over all sections")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if args.init_db or not Path(DATABASE_PATH).exists():
        print("Initializing database...")
        init_db()

    if args.crawl:
        print("Starting news collection...")
        crawler = NewsCrawler()
        results = crawler.crawl_all()

        print(f"\n수집 완료: 총 {results['total']}개, 신규 {results['new']}개")
        for section, data in results["sections"].items():
            if "error" in data:
                print(f"  ✗ {section}: {data['error']}")
            else:
                print(f"  ✓ {section}: {data['collected']}개 수집, {data['new']}개 신규")

        print(f"저장된 기사: {ArticleStore().count_articles()}개")

    if not any([args.init_db, args.crawl]):
        parser.print_help()


if __name__ == "__main__":
    main()
