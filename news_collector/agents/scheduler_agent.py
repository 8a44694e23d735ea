#!/usr/bin/env python3
"""Scheduler agent for automated Naver news collection.

Runs the section crawl every CRAWL_INTERVAL_MINUTES. The schedule library
re-arms a job only after it has finished, so the interval is measured from
the end of one run to the start of the next and runs never overlap.
"""

import argparse
import logging
import signal
import time
from datetime import datetime
from typing import Optional

import schedule

from news_collector.collector.crawler import NewsCrawler
from news_collector.config.settings import (
    CRAWL_INTERVAL_MINUTES,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL,
)
from news_collector.database.models import init_db

logger = logging.getLogger("scheduler")

POLL_SECONDS = 5


class SchedulerAgent:
    """Agent that schedules and runs the crawl job."""

    def __init__(self, crawler: Optional[NewsCrawler] = None, scheduler: Optional[schedule.Scheduler] = None):
        self.crawler = crawler or NewsCrawler()
        self.scheduler = scheduler if scheduler is not None else schedule.Scheduler()
        self.running = True
        self.stats = {
            "runs": 0,
            "total_saved": 0,
            "last_crawl": None,
            "errors": 0,
        }

    def collect_news(self) -> dict:
        """Run one crawl over all sections. Never raises."""
        logger.info("=" * 50)
        logger.info("Starting scheduled news collection...")

        try:
            results = self.crawler.crawl_all()
        except Exception as e:
            logger.exception(f"Collection failed: {e}")
            self.stats["errors"] += 1
            return {"total": 0, "new": 0, "errors": 1, "sections": {}}

        self.stats["runs"] += 1
        self.stats["total_saved"] += results["new"]
        self.stats["errors"] += results.get("errors", 0)
        self.stats["last_crawl"] = datetime.now()

        logger.info(f"Collection complete: {results['total']} discovered, {results['new']} new")
        self._print_stats()
        return results

    def _print_stats(self):
        """Print current agent statistics."""
        logger.info("-" * 30)
        logger.info("Agent stats:")
        logger.info(f"  - Runs: {self.stats['runs']}")
        logger.info(f"  - Total saved: {self.stats['total_saved']}")
        logger.info(f"  - Errors: {self.stats['errors']}")
        if self.stats["last_crawl"]:
            logger.info(f"  - Last crawl: {self.stats['last_crawl'].strftime('%H:%M:%S')}")

    def setup_schedule(self):
        """Configure the crawl job."""
        self.scheduler.every(CRAWL_INTERVAL_MINUTES).minutes.do(self.collect_news)
        logger.info(f"Schedule configured: news collection every {CRAWL_INTERVAL_MINUTES} minute(s)")

    def run(self, run_immediately: bool = True):
        """Start the scheduler agent."""
        logger.info("=" * 50)
        logger.info("Starting Scheduler Agent")
        logger.info("=" * 50)

        init_db()

        if run_immediately:
            logger.info("Running initial collection...")
            self.collect_news()

        # First scheduled run is one full interval after the initial one ends
        self.setup_schedule()

        logger.info("Entering scheduler loop (Ctrl+C to stop)...")
        while self.running:
            self.scheduler.run_pending()
            time.sleep(POLL_SECONDS)

        self.scheduler.clear()
        logger.info("Scheduler agent stopped.")

    def stop(self):
        """Stop the scheduler agent gracefully."""
        logger.info("Stopping scheduler agent...")
        self.running = False


agent = None


def signal_handler(signum, frame):
    """Handle shutdown signals."""
    logger.info(f"Received signal {signum}, shutting down...")
    if agent:
        agent.stop()


def main(argv=None):
    """Main entry point."""
    global agent

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    parser = argparse.ArgumentParser(description="Naver News Scheduler Agent")
    parser.add_argument("--no-immediate", action="store_true",
                        help="Don't run collection immediately at startup")
    parser.add_argument("--once", action="store_true",
                        help="Run once and exit (don't enter scheduler loop)")
    args = parser.parse_args(argv)

    agent = SchedulerAgent()

    if args.once:
        logger.info("Running single collection cycle...")
        init_db()
        agent.collect_news()
    else:
        agent.run(run_immediately=not args.no_immediate)


if __name__ == "__main__":
    main()
