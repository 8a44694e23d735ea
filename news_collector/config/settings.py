"""Collector settings.

Values can be overridden through environment variables (or a `.env` file
in the working directory).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_PATH = Path(os.getenv("NEWS_DB_PATH", str(Path("data") / "news.db")))

# Naver News
BASE_URL = "https://news.naver.com"
SECTION_URL_TEMPLATE = BASE_URL + "/section/{section_id}"
NEWS_HOST = "news.naver.com"

# 기자명을 찾지 못한 기사의 출처 표기
PLATFORM_SOURCE = "NAVER"

# HTTP
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
REQUEST_HEADERS = {
    "User-Agent": USER_AGENT,
    "Referer": BASE_URL,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
}
LIST_TIMEOUT = 10  # seconds
DETAIL_TIMEOUT = 12

# Rate limit (requests per second, shared by every fetch in a run)
REQUESTS_PER_SECOND = float(os.getenv("CRAWL_REQUESTS_PER_SECOND", "3.0"))

# Retry
RETRY_ATTEMPTS = 3
RETRY_INITIAL_BACKOFF = 0.3  # seconds
RETRY_MAX_BACKOFF = 3.0

# Listing page limits
MAX_LIST_ITEMS = 25
MAX_POPULAR_ITEMS = 10

# Scheduler
CRAWL_INTERVAL_MINUTES = int(os.getenv("CRAWL_INTERVAL_MINUTES", "30"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
