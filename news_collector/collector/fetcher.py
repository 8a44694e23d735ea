"""HTTP fetching with request pacing and retry."""

import logging
import threading
import time
from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup

from news_collector.config.settings import (
    REQUEST_HEADERS,
    REQUESTS_PER_SECOND,
    RETRY_ATTEMPTS,
    RETRY_INITIAL_BACKOFF,
    RETRY_MAX_BACKOFF,
)

logger = logging.getLogger(__name__)

# Malformed URLs never succeed on retry
NON_RETRYABLE_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
)


class FetchError(Exception):
    """Raised when a page could not be fetched within the retry budget."""

    def __init__(self, url: str, attempts: int, message: str = ""):
        self.url = url
        self.attempts = attempts
        super().__init__(f"Failed to fetch {url} after {attempts} attempt(s): {message}")


class RateLimiter:
    """Single-slot gate enforcing a minimum interval between requests.

    Holds the timestamp of the last issued request. A caller may issue a
    request once the interval has passed since that timestamp, and claims
    the slot by compare-and-set; the lock only guards the swap, so waiting
    callers never block each other while sleeping.
    """

    def __init__(
        self,
        requests_per_second: float = REQUESTS_PER_SECOND,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_interval = 1.0 / requests_per_second if requests_per_second > 0 else 0.0
        self._clock = clock
        self._sleep = sleep
        self._swap_lock = threading.Lock()
        self._last_issued: Optional[float] = None

    @property
    def last_issued(self) -> Optional[float]:
        return self._last_issued

    def _compare_and_set(self, expected: Optional[float], new: float) -> bool:
        with self._swap_lock:
            if self._last_issued != expected:
                return False
            self._last_issued = new
            return True

    def acquire(self) -> float:
        """Block until the caller may issue a request.

        Returns:
            The timestamp recorded for this request
        """
        if self.min_interval <= 0:
            return self._clock()

        while True:
            now = self._clock()
            prev = self._last_issued
            if prev is None or now >= prev + self.min_interval:
                if self._compare_and_set(prev, now):
                    return now
                # Another caller took the slot; re-check against its timestamp
                continue
            self._sleep(min(prev + self.min_interval - now, self.min_interval))


class PageFetcher:
    """Fetches pages through a shared session, paced by a RateLimiter."""

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        session: Optional[requests.Session] = None,
        max_attempts: int = RETRY_ATTEMPTS,
        initial_backoff: float = RETRY_INITIAL_BACKOFF,
        max_backoff: float = RETRY_MAX_BACKOFF,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.rate_limiter = rate_limiter or RateLimiter()
        if session is None:
            session = requests.Session()
            session.headers.update(REQUEST_HEADERS)
        self.session = session
        self.max_attempts = max(1, max_attempts)
        self.initial_backoff = initial_backoff
        self.max_backoff = max_backoff
        self._sleep = sleep

    def fetch_html(self, url: str, timeout: float) -> str:
        """Fetch URL content.

        HTTP error statuses are not raised: Naver sometimes answers with a
        non-200 status and a usable body, so the caller inspects the markup.

        Raises:
            FetchError: If every attempt failed at the transport level
        """
        backoff = self.initial_backoff
        attempt = 0

        while True:
            self.rate_limiter.acquire()
            attempt += 1
            try:
                response = self.session.get(url, timeout=timeout, allow_redirects=True)
            except NON_RETRYABLE_ERRORS as e:
                raise FetchError(url, attempt, str(e)) from e
            except requests.RequestException as e:
                if attempt >= self.max_attempts:
                    raise FetchError(url, attempt, str(e)) from e
                logger.warning(
                    f"Fetch attempt {attempt}/{self.max_attempts} failed for {url}: {e} "
                    f"(retrying in {backoff:.1f}s)"
                )
                self._sleep(backoff)
                backoff = min(backoff * 2, self.max_backoff)
                continue

            if response.status_code >= 400:
                logger.debug(f"HTTP {response.status_code} from {url}, parsing body anyway")
            response.encoding = response.apparent_encoding or "utf-8"
            return response.text

    def fetch(self, url: str, timeout: float) -> BeautifulSoup:
        """Fetch a page and parse it into a document."""
        return BeautifulSoup(self.fetch_html(url, timeout), "lxml")
