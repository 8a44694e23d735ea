"""Naver article date parsing."""

import logging
import re
from datetime import datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

# "2025-12-11 14:30:00" (data-date-time attribute)
SORTABLE_FORMAT = "%Y-%m-%d %H:%M:%S"
SORTABLE_LENGTH = 19

# "2025.12.11. 오후 2:30" (rendered timestamp, 12-hour clock)
DOTTED_FORMAT = "%Y.%m.%d. %H:%M"

_MERIDIEM_PATTERN = re.compile(r"오전|오후|(?<![A-Za-z])[AaPp]\.?[Mm]\.?(?![A-Za-z])")


def parse_published_at(raw: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Parse a Naver date string.

    Unparseable input falls back to the current time.

    Args:
        raw: Date text from the detail page
        now: Override for the fallback timestamp

    Returns:
        Naive local datetime
    """
    if not raw or not raw.strip():
        return now or datetime.now()

    text = raw.strip()
    try:
        if "-" in text and ":" in text and len(text) >= SORTABLE_LENGTH:
            return datetime.strptime(text[:SORTABLE_LENGTH], SORTABLE_FORMAT)
        return _parse_dotted(text)
    except ValueError:
        logger.debug(f"Unparseable date {raw!r}, using current time")
        return now or datetime.now()


def _parse_dotted(text: str) -> datetime:
    markers = _MERIDIEM_PATTERN.findall(text)
    is_pm = any(m == "오후" or m[:1] in ("P", "p") for m in markers)

    clean = " ".join(_MERIDIEM_PATTERN.sub(" ", text).split())
    parsed = datetime.strptime(clean, DOTTED_FORMAT)
    if not 1 <= parsed.hour <= 12:
        raise ValueError(f"hour out of 12-hour range: {text}")

    if is_pm and parsed.hour != 12:
        parsed += timedelta(hours=12)
    elif not is_pm and parsed.hour == 12:
        parsed -= timedelta(hours=12)
    return parsed
