"""Naver News section definitions."""

from enum import Enum
from typing import Optional
from urllib.parse import parse_qs, urlparse


class Section(str, Enum):
    POLITICS = "POLITICS"
    ECONOMY = "ECONOMY"
    SOCIAL = "SOCIAL"
    TECHNOLOGY = "TECHNOLOGY"


# Naver section id -> internal section (crawl order)
NEWS_SECTIONS = {
    "100": {
        "section": Section.POLITICS,
        "name_ko": "정치",
    },
    "101": {
        "section": Section.ECONOMY,
        "name_ko": "경제",
    },
    "102": {
        "section": Section.SOCIAL,
        "name_ko": "사회",
    },
    "105": {
        "section": Section.TECHNOLOGY,
        "name_ko": "IT/과학",
    },
}


def get_section_map() -> dict[str, Section]:
    """Get ordered mapping of Naver section ids to sections."""
    return {section_id: info["section"] for section_id, info in NEWS_SECTIONS.items()}


def detect_section_from_url(url: str) -> Optional[Section]:
    """Detect the section from an article URL.

    Article links carry the section either as a `sid` query parameter
    (`/mnews/article/001/0012345678?sid=101`) or as a path segment
    (`/main/read/101/...`).
    """
    if not url:
        return None

    parsed = urlparse(url)
    for sid in parse_qs(parsed.query).get("sid", []):
        if sid in NEWS_SECTIONS:
            return NEWS_SECTIONS[sid]["section"]

    segments = [seg for seg in parsed.path.split("/") if seg]
    for section_id, info in NEWS_SECTIONS.items():
        if section_id in segments:
            return info["section"]

    return None
