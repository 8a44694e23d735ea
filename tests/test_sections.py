# tests/test_sections.py
import pytest

from news_collector.collector.sections import Section, detect_section_from_url, get_section_map


def test_section_map_order():
    assert list(get_section_map().items()) == [
        ("100", Section.POLITICS),
        ("101", Section.ECONOMY),
        ("102", Section.SOCIAL),
        ("105", Section.TECHNOLOGY),
    ]


@pytest.mark.parametrize("url,expected", [
    ("https://n.news.naver.com/mnews/article/001/0015000001?sid=100", Section.POLITICS),
    ("https://n.news.naver.com/mnews/article/015/0005000002?sid=101", Section.ECONOMY),
    ("https://news.naver.com/main/read/102/0000000003", Section.SOCIAL),
    ("https://news.naver.com/section/105", Section.TECHNOLOGY),
])
def test_detect_section(url, expected):
    assert detect_section_from_url(url) == expected


@pytest.mark.parametrize("url", [
    "",
    None,
    "https://n.news.naver.com/mnews/article/001/0015000001",
    "https://n.news.naver.com/mnews/article/001/0015000001?sid=103",
])
def test_unknown_section(url):
    assert detect_section_from_url(url) is None


def test_section_values_are_strings():
    assert Section.TECHNOLOGY == "TECHNOLOGY"
