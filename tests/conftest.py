# tests/conftest.py
import pytest
from bs4 import BeautifulSoup

from news_collector.collector.fetcher import FetchError
from news_collector.database.models import ArticleStore, init_db


ARTICLE_URL = "https://n.news.naver.com/mnews/article/001/0015000001?sid=100"


def detail_page(
    title="국회 본회의 예산안 처리",
    date_attr="2025-12-11 14:30:00",
    date_text="2025.12.11. 오후 2:30",
    publisher="연합뉴스",
    journalist="정치부 홍길동 기자",
    body="<p>첫 문단입니다.</p><p>두 번째 문단입니다.</p>",
    og_image="https://imgnews.pstatic.net/image/001/2025/12/11/photo.jpg",
):
    """PC detail page markup with the fields the parser reads."""
    return f"""
    <html><head>
      <meta property="og:image" content="{og_image}">
    </head><body>
      <div class="media_end_head_top_logo"><img title="{publisher}" src="logo.png"></div>
      <h2 class="media_end_head_headline">{title}</h2>
      <span class="media_end_head_info_datestamp_time" data-date-time="{date_attr}">{date_text}</span>
      <em class="media_end_head_journalist_name">{journalist}</em>
      <article id="dic_area">{body}</article>
    </body></html>
    """


def listing_page(list_links=(), popular_links=()):
    """Section page with a list area and a "popular in section" area."""
    def item(href, title):
        return (
            f'<li class="sa_item"><a href="{href}" class="sa_text_title">'
            f'<strong class="sa_text_strong">{title}</strong></a>'
            f'<img data-src="https://thumb.example/{title}.jpg"></li>'
        )

    list_html = "".join(item(href, f"list{i}") for i, href in enumerate(list_links))
    popular_html = "".join(item(href, f"popular{i}") for i, href in enumerate(popular_links))
    return f"""
    <html><body>
      <div class="section_article"><ul>{list_html}</ul></div>
      <div class="section_article as_main_popular"><ul>{popular_html}</ul></div>
    </body></html>
    """


class FakeFetcher:
    """Serves canned HTML by URL; unknown URLs raise FetchError."""

    def __init__(self, pages=None, failures=None):
        self.pages = dict(pages or {})
        self.failures = set(failures or ())
        self.requested = []

    def fetch(self, url, timeout):
        self.requested.append(url)
        if url in self.failures or url not in self.pages:
            raise FetchError(url, 3, "connection refused")
        return BeautifulSoup(self.pages[url], "lxml")


class FakeResponse:
    def __init__(self, text="<html></html>", status_code=200, encoding="utf-8"):
        self.text = text
        self.status_code = status_code
        self.encoding = encoding
        self.apparent_encoding = "utf-8"


class FakeSession:
    """requests.Session stand-in returning scripted results in order."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def get(self, url, timeout=None, allow_redirects=True):
        self.calls.append({"url": url, "timeout": timeout, "allow_redirects": allow_redirects})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "news.db"
    init_db(path)
    return path


@pytest.fixture
def store(db_path):
    return ArticleStore(db_path)
