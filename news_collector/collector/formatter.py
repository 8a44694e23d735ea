"""Article body formatting.

Turns the body markup of a Naver article into plain text where paragraphs
are separated by a blank line ("\\n\\n"). Body markup differs between
sections and publishers: some use <p>, some only <br>, some bare <div>s,
and some deliver the whole article as one text node. Every case should come
out with paragraph structure, and noisy inline markup must not produce runs
of empty lines.
"""

import re
from typing import Optional

from bs4 import Comment, NavigableString, Tag

PARAGRAPH_BREAK = "\n\n"

# Non-content nodes inside the body container
NOISE_SELECTOR = ", ".join([
    "script",
    "style",
    "figure",
    "figcaption",
    "iframe",
    ".img_desc",
    ".byline",
    ".copyright",
    ".media_end_head_journalist_layer",
    ".reporter_area",
])

BLOCK_TAGS = ["div", "section", "article", "li"]
BOLD_TAGS = ["strong", "b"]

MIN_HEADING_LENGTH = 5       # shorter bold runs are inline emphasis
MIN_BLOCK_TEXT_LENGTH = 40   # own text of a <div> acting as a paragraph

# Fallback paragraph grouping
MAX_SENTENCES_PER_PARAGRAPH = 3
MAX_PARAGRAPH_LENGTH = 220

# Glyphs that open an inline sub-heading (▶ 관련기사, ※ 참고 ...)
MARKER_GLYPHS = "▶▷※■□◆◇•●"

_MARKER_AT_LINE_START = re.compile(rf"(?m)^[^\S\n]*([{MARKER_GLYPHS}])")
_MARKER_ANYWHERE = re.compile(rf"\s*([{MARKER_GLYPHS}])\s*")
# A bracket right after a marker glyph stays in the marker's paragraph
_BRACKET_TITLE = re.compile(
    rf"(?<![{MARKER_GLYPHS}])(?<![{MARKER_GLYPHS}]\s)\s*(\[[^\[\]\n]{{1,30}}\])\s*"
)
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?。])\s+|(?<=[다요함])\s+")

_TRAILING_SPACE = re.compile(r"[^\S\n]+\n")
_LEADING_SPACE = re.compile(r"\n[^\S\n]+")
_BLANK_LINES = re.compile(r"\n\s*\n")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_HORIZONTAL_RUNS = re.compile(r"[^\S\n]{2,}")


def format_content(body: Optional[Tag]) -> str:
    """Format an article body element into paragraph-separated plain text.

    The element is modified in place.

    Args:
        body: Body container (e.g. `#dic_area`), or None

    Returns:
        Formatted text, or an empty string when there is no body
    """
    if body is None:
        return ""

    _strip_noise(body)
    _mark_line_breaks(body)
    _mark_paragraphs(body)
    _mark_bold_headings(body)
    _mark_block_containers(body)

    return format_text(body.get_text())


def format_text(text: str) -> str:
    """Apply sub-heading splitting, whitespace normalization and the
    sentence-grouping fallback to already extracted text."""
    if not text:
        return ""

    text = _MARKER_AT_LINE_START.sub(PARAGRAPH_BREAK + r"\1", text)
    text = _MARKER_ANYWHERE.sub(PARAGRAPH_BREAK + r"\1 ", text)

    normalized = normalize_whitespace(text)
    if "\n" in normalized:
        return normalized
    return _fallback_paragraphize(normalized)


def normalize_whitespace(text: str) -> str:
    """Normalize spacing; paragraph breaks are at most one blank line."""
    text = text.replace("\u00a0", " ")
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    text = _TRAILING_SPACE.sub("\n", text)
    text = _LEADING_SPACE.sub("\n", text)
    text = _BLANK_LINES.sub(PARAGRAPH_BREAK, text)
    text = _EXCESS_NEWLINES.sub(PARAGRAPH_BREAK, text)
    text = _HORIZONTAL_RUNS.sub(" ", text)

    return text.strip()


def _strip_noise(body: Tag) -> None:
    for node in body.select(NOISE_SELECTOR):
        node.decompose()
    for comment in body.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()


def _mark_line_breaks(body: Tag) -> None:
    for br in body.find_all("br"):
        br.insert_after(NavigableString("\n"))


def _mark_paragraphs(body: Tag) -> None:
    for p in body.find_all("p"):
        if not p.get_text().strip():
            continue
        p.insert_before(NavigableString(PARAGRAPH_BREAK))
        p.insert_after(NavigableString(PARAGRAPH_BREAK))


def _mark_bold_headings(body: Tag) -> None:
    for bold in body.find_all(BOLD_TAGS):
        text = bold.get_text().strip()
        if len(text) < MIN_HEADING_LENGTH:
            continue
        if bold.find_parent("p") is not None:
            continue
        bold.insert_before(NavigableString(PARAGRAPH_BREAK))
        bold.insert_after(NavigableString(PARAGRAPH_BREAK))


def _mark_block_containers(body: Tag) -> None:
    for block in body.find_all(BLOCK_TAGS):
        if block.find("p") is not None:
            continue
        own_text = "".join(block.find_all(string=True, recursive=False)).strip()
        if len(own_text) >= MIN_BLOCK_TEXT_LENGTH:
            block.insert_after(NavigableString(PARAGRAPH_BREAK))


def _fallback_paragraphize(text: str) -> str:
    """Rebuild paragraphs for text that arrived without any line breaks.

    Groups sentences into paragraphs of up to three sentences, closing a
    paragraph early once it reaches MAX_PARAGRAPH_LENGTH characters.
    Sub-heading markers and bracketed titles always open a new paragraph.
    """
    text = text.strip()
    if not text:
        return text

    text = _MARKER_ANYWHERE.sub(PARAGRAPH_BREAK + r"\1 ", text)
    text = _BRACKET_TITLE.sub(PARAGRAPH_BREAK + r"\1 ", text)

    paragraphs = []
    for block in text.split(PARAGRAPH_BREAK):
        paragraphs.extend(_group_sentences(block))

    return normalize_whitespace(PARAGRAPH_BREAK.join(paragraphs))


def _group_sentences(block: str) -> list[str]:
    sentences = [s.strip() for s in _SENTENCE_BOUNDARY.split(block) if s.strip()]

    groups = []
    current: list[str] = []
    length = 0
    for sentence in sentences:
        current.append(sentence)
        length += len(sentence)
        if len(current) >= MAX_SENTENCES_PER_PARAGRAPH or length >= MAX_PARAGRAPH_LENGTH:
            groups.append(" ".join(current))
            current = []
            length = 0
    if current:
        groups.append(" ".join(current))
    return groups
