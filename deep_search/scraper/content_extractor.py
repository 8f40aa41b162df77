# scraper/content_extractor.py

# Turns a rendered page into something a research assistant can read:
# Title
# Meta description
# Main visible text (boilerplate removed)
# Outbound links worth following

import copy
import re

from bs4 import BeautifulSoup, Tag

from deep_search.crawler.url_utils import absolute_url, is_followable_url
from deep_search.storage.models import PageLink

MIN_CONTENT_LENGTH = 100
MAX_LINKS_PER_PAGE = 10

# Ordered by priority: the first selector yielding a long enough container wins
CONTENT_SELECTORS = [
    "article",
    "main",
    "[role=main]",
    ".post-content",
    ".entry-content",
    ".article-content",
    ".article-body",
    ".post-body",
    ".content",
    "#content",
    ".post",
    ".article",
    ".blog-post",
]

BOILERPLATE_SELECTORS = [
    "nav",
    "header",
    "footer",
    "aside",
    ".navigation",
    ".menu",
    ".sidebar",
    ".ads",
    ".advertisement",
    ".comments",
    ".related",
    ".share",
    ".social",
]

NON_CONTENT_TAGS = ["script", "style", "iframe", "noscript"]

_INLINE_WS_RE = re.compile(r"\s+")


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _text_length(element: Tag) -> int:
    return len(element.get_text().strip())


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace inside each line, drop blank lines, trim."""
    lines = (_INLINE_WS_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def extract_title(soup: BeautifulSoup) -> str:
    if soup.title is None:
        return ""
    return " ".join(soup.title.get_text().split())


def extract_description(soup: BeautifulSoup) -> str:
    candidates = (
        soup.find("meta", attrs={"name": "description"}),
        soup.find("meta", attrs={"property": "og:description"}),
    )
    for tag in candidates:
        if tag is not None and tag.get("content", "").strip():
            return tag["content"].strip()
    return ""


def _select_by_priority(soup: BeautifulSoup):
    for selector in CONTENT_SELECTORS:
        matches = soup.select(selector)
        if not matches:
            continue
        # max() keeps the first of equally long matches
        best = max(matches, key=_text_length)
        if _text_length(best) > MIN_CONTENT_LENGTH:
            return best
    return None


def _densest_paragraph_container(soup: BeautifulSoup):
    """
    Count, for every ancestor of every <p>, how many paragraphs it encloses.
    The winner is the ancestor with the highest count; on ties the one seen
    first, which is the innermost container.
    """
    counts = {}
    elements = {}
    for paragraph in soup.find_all("p"):
        current = paragraph.parent
        while isinstance(current, Tag) and current.name not in ("body", "html", "[document]"):
            key = id(current)
            elements[key] = current
            counts[key] = counts.get(key, 0) + 1
            current = current.parent

    best_key, best_count = None, 0
    for key, count in counts.items():
        if count > best_count:
            best_key, best_count = key, count
    return elements.get(best_key)


def select_main_container(soup: BeautifulSoup) -> Tag:
    container = _select_by_priority(soup)
    if container is None:
        container = _densest_paragraph_container(soup)
    if container is None:
        container = soup.body or soup
    return container


def clean_container(container: Tag) -> Tag:
    """Return a copy of container without navigation, ads, widgets, scripts and frames."""
    clone = copy.copy(container)
    for selector in BOILERPLATE_SELECTORS + NON_CONTENT_TAGS:
        for element in clone.select(selector):
            # a match nested inside an earlier match is already gone
            if not element.decomposed:
                element.decompose()
    return clone


def extract_main_text(soup: BeautifulSoup) -> str:
    container = select_main_container(soup)
    return normalize_whitespace(clean_container(container).get_text())


def _document_base(soup: BeautifulSoup, url: str) -> str:
    base = soup.find("base", href=True)
    if base is not None:
        return absolute_url(base["href"], url)
    return url


def extract_links(soup: BeautifulSoup, url: str, max_links: int = MAX_LINKS_PER_PAGE) -> list:
    """
    Followable outbound links in document order, deduplicated by absolute URL,
    capped at max_links.
    """
    base = _document_base(soup, url)
    seen = set()
    links = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.startswith("#"):
            continue
        try:
            target = absolute_url(href, base)
        except ValueError:
            # e.g. malformed IPv6 hosts
            continue
        if target in seen or not is_followable_url(target):
            continue
        text = " ".join(anchor.get_text().split())
        if not text:
            continue
        seen.add(target)
        links.append(PageLink(url=target, text=text))
        if len(links) >= max_links:
            break
    return links


def extract_content(html: str, url: str, max_links: int = MAX_LINKS_PER_PAGE) -> dict:
    """
    Extract title, meta description, main text and links from rendered HTML.
    `url` is the page location used to resolve relative links.
    """
    soup = parse_document(html)
    return {
        "url": url,
        "title": extract_title(soup),
        "description": extract_description(soup),
        "links": extract_links(soup, url, max_links=max_links),
        "content": extract_main_text(soup),
    }
