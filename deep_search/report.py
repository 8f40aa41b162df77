# report.py

# Render a traversal as the plain-text report handed back to the assistant.

from typing import Sequence

from config import CONTENT_CHAR_BUDGET
from deep_search.storage.models import ExtractedPage
from utils.helpers import truncate

SECTION_SEPARATOR = "\n\n---\n\n"
TRUNCATION_MARKER = "..."


def format_page(page: ExtractedPage, char_budget: int = CONTENT_CHAR_BUDGET) -> str:
    lines = [f"# {page.title or page.url}", f"URL: {page.url}"]
    if page.description:
        lines.append(f"Description: {page.description}")
    if page.error:
        lines.append(f"Error: {page.error}")
        return "\n".join(lines)

    lines.append("")
    lines.append("## Content")
    lines.append(truncate(page.content, char_budget, TRUNCATION_MARKER) if page.content else "(no readable content)")
    return "\n".join(lines)


def format_report(query: str, pages: Sequence[ExtractedPage], depth: int, char_budget: int = CONTENT_CHAR_BUDGET) -> str:
    failed = sum(1 for page in pages if not page.ok)
    header = f'# Deep Search Results for "{query}"\nFound {len(pages)} pages with depth {depth}'
    if failed:
        header += f" ({failed} failed)"

    if not pages:
        return header + "\n\nNo pages could be retrieved."

    sections = SECTION_SEPARATOR.join(format_page(page, char_budget) for page in pages)
    return f"{header}\n\n{sections}"


def summarize(query: str, pages: Sequence[ExtractedPage]) -> str:
    """One-line outcome, used for logging and the HTTP response."""
    ok = sum(1 for page in pages if page.ok)
    if not ok:
        return f'No valid results found for "{query}".'
    return f'Deep search for "{query}" visited {len(pages)} pages, with content successfully extracted from {ok}.'
