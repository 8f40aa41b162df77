# storage/models.py
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class SeedResult:
    url: str
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class PageLink:
    url: str
    text: str


@dataclass(frozen=True)
class ExtractedPage:
    url: str
    title: str
    description: str = ""
    content: str = ""
    links: Tuple[PageLink, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.error

    @classmethod
    def failed(cls, url: str, error: str) -> "ExtractedPage":
        """Neutral placeholder recorded when a page could not be fetched."""
        return cls(url=url, title="Error", error=error or "Unknown error")


@dataclass(frozen=True)
class DeepSearchResponse:
    query: str
    seeds: Tuple[SeedResult, ...]
    pages: Tuple[ExtractedPage, ...]
    depth: int
    report: str


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False
