"""Data models for process_articles pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from common.aws import S3Store
    from common.config import TransformConfig
    from process_articles.clean import CleaningClient
    from process_articles.extract import ExtractionClient


class ExtractionError(Exception):
    """Extraction service returned a non-200 status or an unusable payload."""


class CleaningError(Exception):
    """Cleaning service returned a non-200 status or an empty body."""


@dataclass
class Article:
    """Article as returned by the extraction service."""
    title: str = ""
    content: str = ""
    date: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        return cls(
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            date=str(data.get("date") or ""),
        )


@dataclass
class TransformOutcome:
    """Transformed article plus the names of fields whose cleaning failed."""
    article: Article
    failed_fields: list[str] = field(default_factory=list)


@dataclass
class ArticleResult:
    """Outcome of one per-article pipeline run."""
    category: str
    index: int
    key: Optional[str] = None
    failed_fields: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CategoryResult:
    """Outcome of one category task, including all of its articles."""
    category: str
    articles_found: int = 0
    results: list[ArticleResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)


@dataclass
class ProcessDeps:
    """Collaborators shared by every category and article task."""
    extractor: ExtractionClient
    cleaner: CleaningClient
    store: S3Store
    transform: TransformConfig
    key_prefix: str = "news"
    max_category_workers: Optional[int] = None
    max_article_workers: Optional[int] = None
