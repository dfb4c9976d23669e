"""Data models for the daily run report."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from common.serialization import serialize_dataclass
from process_articles.models import CategoryResult
from publish_articles.models import PublishResult


@dataclass
class RunReport:
    """Aggregate outcome of one daily run.

    The run always completes, so this report (and the log line built from
    it) is where failures show up.
    """
    date: date
    categories: list[CategoryResult] = field(default_factory=list)
    publish: Optional[PublishResult] = None
    publish_error: Optional[str] = None
    orphan_commits: list[str] = field(default_factory=list)

    @property
    def articles_found(self) -> int:
        return sum(c.articles_found for c in self.categories)

    @property
    def articles_stored(self) -> int:
        return sum(c.succeeded for c in self.categories)

    @property
    def articles_failed(self) -> int:
        return sum(c.failed for c in self.categories)

    @property
    def categories_failed(self) -> int:
        return sum(1 for c in self.categories if c.error is not None)

    @property
    def orphan_commit_sha(self) -> Optional[str]:
        """SHA of the last commit left unreferenced by a failed ref update."""
        return self.orphan_commits[-1] if self.orphan_commits else None

    @property
    def published(self) -> bool:
        return self.publish is not None and self.publish.status == "committed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "articles_found": self.articles_found,
            "articles_stored": self.articles_stored,
            "articles_failed": self.articles_failed,
            "categories_failed": self.categories_failed,
            "categories": {
                c.category: {
                    "found": c.articles_found,
                    "stored": c.succeeded,
                    "failed": c.failed,
                    "error": c.error,
                }
                for c in self.categories
            },
            "publish": self._publish_dict(),
        }

    def _publish_dict(self) -> dict[str, Any]:
        if self.publish is not None:
            publish = serialize_dataclass(self.publish)
        else:
            publish = {
                "status": "failed",
                "file_count": 0,
                "commit_sha": None,
                "orphan_commits": list(self.orphan_commits),
            }
        publish["error"] = self.publish_error
        return publish
