"""Data models for publish_articles pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

BLOB_MODE = "100644"


class PublishError(Exception):
    """Publish aborted before the branch ref was touched."""


class RefUpdateError(PublishError):
    """The commit was created but the branch ref could not be moved to it.

    The commit object exists in the repository but nothing references it.
    Publishing again against a freshly fetched head recovers.
    """

    def __init__(self, message: str, commit_sha: str, head_sha: str):
        super().__init__(message)
        self.commit_sha = commit_sha
        self.head_sha = head_sha
        self.orphan_commits = [commit_sha]


class RefUpdateConflict(RefUpdateError):
    """The ref update was rejected because the branch moved (not a fast-forward)."""


@dataclass
class TreeEntry:
    """One file in a new commit tree, either inline UTF-8 content or a blob SHA."""
    path: str
    content: Optional[str] = None
    sha: Optional[str] = None
    mode: str = BLOB_MODE
    type: str = "blob"

    def to_dict(self) -> dict[str, Any]:
        entry = {"path": self.path, "mode": self.mode, "type": self.type}
        if self.sha is not None:
            entry["sha"] = self.sha
        else:
            entry["content"] = self.content or ""
        return entry


@dataclass
class PublishResult:
    """Outcome of a publish: "committed" or "noop" (nothing stored for the day)."""
    date: date
    status: str
    file_count: int = 0
    commit_sha: Optional[str] = None
    attempts: int = 0
    paths: list[str] = field(default_factory=list)
    orphan_commits: list[str] = field(default_factory=list)
