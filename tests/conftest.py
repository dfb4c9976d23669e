"""Shared fakes for the object store, the Git Data API and the remote services."""

from __future__ import annotations

import io
import threading

import pytest

from common.aws import S3Store
from common.config import TransformConfig
from process_articles.models import Article, CleaningError, ProcessDeps
from publish_articles.github import GitHubAPIError


class FakePaginator:
    def __init__(self, objects: dict[str, bytes], page_size: int):
        self.objects = objects
        self.page_size = page_size

    def paginate(self, Bucket: str, Prefix: str):
        keys = sorted(k for k in self.objects if k.startswith(Prefix))
        if not keys:
            yield {"KeyCount": 0}
            return
        for start in range(0, len(keys), self.page_size):
            yield {"Contents": [{"Key": k} for k in keys[start:start + self.page_size]]}


class FakeS3Client:
    """In-memory stand-in for the boto3 S3 client calls the pipeline makes."""

    def __init__(self, page_size: int = 2):
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.page_size = page_size
        self._lock = threading.Lock()

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str = "") -> dict:
        with self._lock:
            self.objects[Key] = Body
            self.content_types[Key] = ContentType
        return {}

    def get_paginator(self, name: str) -> FakePaginator:
        assert name == "list_objects_v2"
        return FakePaginator(self.objects, self.page_size)

    def get_object(self, Bucket: str, Key: str) -> dict:
        return {"Body": io.BytesIO(self.objects[Key])}


class FakeGitHub:
    """In-memory repository implementing the GitHubClient methods the publisher uses."""

    def __init__(self, files: dict[str, bytes] | None = None):
        self._counter = 0
        self.blobs: dict[str, bytes] = {}
        self.trees: dict[str, dict[str, bytes]] = {"tree0": dict(files or {})}
        self.commits: dict[str, dict] = {"commit0": {"tree": "tree0", "parents": [], "message": "init"}}
        self.head = "commit0"
        self.calls: list[str] = []
        self.concurrent_pushes = 0
        self.fail_on: str | None = None

    def _next_sha(self, kind: str) -> str:
        self._counter += 1
        return f"{kind}{self._counter}"

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name:
            raise GitHubAPIError(f"{name} failed", status_code=500)

    def _is_ancestor(self, ancestor: str, sha: str) -> bool:
        stack = [sha]
        while stack:
            current = stack.pop()
            if current == ancestor:
                return True
            stack.extend(self.commits[current]["parents"])
        return False

    def get_ref(self, branch: str) -> str:
        self._maybe_fail("get_ref")
        return self.head

    def get_tree(self, sha: str, recursive: bool = True) -> dict:
        self._maybe_fail("get_tree")
        tree_sha = self.commits[sha]["tree"]
        return {
            "sha": tree_sha,
            "tree": [{"path": p, "type": "blob"} for p in sorted(self.trees[tree_sha])],
        }

    def create_blob(self, content: bytes) -> str:
        self._maybe_fail("create_blob")
        sha = self._next_sha("blob")
        self.blobs[sha] = content
        return sha

    def create_tree(self, base_tree: str, entries) -> str:
        self._maybe_fail("create_tree")
        files = dict(self.trees[base_tree])
        for entry in entries:
            files[entry.path] = self.blobs[entry.sha] if entry.sha else entry.content.encode("utf-8")
        sha = self._next_sha("tree")
        self.trees[sha] = files
        return sha

    def create_commit(self, message: str, tree_sha: str, parents: list[str]) -> str:
        self._maybe_fail("create_commit")
        sha = self._next_sha("commit")
        self.commits[sha] = {"tree": tree_sha, "parents": list(parents), "message": message}
        return sha

    def update_ref(self, branch: str, sha: str, force: bool = False) -> None:
        self._maybe_fail("update_ref")
        if self.concurrent_pushes:
            self.concurrent_pushes -= 1
            self.push_other_commit()
        if not force and not self._is_ancestor(self.head, sha):
            raise GitHubAPIError("Update is not a fast forward", status_code=422)
        self.head = sha

    def push_other_commit(self) -> str:
        """Advance the branch as another writer would."""
        tree_sha = self.commits[self.head]["tree"]
        files = dict(self.trees[tree_sha])
        files["README.md"] = b"changed elsewhere"
        new_tree = self._next_sha("tree")
        self.trees[new_tree] = files
        sha = self._next_sha("commit")
        self.commits[sha] = {"tree": new_tree, "parents": [self.head], "message": "other"}
        self.head = sha
        return sha

    def files_at(self, sha: str) -> dict[str, bytes]:
        return self.trees[self.commits[sha]["tree"]]

    def head_files(self) -> dict[str, bytes]:
        return self.files_at(self.head)


class FakeExtractor:
    """Returns canned articles per section URL; an exception value is raised."""

    def __init__(self, responses: dict):
        self.responses = responses

    def fetch_articles(self, source_url: str) -> list[Article]:
        response = self.responses.get(source_url, [])
        if isinstance(response, Exception):
            raise response
        return list(response)


class FakeCleaner:
    """Tags cleaned text with the prompt; prompts listed in ``failing`` raise."""

    def __init__(self, failing: set[str] | None = None):
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def clean(self, content: str, prompt: str) -> str:
        with self._lock:
            self.calls.append((content, prompt))
        if prompt in self.failing or "*" in self.failing:
            raise CleaningError(f"Cleaning server returned status code 500 for {prompt}")
        return f"{prompt}({content})"


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def store(s3_client) -> S3Store:
    return S3Store(s3_client, "test-bucket")


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub({"README.md": b"# news"})


@pytest.fixture
def transform_config() -> TransformConfig:
    return TransformConfig(content_prompts=["p1", "p2", "p3"], date_prompt="date")


@pytest.fixture
def make_deps(store, transform_config):
    def _make(responses: dict, cleaner: FakeCleaner | None = None) -> ProcessDeps:
        return ProcessDeps(
            extractor=FakeExtractor(responses),
            cleaner=cleaner or FakeCleaner(),
            store=store,
            transform=transform_config,
        )
    return _make
