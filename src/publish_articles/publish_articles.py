"""Publish one day's stored Markdown files as a single commit."""

import logging
import posixpath
from datetime import date

import requests
from botocore.exceptions import BotoCoreError, ClientError

from common.aws import S3Store, build_day_prefix
from publish_articles.github import GitHubAPIError, GitHubClient
from publish_articles.models import (
    PublishError,
    PublishResult,
    RefUpdateConflict,
    RefUpdateError,
    TreeEntry,
)

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_MESSAGE = "Add: 오늘의 기사 추가({date})"

# 409 for a stale ref, 422 when the update is not a fast-forward
CONFLICT_STATUS_CODES = {409, 422}


def repo_path(key: str, day_prefix: str, run_date: date) -> str:
    """Re-root a store key under the date folder of the repository."""
    return posixpath.join(run_date.isoformat(), key[len(day_prefix):])


def download_batch(store: S3Store, day_prefix: str) -> dict[str, bytes]:
    """List every object under the day prefix and download it.

    Raises:
        PublishError: If listing or any single download fails.
    """
    try:
        keys = store.list_keys(day_prefix)
    except (BotoCoreError, ClientError) as e:
        raise PublishError(f"Failed to list s3://{store.bucket}/{day_prefix}: {e}") from e

    batch = {}
    for key in keys:
        if key.endswith("/"):
            logger.warning("Skipping folder marker %s", key)
            continue
        try:
            batch[key] = store.get(key)
        except (BotoCoreError, ClientError) as e:
            raise PublishError(f"Failed to download {key}: {e}") from e

    return batch


def build_tree_entries(
    batch: dict[str, bytes],
    day_prefix: str,
    run_date: date,
    github: GitHubClient,
) -> list[TreeEntry]:
    """
    Build one tree entry per stored file.

    UTF-8 files are sent inline. Anything else is uploaded as a base64 blob
    first so the committed bytes match the stored bytes exactly.
    """
    entries = []
    for key in sorted(batch):
        content = batch[key]
        path = repo_path(key, day_prefix, run_date)
        try:
            entries.append(TreeEntry(path=path, content=content.decode("utf-8")))
        except UnicodeDecodeError:
            logger.info("Uploading %s as a binary blob", path)
            entries.append(TreeEntry(path=path, sha=github.create_blob(content)))
    return entries


def commit_entries(
    github: GitHubClient,
    branch: str,
    entries: list[TreeEntry],
    message: str,
) -> str:
    """
    Create one commit holding every entry and move the branch to it.

    The ref update is the last call; if anything before it fails the branch
    is untouched.

    Returns:
        SHA of the new commit

    Raises:
        PublishError: If fetching the head or creating the tree/commit fails.
        RefUpdateConflict: If GitHub rejects the ref update as not a fast-forward.
        RefUpdateError: If the ref update fails for any other reason.
    """
    try:
        head_sha = github.get_ref(branch)
        base_tree = github.get_tree(head_sha, recursive=True)
        logger.info(
            "Base commit %s has %d tree entries",
            head_sha,
            len(base_tree.get("tree", [])),
        )
        tree_sha = github.create_tree(base_tree["sha"], entries)
        commit_sha = github.create_commit(message, tree_sha, [head_sha])
    except (GitHubAPIError, requests.RequestException, KeyError) as e:
        raise PublishError(f"Failed to build commit on {branch}: {e}") from e

    try:
        github.update_ref(branch, commit_sha, force=False)
    except GitHubAPIError as e:
        if e.status_code in CONFLICT_STATUS_CODES:
            raise RefUpdateConflict(
                f"heads/{branch} moved away from {head_sha}; commit {commit_sha} is unreferenced",
                commit_sha=commit_sha,
                head_sha=head_sha,
            ) from e
        raise RefUpdateError(
            f"Failed to update heads/{branch}: {e}",
            commit_sha=commit_sha,
            head_sha=head_sha,
        ) from e
    except requests.RequestException as e:
        raise RefUpdateError(
            f"Failed to update heads/{branch}: {e}",
            commit_sha=commit_sha,
            head_sha=head_sha,
        ) from e

    return commit_sha


def publish_day(
    run_date: date,
    store: S3Store,
    github: GitHubClient,
    branch: str = "main",
    key_prefix: str = "news",
    max_attempts: int = 1,
    commit_message: str = DEFAULT_COMMIT_MESSAGE,
) -> PublishResult:
    """
    Commit every file stored for ``run_date`` to the branch in one commit.

    Args:
        run_date: Day whose files are published
        store: Object store holding the rendered Markdown
        github: Git Data API client for the destination repository
        branch: Destination branch
        key_prefix: Top-level store prefix
        max_attempts: How many times to rebuild the commit on a fresh head
            when the ref update is rejected as a conflict
        commit_message: Message template, ``{date}`` is replaced

    Returns:
        PublishResult with status "committed", or "noop" when nothing is stored

    Raises:
        PublishError: Publish aborted, branch unchanged.
        RefUpdateError: Commit created but not linked to the branch.
    """
    day_prefix = build_day_prefix(run_date, key_prefix)
    batch = download_batch(store, day_prefix)

    if not batch:
        logger.warning("No files stored under %s, nothing to publish", day_prefix)
        return PublishResult(date=run_date, status="noop")

    try:
        entries = build_tree_entries(batch, day_prefix, run_date, github)
    except (GitHubAPIError, requests.RequestException) as e:
        raise PublishError(f"Failed to upload blobs: {e}") from e

    message = commit_message.format(date=run_date.isoformat())
    attempts = max(1, max_attempts)

    orphan_commits: list[str] = []
    attempt = 1
    while True:
        try:
            commit_sha = commit_entries(github, branch, entries, message)
            break
        except RefUpdateError as e:
            orphan_commits.append(e.commit_sha)
            e.orphan_commits = list(orphan_commits)
            if not isinstance(e, RefUpdateConflict) or attempt >= attempts:
                raise
            logger.warning(
                "Ref update attempt %d/%d rejected (%s), retrying on a fresh head",
                attempt,
                attempts,
                e,
            )
            attempt += 1

    logger.info(
        "Successfully created commit %s with %d files on %s",
        commit_sha,
        len(entries),
        branch,
    )
    return PublishResult(
        date=run_date,
        status="committed",
        file_count=len(entries),
        commit_sha=commit_sha,
        attempts=attempt,
        paths=[entry.path for entry in entries],
        orphan_commits=orphan_commits,
    )
