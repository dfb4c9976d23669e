"""Minimal client for the GitHub Git Data API."""

import base64
import logging
from typing import Any

import requests

from publish_articles.models import TreeEntry

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Git Data API calls for one repository.

    Every method maps to a single REST call. Nothing here touches the branch
    ref except ``update_ref``.
    """

    def __init__(
        self,
        session: requests.Session,
        token: str,
        owner: str,
        repo: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30,
    ):
        self.session = session
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        url = f"{self.api_url}/repos/{self.owner}/{self.repo}/{path}"
        response = self.session.request(
            method,
            url,
            headers=self._headers,
            timeout=self.timeout,
            **kwargs,
        )

        if response.status_code >= 400:
            try:
                detail = response.json().get("message", "")
            except ValueError:
                detail = response.text
            raise GitHubAPIError(
                f"{method} {path} returned status code {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        return response.json()

    def get_ref(self, branch: str) -> str:
        """Return the commit SHA the branch currently points at."""
        data = self._request("GET", f"git/ref/heads/{branch}")
        return data["object"]["sha"]

    def get_tree(self, sha: str, recursive: bool = True) -> dict[str, Any]:
        params = {"recursive": "1"} if recursive else None
        return self._request("GET", f"git/trees/{sha}", params=params)

    def create_blob(self, content: bytes) -> str:
        data = self._request(
            "POST",
            "git/blobs",
            json={"content": base64.b64encode(content).decode("ascii"), "encoding": "base64"},
        )
        return data["sha"]

    def create_tree(self, base_tree: str, entries: list[TreeEntry]) -> str:
        data = self._request(
            "POST",
            "git/trees",
            json={"base_tree": base_tree, "tree": [entry.to_dict() for entry in entries]},
        )
        return data["sha"]

    def create_commit(self, message: str, tree_sha: str, parents: list[str]) -> str:
        data = self._request(
            "POST",
            "git/commits",
            json={"message": message, "tree": tree_sha, "parents": parents},
        )
        return data["sha"]

    def update_ref(self, branch: str, sha: str, force: bool = False) -> None:
        """Move the branch to ``sha``. Without ``force`` GitHub rejects non fast-forwards."""
        self._request(
            "PATCH",
            f"git/refs/heads/{branch}",
            json={"sha": sha, "force": force},
        )
        logger.info("Updated heads/%s to %s", branch, sha)
