"""Helper functions for publish_articles CLI."""

from __future__ import annotations

import argparse

import requests

from common.config import GitHubConfig
from common.cli_helpers import add_common_args
from publish_articles.github import GitHubClient


def build_github_client(config: GitHubConfig, session: requests.Session) -> GitHubClient:
    """Create a Git Data API client for the configured repository."""
    return GitHubClient(
        session,
        token=config.token,
        owner=config.owner,
        repo=config.repo,
        api_url=config.api_url,
        timeout=config.timeout,
    )


def parse_publish_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for publish_articles.'''

    parser = argparse.ArgumentParser(description="Commit one day's stored articles to GitHub")
    add_common_args(parser)
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Rebuild the commit on a fresh head this many times on ref conflicts (default: from config)",
    )
    return parser.parse_args(argv)
