"""Helper functions for run_pipeline entry points."""

from __future__ import annotations

import argparse

from common.aws import get_s3_client
from common.cli_helpers import add_common_args
from common.config import PipelineConfig
from common.http import build_session
from process_articles.helpers import build_process_deps
from process_articles.models import ProcessDeps
from publish_articles.github import GitHubClient
from publish_articles.helpers import build_github_client


def build_pipeline(config: PipelineConfig) -> tuple[ProcessDeps, GitHubClient]:
    """Build every collaborator of a run around one HTTP session and one S3 client."""
    session = build_session(config.http_retries)
    s3_client = get_s3_client(config.storage.region, config.storage.endpoint_url, config.storage.timeout)
    deps = build_process_deps(config, session, s3_client)
    github = build_github_client(config.github, session)
    return deps, github


def parse_run_pipeline_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for run_pipeline.'''

    parser = argparse.ArgumentParser(description="Run the daily news pipeline end to end")
    add_common_args(parser)
    return parser.parse_args(argv)
