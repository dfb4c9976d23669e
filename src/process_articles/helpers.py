"""Helper functions for process_articles CLI."""

from __future__ import annotations

import argparse

import requests

from common.aws import S3Store
from common.cli_helpers import add_common_args
from common.config import PipelineConfig
from process_articles.clean import CleaningClient
from process_articles.extract import ExtractionClient
from process_articles.models import ProcessDeps


def build_process_deps(config: PipelineConfig, session: requests.Session, s3_client) -> ProcessDeps:
    """Wire the extraction, cleaning and storage collaborators from config."""
    return ProcessDeps(
        extractor=ExtractionClient(session, config.extract.url, config.extract.timeout),
        cleaner=CleaningClient(session, config.clean.url, config.clean.timeout),
        store=S3Store(s3_client, config.storage.bucket),
        transform=config.transform,
        key_prefix=config.storage.prefix,
        max_category_workers=config.max_category_workers,
        max_article_workers=config.max_article_workers,
    )


def parse_categories(value: str | None, available: dict[str, str]) -> dict[str, str]:
    '''Restrict the configured categories to a comma-separated subset.'''

    if not value or value.strip().lower() == "all":
        return dict(available)

    parsed = [c.strip() for c in value.split(",") if c.strip()]
    unknown = [c for c in parsed if c not in available]
    if unknown:
        raise ValueError(
            f"Unknown categories: {', '.join(unknown)}. Valid categories: {', '.join(sorted(available))}"
        )

    return {c: available[c] for c in parsed}


def parse_process_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for process_articles.'''

    parser = argparse.ArgumentParser(description="Extract, clean and store today's articles")
    add_common_args(parser)
    parser.add_argument(
        "--categories",
        default=None,
        help="Comma-separated list of categories (default: all configured).",
    )
    return parser.parse_args(argv)
