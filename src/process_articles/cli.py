"""CLI for extracting, cleaning and storing articles."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.aws import get_s3_client
from common.cli_helpers import setup_logging, today_in
from common.config import load_config
from common.http import build_session
from process_articles.helpers import build_process_deps, parse_categories, parse_process_articles_args
from process_articles.process_articles import process_articles

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_process_articles_args(argv)

    config = load_config(args.config)
    categories = parse_categories(args.categories, config.categories)
    run_date = args.date or today_in(config.timezone)

    session = build_session(config.http_retries)
    s3_client = get_s3_client(config.storage.region, config.storage.endpoint_url, config.storage.timeout)
    deps = build_process_deps(config, session, s3_client)

    results = process_articles(categories, run_date, deps)

    for result in results:
        if result.error:
            logger.warning("  %s | skipped | %s", result.category, result.error)
        else:
            logger.info(
                "  %s | found=%d stored=%d failed=%d",
                result.category,
                result.articles_found,
                result.succeeded,
                result.failed,
            )


if __name__ == "__main__":
    main()
