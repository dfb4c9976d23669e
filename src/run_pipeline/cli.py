"""CLI for the full daily run."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from run_pipeline.helpers import build_pipeline, parse_run_pipeline_args
from run_pipeline.run_pipeline import run_pipeline

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_run_pipeline_args(argv)

    config = load_config(args.config)
    deps, github = build_pipeline(config)

    report = run_pipeline(config, deps, github, run_date=args.date)
    logger.info(
        "Run for %s finished: %d articles stored, published=%s",
        report.date.isoformat(),
        report.articles_stored,
        report.published,
    )


if __name__ == "__main__":
    main()
