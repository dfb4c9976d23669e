"""CLI for publishing a day's stored articles as one commit.

Re-running it for a date recovers from an aborted or rejected publish.
"""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from common.aws import S3Store, get_s3_client
from common.cli_helpers import setup_logging, today_in
from common.config import load_config
from common.http import build_session
from publish_articles.helpers import build_github_client, parse_publish_articles_args
from publish_articles.models import PublishError, RefUpdateError
from publish_articles.publish_articles import publish_day

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = parse_publish_articles_args(argv)

    config = load_config(args.config)
    run_date = args.date or today_in(config.timezone)

    session = build_session(config.http_retries)
    store = S3Store(
        get_s3_client(config.storage.region, config.storage.endpoint_url, config.storage.timeout),
        config.storage.bucket,
    )
    github = build_github_client(config.github, session)

    try:
        result = publish_day(
            run_date,
            store,
            github,
            branch=config.github.branch,
            key_prefix=config.storage.prefix,
            max_attempts=args.max_attempts or config.publish.max_attempts,
            commit_message=config.publish.commit_message,
        )
    except RefUpdateError as e:
        logger.error("Commit %s created but not linked: %s", e.commit_sha, e)
        return 2
    except PublishError as e:
        logger.error("Publish aborted, branch unchanged: %s", e)
        return 1

    logger.info("Publish %s: %s (%d files)", run_date.isoformat(), result.status, result.file_count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
