"""Daily run: process every category, then publish the day in one commit."""

import json
import logging
from datetime import date
from typing import Optional

from common.cli_helpers import today_in
from common.config import PipelineConfig
from process_articles.models import ProcessDeps
from process_articles.process_articles import process_articles
from publish_articles.github import GitHubClient
from publish_articles.models import PublishError, RefUpdateError
from publish_articles.publish_articles import publish_day
from run_pipeline.models import RunReport

logger = logging.getLogger(__name__)


def log_report(report: RunReport) -> None:
    """Emit the run report as one JSON log line."""
    level = logging.INFO
    if report.publish_error or report.articles_failed or report.categories_failed:
        level = logging.WARNING
    logger.log(level, "run_report %s", json.dumps(report.to_dict(), ensure_ascii=False))


def run_pipeline(
    config: PipelineConfig,
    deps: ProcessDeps,
    github: GitHubClient,
    run_date: Optional[date] = None,
) -> RunReport:
    """
    Run the fan-out stage, wait for it, then publish the day's files.

    Never raises: category, article and publish failures all end up in the
    returned report, which is also logged.

    Args:
        config: Pipeline configuration
        deps: Collaborators for the processing stage
        github: Git Data API client for the destination repository
        run_date: Day to run for (default: today in the configured timezone)

    Returns:
        RunReport for the run
    """
    run_date = run_date or today_in(config.timezone)
    report = RunReport(date=run_date)

    try:
        report.categories = process_articles(config.categories, run_date, deps)
    except Exception as e:
        logger.exception("Processing stage failed unexpectedly: %s", e)

    logger.info(
        "Processing finished: %d/%d articles stored",
        report.articles_stored,
        report.articles_found,
    )

    try:
        report.publish = publish_day(
            run_date,
            deps.store,
            github,
            branch=config.github.branch,
            key_prefix=config.storage.prefix,
            max_attempts=config.publish.max_attempts,
            commit_message=config.publish.commit_message,
        )
    except RefUpdateError as e:
        logger.error("Commit %s created but not linked to %s: %s", e.commit_sha, config.github.branch, e)
        report.publish_error = str(e)
        report.orphan_commits = list(e.orphan_commits)
    except PublishError as e:
        logger.error("Publish aborted, files remain in the object store: %s", e)
        report.publish_error = str(e)
    except Exception as e:
        logger.exception("Publish failed unexpectedly: %s", e)
        report.publish_error = str(e)

    log_report(report)
    return report
