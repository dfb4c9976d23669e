"""Entry point for the scheduled daily trigger (AWS Lambda style)."""

import json
import logging
from typing import Any

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from run_pipeline.helpers import build_pipeline
from run_pipeline.run_pipeline import run_pipeline

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def lambda_handler(event: dict[str, Any] | None, context: Any = None) -> dict[str, Any]:
    """Run the pipeline and report success to the scheduler.

    Pipeline failures never fail the trigger; they are visible in the
    ``run_report`` log line and the returned body only.
    """
    config = load_config()
    logger.info("Scheduled run triggered for categories: %s", ", ".join(config.categories))
    deps, github = build_pipeline(config)

    report = run_pipeline(config, deps, github)

    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(report.to_dict(), ensure_ascii=False),
    }
