"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    # botocore logs every request at INFO when the root logger is chatty
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_date(value: str, field_name: str = "date") -> date:
    """Parse a date string for argparse arguments.

    Args:
        value: Date string in YYYY-MM-DD format.
        field_name: Name of the field for error messages.

    Returns:
        Parsed date object.

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid date.
    """
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{field_name} must be YYYY-MM-DD") from exc


def today_in(timezone_name: str) -> date:
    """Return the current calendar day in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone_name)).date()


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add the --config and --date options shared by every stage CLI."""
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (test/prod) or path to YAML file. Defaults to $CONFIG_ENV or 'prod'",
    )
    parser.add_argument(
        "--date",
        type=lambda v: parse_date(v, "date"),
        default=None,
        help="Run date (YYYY-MM-DD). Defaults to today in the configured timezone",
    )
