"""Tests for process_articles.helpers module."""

import pytest

from process_articles.helpers import parse_categories, parse_process_articles_args

AVAILABLE = {"politics": "u100", "economy": "u101", "it": "u105"}


class TestParseCategories:
    def test_none_returns_all(self) -> None:
        assert parse_categories(None, AVAILABLE) == AVAILABLE

    def test_all_keyword(self) -> None:
        assert parse_categories("ALL", AVAILABLE) == AVAILABLE

    def test_subset(self) -> None:
        assert parse_categories("it, politics", AVAILABLE) == {"it": "u105", "politics": "u100"}

    def test_unknown_category_raises(self) -> None:
        with pytest.raises(ValueError, match="sports"):
            parse_categories("it,sports", AVAILABLE)


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_process_articles_args([])
        assert args.config is None
        assert args.date is None
        assert args.categories is None

    def test_date_parsed(self) -> None:
        args = parse_process_articles_args(["--date", "2025-01-04", "--categories", "it"])
        assert args.date.isoformat() == "2025-01-04"
        assert args.categories == "it"
