"""Tests for process_articles.clean module."""

from unittest.mock import Mock

import pytest

from process_articles.clean import CleaningClient
from process_articles.models import CleaningError


def _response(status_code: int = 200, body: bytes = b"") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.content = body
    return response


class TestCleaningClient:
    def test_posts_content_and_prompt(self) -> None:
        session = Mock()
        session.post.return_value = _response(body="정리된 본문".encode("utf-8"))
        client = CleaningClient(session, "https://clean.example.com", timeout=10)

        result = client.clean("원문", "요약해주세요")

        assert result == "정리된 본문"
        session.post.assert_called_once_with(
            "https://clean.example.com",
            json={"content": "원문", "prompt": "요약해주세요"},
            timeout=10,
        )

    def test_non_200_raises(self) -> None:
        session = Mock()
        session.post.return_value = _response(status_code=502, body=b"bad gateway")
        with pytest.raises(CleaningError, match="502"):
            CleaningClient(session, "u").clean("x", "p")

    def test_empty_body_raises(self) -> None:
        session = Mock()
        session.post.return_value = _response(body=b"  \n")
        with pytest.raises(CleaningError, match="empty"):
            CleaningClient(session, "u").clean("x", "p")
