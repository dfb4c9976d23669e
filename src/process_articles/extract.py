import logging

import requests

from process_articles.models import Article, ExtractionError

logger = logging.getLogger(__name__)


class ExtractionClient:
    """Client for the HTML-extraction service.

    The service takes a section page URL and returns the headline articles
    found on it as a JSON array of ``{title, content, date}`` objects.
    """

    def __init__(self, session: requests.Session, url: str, timeout: float = 120):
        self.session = session
        self.url = url
        self.timeout = timeout

    def fetch_articles(self, source_url: str) -> list[Article]:
        """Fetch the articles for one section page.

        Returns:
            List of articles, possibly empty.

        Raises:
            requests.RequestException: On network failure or timeout.
            ExtractionError: On a non-200 status or a malformed payload.
        """
        response = self.session.get(
            self.url,
            params={"url": source_url},
            timeout=self.timeout,
        )

        if response.status_code != 200:
            raise ExtractionError(
                f"Extraction server returned status code {response.status_code} for {source_url}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtractionError(f"Invalid JSON from extraction server for {source_url}") from exc

        if not isinstance(payload, list):
            raise ExtractionError(
                f"Expected a JSON array from extraction server, got {type(payload).__name__}"
            )

        articles = []
        for item in payload:
            if not isinstance(item, dict):
                raise ExtractionError(f"Expected article objects, got {type(item).__name__}")
            articles.append(Article.from_dict(item))

        logger.info("Extracted %d articles from %s", len(articles), source_url)
        return articles
