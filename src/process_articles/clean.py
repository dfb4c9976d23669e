import requests

from process_articles.models import CleaningError


class CleaningClient:
    """Client for the text-cleaning service (``POST {content, prompt}`` -> text)."""

    def __init__(self, session: requests.Session, url: str, timeout: float = 10):
        self.session = session
        self.url = url
        self.timeout = timeout

    def clean(self, content: str, prompt: str) -> str:
        response = self.session.post(
            self.url,
            json={"content": content, "prompt": prompt},
            timeout=self.timeout,
        )

        if response.status_code != 200:
            raise CleaningError(f"Cleaning server returned status code {response.status_code}")

        # text/plain without a charset would otherwise be decoded as latin-1
        text = response.content.decode("utf-8", errors="replace")
        if not text.strip():
            raise CleaningError("Cleaning server returned an empty body")

        return text
