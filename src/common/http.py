"""Shared HTTP session for the remote pipeline stages."""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

USER_AGENT = "news-pipeline/1.0 (daily digest)"


def build_session(retries: int = 0, backoff_factor: float = 0.5) -> requests.Session:
    """Create a requests session with a mounted retry policy.

    With ``retries=0`` a failed call surfaces immediately. Retries only apply
    to idempotent methods on connection errors and 502/503/504 responses.
    """
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(502, 503, 504),
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_maxsize=32)

    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"User-Agent": USER_AGENT})
    return session
