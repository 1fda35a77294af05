"""Retrieve menu pages over HTTP."""

import requests

from menuweek.config import DEFAULT_REQUEST_TIMEOUT
from menuweek.errors import NotFoundError, TransportError

USER_AGENT = (
    "menuweek/0.1 (+https://www.akafoe.de/gastronomie/speiseplaene-der-mensen/) "
    "py-requests/" + requests.__version__
)


def fetch_document(url: str, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> str:
    """Fetch HTML from a remote URL using ``requests``.

    A descriptive User-Agent header identifies this tool. No retries are
    made.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds.

    Returns:
        The response body as decoded text.

    Raises:
        NotFoundError: If the server answers 404.
        TransportError: For any other error status or connection failure.
    """
    try:
        resp = requests.get(
            url,
            timeout=timeout,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "text/html,application/xhtml+xml",
            },
        )
    except requests.RequestException as exc:
        raise TransportError(f"Request for {url} failed: {exc}") from exc

    if resp.status_code == 404:
        raise NotFoundError(url)
    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        raise TransportError(f"HTTP {resp.status_code} {resp.reason} for {url}") from exc
    return resp.text
