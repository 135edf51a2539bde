"""http.py : HTTP transports for fetching NBA data, with session management and an optional browser tier."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from scrapernba.config import DEFAULT_TIMEOUT, MAX_RESPONSE_SIZE, STATS_HEADERS
from scrapernba.core.errors import NetworkError

# Setup logging
LOG = logging.getLogger(__name__)

CLIENT_TIERS = ("primary", "browser", "auto")

# The core never retries; callers decide.
_NO_RETRY = Retry(total=0, raise_on_status=False)


def _get_session() -> requests.Session:
    """Create a pooled requests session."""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=_NO_RETRY, pool_connections=50, pool_maxsize=50)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _check_size(size: int, url: str) -> None:
    if size > MAX_RESPONSE_SIZE:
        raise NetworkError(
            f"Response from {url} is {size} bytes, over the {MAX_RESPONSE_SIZE} byte limit", url=url
        )


class RequestsTransport:
    """Primary tier: a plain requests session."""

    name = "primary"

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or _get_session()

    def fetch(self, url: str, timeout: float = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> str:
        try:
            resp = self.session.get(url, headers=headers or STATS_HEADERS, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Request timeout after {timeout}s: {url}", url=url) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch {url}: {e}", url=url) from e

        if not resp.ok:
            raise NetworkError(f"HTTP {resp.status_code}: {resp.reason} ({url})", url=url, status=resp.status_code)

        declared = resp.headers.get("Content-Length")
        if declared and declared.isdigit():
            _check_size(int(declared), url)
        return resp.text

    def close(self) -> None:
        self.session.close()


class BrowserTransport:
    """
    Secondary tier: fetch through a headless chromium via playwright.

    Playwright is an optional extra (pip install scrapernba[browser]) and is
    only imported when this tier actually fetches.
    """

    name = "browser"

    def fetch(self, url: str, timeout: float = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> str:
        try:
            from playwright.sync_api import Error as PlaywrightError
            from playwright.sync_api import sync_playwright
        except ImportError as e:
            raise NetworkError(
                "Browser client requires playwright. Install with: "
                "pip install 'scrapernba[browser]' && playwright install chromium",
                url=url,
            ) from e

        headers = dict(headers or STATS_HEADERS)
        # Host is set by the browser itself
        headers.pop("Host", None)

        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(headless=True)
                try:
                    context = browser.new_context(user_agent=headers.get("User-Agent"), locale="en-US")
                    resp = context.request.get(url, headers=headers, timeout=timeout * 1000)
                    if not resp.ok:
                        raise NetworkError(
                            f"HTTP {resp.status}: {resp.status_text} ({url})", url=url, status=resp.status
                        )
                    return resp.text()
                finally:
                    browser.close()
        except PlaywrightError as e:
            raise NetworkError(f"Browser fetch failed for {url}: {e}", url=url) from e

    def close(self) -> None:
        pass


class TieredTransport:
    """Try the primary transport, and on any NetworkError try the fallback. Never both at once."""

    name = "auto"

    def __init__(self, primary, fallback):
        self.primary = primary
        self.fallback = fallback

    def fetch(self, url: str, timeout: float = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> str:
        try:
            return self.primary.fetch(url, timeout, headers)
        except NetworkError as e:
            LOG.info(f"Primary client failed ({e}); retrying {url} with the {self.fallback.name} client")
        return self.fallback.fetch(url, timeout, headers)

    def close(self) -> None:
        self.primary.close()
        self.fallback.close()


def make_transport(tier: str = "primary"):
    """Build the transport strategy for a client tier name."""
    if tier == "primary":
        return RequestsTransport()
    if tier == "browser":
        return BrowserTransport()
    if tier == "auto":
        return TieredTransport(RequestsTransport(), BrowserTransport())
    raise ValueError(f"Invalid client tier: {tier}. Use one of {', '.join(CLIENT_TIERS)}.")


def parse_json_body(text: str, url: str) -> Any:
    """Size-check and parse a response body."""
    _check_size(len(text.encode("utf-8")), url)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise NetworkError(f"Invalid JSON from {url}: {e}", url=url) from e


def fetch_json(transport, url: str, timeout: float = DEFAULT_TIMEOUT,
               headers: Optional[Dict[str, str]] = None) -> Any:
    """
    Fetch and parse JSON data through a transport.

    Args:
        transport: Any object with fetch(url, timeout, headers) -> str
        url: The URL to fetch
        timeout: Request timeout in seconds
        headers: Request headers, stats.nba.com headers when omitted

    Returns:
        Parsed JSON response

    Raises:
        NetworkError: If the request fails or the body is unusable
    """
    LOG.debug(f"GET {url}")
    try:
        return parse_json_body(transport.fetch(url, timeout, headers), url)
    except NetworkError as e:
        LOG.error(f"Failed to fetch JSON from {url}: {e}")
        raise


async def fetch_json_async(transport, url: str, timeout: float = DEFAULT_TIMEOUT,
                           headers: Optional[Dict[str, str]] = None) -> Any:
    """Async wrapper around fetch_json using a background thread."""
    return await asyncio.to_thread(fetch_json, transport, url, timeout, headers)
