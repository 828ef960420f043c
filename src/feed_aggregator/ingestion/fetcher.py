"""Async RSS/Atom feed fetcher."""

import asyncio
import html
import time
from datetime import datetime, timezone
from typing import List, Optional

import aiohttp
import feedparser
import structlog
from bs4 import BeautifulSoup

from .interfaces import ParsedItem, FetcherInterface
from ..config.settings import settings
from ..errors import UpstreamFetchError

logger = structlog.get_logger()


class RSSFetcher(FetcherInterface):
    """Fetches feeds over one shared aiohttp session.

    No concurrency cap and no retries: each call is a single GET bounded
    only by the session timeout.
    """

    def __init__(self, timeout_seconds: int = None, user_agent: str = None):
        self.session: Optional[aiohttp.ClientSession] = None
        self.timeout_seconds = timeout_seconds or settings.fetch_timeout_seconds
        self.user_agent = user_agent or settings.user_agent

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            headers={"User-Agent": self.user_agent}
        )
        return self

    async def __aexit__(self, *args):
        if self.session:
            await self.session.close()

    async def fetch_feed(self, url: str) -> List[ParsedItem]:
        """Fetch and parse a single feed.

        Raises:
            UpstreamFetchError: on connection errors, non-2xx responses, or
                documents feedparser cannot read.
        """
        start_time = time.time()

        try:
            async with self.session.get(url) as response:
                if response.status >= 400:
                    raise UpstreamFetchError(f"HTTP {response.status} from {url}")
                content = await response.text()
        except aiohttp.ClientError as e:
            raise UpstreamFetchError(f"Connection error for {url}: {e}") from e
        except asyncio.TimeoutError as e:
            raise UpstreamFetchError(f"Timed out fetching {url}") from e

        items = parse_feed_document(content)

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info("feed_fetched", url=url, items=len(items), time_ms=elapsed_ms)
        return items


def parse_feed_document(content: str) -> List[ParsedItem]:
    """Parse a feed document into items.

    Raises:
        UpstreamFetchError: if the document is not a readable feed.
    """
    feed = feedparser.parse(content)

    if feed.bozo and not feed.entries:
        raise UpstreamFetchError(f"Not a valid RSS/Atom feed: {feed.get('bozo_exception')}")

    return [_parse_entry(entry) for entry in feed.entries]


def _parse_entry(entry) -> ParsedItem:
    """Map a feedparser entry to a ParsedItem."""
    content = None
    if entry.get("content"):
        content = entry.content[0].get("value")
    if not content:
        content = entry.get("summary") or entry.get("description")

    return ParsedItem(
        title=entry.get("title"),
        link=entry.get("link"),
        pub_date=entry.get("published") or entry.get("updated"),
        iso_date=_iso_date(entry),
        content=content,
        content_snippet=make_snippet(content),
    )


def _iso_date(entry) -> Optional[str]:
    """ISO form of the entry's parsed publish date, or updated date."""
    for attr in ("published_parsed", "updated_parsed"):
        parsed = entry.get(attr)
        if parsed:
            try:
                return datetime(*parsed[:6], tzinfo=timezone.utc).isoformat()
            except (TypeError, ValueError):
                pass
    return None


def make_snippet(content: Optional[str]) -> Optional[str]:
    """Plain text version of an HTML fragment; None when nothing is left."""
    if not content:
        return None
    text = BeautifulSoup(content, "html.parser").get_text()
    text = html.unescape(text).strip()
    return text or None
