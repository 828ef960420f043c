"""Aggregation pipeline: fetch, merge, sort and format feed items."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, List, Optional
from urllib.parse import urlparse

import structlog

from ..ingestion.fetcher import RSSFetcher
from ..ingestion.interfaces import ActiveSubscription, FeedItem, ParsedItem
from ..storage.registry import FeedRegistry

logger = structlog.get_logger()

UNKNOWN_SOURCE = "Unknown Source"

# Items without a usable date sort after every dated item.
_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class AggregationResult:
    """Sorted output of one aggregation run."""
    items: List[FeedItem] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        return {
            "success": True,
            "count": self.count,
            "items": [item.to_dict() for item in self.items],
        }


class FeedAggregator:
    """Combines the enabled feeds of the registry into one sorted list."""

    def __init__(
        self,
        registry: FeedRegistry = None,
        fetcher_factory: Callable[[], RSSFetcher] = None,
    ):
        self.registry = registry or FeedRegistry()
        self.fetcher_factory = fetcher_factory or RSSFetcher

    async def aggregate(self, category_filter: Optional[str] = None) -> AggregationResult:
        """Fetch every enabled feed (optionally of one category) and merge them."""
        subscriptions = await asyncio.to_thread(
            self.registry.active_subscriptions, category_filter
        )

        async with self.fetcher_factory() as fetcher:
            tasks = [self._fetch_tagged(fetcher, sub) for sub in subscriptions]
            results = await asyncio.gather(*tasks)

        all_items = [item for items in results for item in items]
        all_items.sort(key=publication_date, reverse=True)

        logger.info(
            "feeds_aggregated",
            category=category_filter,
            feeds=len(subscriptions),
            items=len(all_items)
        )
        return AggregationResult(items=[format_item(item) for item in all_items])

    async def _fetch_tagged(
        self,
        fetcher,
        subscription: ActiveSubscription
    ) -> List[ParsedItem]:
        """Fetch one feed and tag its items; a failure yields no items."""
        try:
            items = await fetcher.fetch_feed(subscription.feed.url)
        except Exception as e:
            logger.warning(
                "feed_fetch_failed",
                feed=subscription.feed.name,
                url=subscription.feed.url,
                error=str(e)
            )
            return []

        for item in items:
            item.feed_name = subscription.feed.name
            item.category = subscription.category_id
            item.category_name = subscription.category_name
        return items


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 822 or ISO-8601 date string into an aware datetime."""
    if not value:
        return None

    parsed = None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def publication_date(item: ParsedItem) -> datetime:
    """Sort key: pub_date, falling back to iso_date, else the undated minimum.

    iso_date is feedparser's reading of the same field, so it also covers
    pub_date strings that parse_date does not understand.
    """
    return parse_date(item.pub_date) or parse_date(item.iso_date) or _UNDATED


def extract_source(link: Optional[str]) -> str:
    """Hostname of a link without a leading "www."."""
    if not link:
        return UNKNOWN_SOURCE
    try:
        hostname = urlparse(link).hostname
    except ValueError:
        return UNKNOWN_SOURCE
    if not hostname:
        return UNKNOWN_SOURCE
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def format_item(item: ParsedItem) -> FeedItem:
    """Reshape a tagged ParsedItem into the output schema."""
    return FeedItem(
        title=item.title,
        link=item.link,
        pub_date=item.pub_date or item.iso_date,
        content=item.content_snippet or item.content or "",
        source=extract_source(item.link),
        feed_name=item.feed_name,
        category=item.category,
        category_name=item.category_name,
    )
