"""Data ingestion - fetching and parsing RSS feeds."""

from .interfaces import (
    FeedSubscription, Category, ActiveSubscription, ParsedItem, FeedItem, FetcherInterface
)
from .fetcher import RSSFetcher

__all__ = [
    "FeedSubscription", "Category", "ActiveSubscription", "ParsedItem", "FeedItem",
    "FetcherInterface", "RSSFetcher"
]
