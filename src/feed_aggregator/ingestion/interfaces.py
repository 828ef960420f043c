"""Interface definitions for feed subscriptions and fetched items."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@dataclass
class FeedSubscription:
    """One external feed URL tracked under a category."""
    url: str
    name: str
    enabled: bool = True
    added_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_dict(cls, data: dict) -> "FeedSubscription":
        return cls(
            url=data["url"],
            name=data.get("name", data["url"]),
            enabled=data.get("enabled", True) is not False,
            added_at=data.get("addedAt", ""),
        )

    def to_dict(self) -> dict:
        """Convert to the registry document shape."""
        return {
            "url": self.url,
            "name": self.name,
            "enabled": self.enabled,
            "addedAt": self.added_at,
        }


@dataclass
class Category:
    """User-defined grouping of feed subscriptions."""
    id: str
    name: str
    feeds: List[FeedSubscription] = field(default_factory=list)

    @classmethod
    def from_dict(cls, category_id: str, data: dict) -> "Category":
        return cls(
            id=category_id,
            name=data.get("name", category_id),
            feeds=[FeedSubscription.from_dict(f) for f in data.get("feeds", [])],
        )

    def to_dict(self) -> dict:
        """Convert to the registry document shape."""
        return {
            "id": self.id,
            "name": self.name,
            "feeds": [f.to_dict() for f in self.feeds],
        }

    def find_feed(self, url: str) -> Optional[FeedSubscription]:
        for feed in self.feeds:
            if feed.url == url:
                return feed
        return None


@dataclass
class ActiveSubscription:
    """An enabled subscription paired with the category it belongs to."""
    feed: FeedSubscription
    category_id: str
    category_name: str


@dataclass
class ParsedItem:
    """A single entry read from a feed.

    Date and content fields are kept as the feed provided them; the
    aggregator applies the fallback order (pub_date, then iso_date;
    content_snippet, then content).
    """
    title: Optional[str] = None
    link: Optional[str] = None
    pub_date: Optional[str] = None
    iso_date: Optional[str] = None
    content: Optional[str] = None
    content_snippet: Optional[str] = None
    feed_name: Optional[str] = None
    category: Optional[str] = None
    category_name: Optional[str] = None


@dataclass
class FeedItem:
    """An aggregated item in the API output shape."""
    title: Optional[str]
    link: Optional[str]
    pub_date: Optional[str]
    content: str
    source: str
    feed_name: Optional[str]
    category: Optional[str]
    category_name: Optional[str]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "link": self.link,
            "pubDate": self.pub_date,
            "content": self.content,
            "source": self.source,
            "feedName": self.feed_name,
            "category": self.category,
            "categoryName": self.category_name,
        }


class FetcherInterface:
    """Interface for feed fetching."""

    async def fetch_feed(self, url: str) -> List[ParsedItem]:
        """Fetch and parse the entries of a single feed."""
        raise NotImplementedError
