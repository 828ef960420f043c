"""Pytest configuration and shared fixtures."""

import pytest

# Add src to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from feed_aggregator.errors import UpstreamFetchError
from feed_aggregator.ingestion.interfaces import ParsedItem


SAMPLE_RSS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>Test Feed</title>
    <link>https://www.example.com</link>
    <description>A test RSS feed</description>
    <item>
      <title>First Article</title>
      <link>https://www.example.com/article-1</link>
      <description>Description of the &lt;b&gt;first&lt;/b&gt; article</description>
      <pubDate>Mon, 01 Jan 2024 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Second Article</title>
      <link>https://news.example.org/article-2</link>
      <content:encoded><![CDATA[<p>Full <em>body</em> of the second article</p>]]></content:encoded>
    </item>
  </channel>
</rss>"""

SAMPLE_ATOM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Test Atom Feed</title>
  <link href="https://example.com"/>
  <entry>
    <title>Atom Entry 1</title>
    <link href="https://example.com/entry-1"/>
    <id>urn:uuid:entry-1</id>
    <summary>Summary of entry 1</summary>
    <updated>2024-02-13T10:00:00Z</updated>
  </entry>
</feed>"""

SAMPLE_NOT_A_FEED = "this is { not xml at all"


class StubFetcher:
    """Stands in for RSSFetcher: serves canned items per URL.

    ``feeds`` maps a URL to a list of item kwargs, or to an exception that
    fetch_feed raises for that URL. Fresh ParsedItems are built on every
    call because the aggregator tags them in place.
    """

    def __init__(self, feeds: dict):
        self.feeds = feeds
        self.requested = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return None

    async def fetch_feed(self, url):
        self.requested.append(url)
        entry = self.feeds.get(url, [])
        if isinstance(entry, Exception):
            raise entry
        return [ParsedItem(**kwargs) for kwargs in entry]


@pytest.fixture
def registry_path(tmp_path):
    """Path for a registry document that does not exist yet."""
    return tmp_path / "data" / "feeds.json"


@pytest.fixture
def registry(registry_path):
    from feed_aggregator.storage.registry import FeedRegistry
    return FeedRegistry(str(registry_path))


@pytest.fixture
def stub_feeds():
    """Canned feed contents keyed by URL."""
    return {
        "https://a.example.com/rss": [
            {"title": "A1", "link": "https://www.a.example.com/1",
             "pub_date": "Mon, 01 Jan 2024 00:00:00 GMT", "content_snippet": "a one"},
            {"title": "A3", "link": "https://www.a.example.com/3",
             "pub_date": "Fri, 01 Mar 2024 00:00:00 GMT", "content": "<p>a three</p>"},
        ],
        "https://b.example.com/rss": [
            {"title": "B2", "link": "https://b.example.com/2",
             "iso_date": "2024-02-01T00:00:00+00:00"},
        ],
        "https://broken.example.com/rss": UpstreamFetchError("HTTP 500 from broken"),
    }


@pytest.fixture
def stub_fetcher(stub_feeds):
    return StubFetcher(stub_feeds)


@pytest.fixture
def populated_registry(registry):
    """Two categories: news (feeds a and broken) and tech (feed b)."""
    registry.add_feed("news", "https://a.example.com/rss", "Feed A", category_name="News")
    registry.add_feed("news", "https://broken.example.com/rss", "Broken Feed")
    registry.add_feed("tech", "https://b.example.com/rss", "Feed B", category_name="Tech")
    return registry


@pytest.fixture
def sample_rss_xml():
    """Sample valid RSS 2.0 XML."""
    return SAMPLE_RSS_XML


@pytest.fixture
def sample_atom_xml():
    """Sample valid Atom XML."""
    return SAMPLE_ATOM_XML


@pytest.fixture
def sample_not_a_feed():
    return SAMPLE_NOT_A_FEED


@pytest.fixture
def make_stub_fetcher():
    """The StubFetcher class, for tests that need custom feed contents."""
    return StubFetcher
