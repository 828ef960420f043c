"""Feed aggregator - merges categorized RSS feeds behind a JSON API."""

__version__ = "0.1.0"
