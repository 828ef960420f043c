"""Registry storage."""

from .registry import FeedRegistry

__all__ = ["FeedRegistry"]
