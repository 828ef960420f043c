"""Aggregation pipeline."""

from .aggregator import FeedAggregator, AggregationResult

__all__ = ["FeedAggregator", "AggregationResult"]
