"""JSON endpoints for categories, feeds and the aggregated item list."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from .schemas import CategoryCreate, FeedCreate, FeedDelete, FeedToggle
from ..ingestion.interfaces import utc_now_iso
from ..pipeline.aggregator import FeedAggregator
from ..storage.registry import FeedRegistry

router = APIRouter()


def get_registry(request: Request) -> FeedRegistry:
    return request.app.state.registry


def get_aggregator(request: Request) -> FeedAggregator:
    return request.app.state.aggregator


@router.get("/feeds")
async def list_feed_items(
    category: Optional[str] = Query(None),
    aggregator: FeedAggregator = Depends(get_aggregator),
):
    """Aggregated items of all enabled feeds, newest first."""
    result = await aggregator.aggregate(category or None)
    return result.to_dict()


@router.get("/categories")
def list_categories(registry: FeedRegistry = Depends(get_registry)):
    return {"success": True, "categories": registry.list_categories()}


@router.post("/categories")
def create_category(
    body: CategoryCreate = Body(...),
    registry: FeedRegistry = Depends(get_registry),
):
    body.require("category_id", "category_name")
    registry.create_category(body.category_id, body.category_name)
    return {
        "success": True,
        "message": f"Category '{body.category_name}' created",
    }


@router.post("/feeds")
def add_feed(
    body: FeedCreate = Body(...),
    registry: FeedRegistry = Depends(get_registry),
):
    """Subscribe to a feed; the category is created if needed."""
    body.require("category_id", "feed_url", "feed_name")
    registry.add_feed(
        body.category_id,
        body.feed_url,
        body.feed_name,
        category_name=body.category_name,
    )
    return {
        "success": True,
        "message": f"Feed '{body.feed_name}' added to '{body.category_id}'",
    }


@router.delete("/feeds")
def remove_feed(
    body: FeedDelete = Body(...),
    registry: FeedRegistry = Depends(get_registry),
):
    body.require("category_id", "feed_url")
    registry.remove_feed(body.category_id, body.feed_url)
    return {
        "success": True,
        "message": f"Feed '{body.feed_url}' removed from '{body.category_id}'",
    }


@router.patch("/feeds/toggle")
def toggle_feed(
    body: FeedToggle = Body(...),
    registry: FeedRegistry = Depends(get_registry),
):
    body.require("category_id", "feed_url", "enabled")
    registry.toggle_feed(body.category_id, body.feed_url, body.enabled)
    state = "enabled" if body.enabled else "disabled"
    return {
        "success": True,
        "message": f"Feed '{body.feed_url}' {state}",
    }


@router.get("/health")
def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "ok", "timestamp": utc_now_iso()}
