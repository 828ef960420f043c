"""Feed registry - CRUD over the categories/feeds JSON document."""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

import structlog

from ..config.settings import settings
from ..errors import ConflictError, NotFoundError, RegistryIOError
from ..ingestion.interfaces import ActiveSubscription, Category, FeedSubscription

logger = structlog.get_logger()


class FeedRegistry:
    """Manages the category and feed subscription document.

    Every operation loads the whole document and every mutation rewrites
    it. Concurrent writers are not isolated: the last save wins.
    """

    def __init__(self, path: str = None):
        self.path = Path(path) if path else Path(settings.registry_path)

    def _load(self) -> Dict[str, Category]:
        """Load the registry document, empty if the file is absent."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RegistryIOError(f"Could not read registry {self.path}: {e}") from e

        return {
            category_id: Category.from_dict(category_id, category_data)
            for category_id, category_data in data.get("categories", {}).items()
        }

    def _save(self, categories: Dict[str, Category]) -> None:
        """Save the document atomically (write to temp, then rename)."""
        document = {
            "categories": {cid: c.to_dict() for cid, c in categories.items()}
        }
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                suffix=".json"
            )
            with os.fdopen(fd, 'w') as f:
                json.dump(document, f, indent=2)
            os.replace(temp_path, self.path)
            logger.debug("registry_saved", path=str(self.path))
        except OSError as e:
            if temp_path and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise RegistryIOError(f"Could not write registry {self.path}: {e}") from e

    def list_categories(self) -> Dict[str, dict]:
        """All categories keyed by id, in document shape."""
        return {cid: c.to_dict() for cid, c in self._load().items()}

    def get_category(self, category_id: str) -> Optional[dict]:
        category = self._load().get(category_id)
        return category.to_dict() if category else None

    def create_category(self, category_id: str, category_name: str) -> dict:
        """Create an empty category."""
        categories = self._load()

        if category_id in categories:
            raise ConflictError(f"Category '{category_id}' already exists")

        category = Category(id=category_id, name=category_name)
        categories[category_id] = category
        self._save(categories)

        logger.info("category_created", category=category_id, name=category_name)
        return category.to_dict()

    def add_feed(
        self,
        category_id: str,
        feed_url: str,
        feed_name: str,
        category_name: str = None
    ) -> dict:
        """Subscribe to a feed, creating the category if it does not exist."""
        categories = self._load()

        category = categories.get(category_id)
        if category is None:
            category = Category(id=category_id, name=category_name or category_id)
            categories[category_id] = category
            logger.info("category_created", category=category_id, name=category.name)

        if category.find_feed(feed_url):
            raise ConflictError(
                f"Feed '{feed_url}' already exists in category '{category_id}'"
            )

        feed = FeedSubscription(url=feed_url, name=feed_name)
        category.feeds.append(feed)
        self._save(categories)

        logger.info("feed_added", category=category_id, url=feed_url, name=feed_name)
        return feed.to_dict()

    def remove_feed(self, category_id: str, feed_url: str) -> bool:
        """Unsubscribe a feed. Returns False when the URL was not subscribed."""
        categories = self._load()

        category = categories.get(category_id)
        if category is None:
            raise NotFoundError(f"Category '{category_id}' not found")

        original_len = len(category.feeds)
        category.feeds = [f for f in category.feeds if f.url != feed_url]

        if len(category.feeds) < original_len:
            self._save(categories)
            logger.info("feed_removed", category=category_id, url=feed_url)
            return True

        return False

    def toggle_feed(self, category_id: str, feed_url: str, enabled: bool) -> dict:
        """Enable or disable a feed."""
        categories = self._load()

        category = categories.get(category_id)
        if category is None:
            raise NotFoundError(f"Category '{category_id}' not found")

        feed = category.find_feed(feed_url)
        if feed is None:
            raise NotFoundError(
                f"Feed '{feed_url}' not found in category '{category_id}'"
            )

        feed.enabled = bool(enabled)
        self._save(categories)

        logger.info("feed_toggled", category=category_id, url=feed_url, enabled=feed.enabled)
        return feed.to_dict()

    def active_subscriptions(self, category_filter: str = None) -> List[ActiveSubscription]:
        """Enabled subscriptions across all categories, or just one."""
        categories = self._load()

        if category_filter:
            selected = [categories[category_filter]] if category_filter in categories else []
        else:
            selected = list(categories.values())

        return [
            ActiveSubscription(feed=feed, category_id=category.id, category_name=category.name)
            for category in selected
            for feed in category.feeds
            if feed.enabled
        ]
