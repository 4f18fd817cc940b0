"""The shared feed collection and the initial load that populates it."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from postfeed.aggregate import aggregate
from postfeed.client import FeedClient, TransportError
from postfeed.models import EnrichedItem

logger = logging.getLogger(__name__)


class AggregateLoadError(Exception):
    """Raised when the posts or the authors could not be loaded."""


class FeedStore:
    """Ordered, id-indexed collection of enriched items.

    Every write swaps in a new mapping holding the replaced item and the same
    objects for all other ids, so a snapshot taken earlier never changes.
    """

    def __init__(self, items: Iterable[EnrichedItem] = ()) -> None:
        by_id: dict[int, EnrichedItem] = {}
        for item in items:
            if item.id in by_id:
                raise ValueError(f"Duplicate item id in feed: {item.id}")
            by_id[item.id] = item
        self._items: Mapping[int, EnrichedItem] = MappingProxyType(by_id)
        self._version = 0

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    @property
    def version(self) -> int:
        """Incremented on every :meth:`replace`; lets a view skip unchanged renders."""
        return self._version

    @property
    def items(self) -> Mapping[int, EnrichedItem]:
        """Read-only view of the current id → item mapping."""
        return self._items

    def get(self, item_id: int) -> EnrichedItem | None:
        return self._items.get(item_id)

    def snapshot(self) -> tuple[EnrichedItem, ...]:
        """Return the current items in feed order."""
        return tuple(self._items.values())

    def replace(self, item: EnrichedItem) -> EnrichedItem:
        """Swap in *item* for the existing item with the same id.

        Raises ``KeyError`` if no item with that id is in the feed.
        """
        if item.id not in self._items:
            raise KeyError(item.id)
        updated = dict(self._items)
        updated[item.id] = item
        self._items = MappingProxyType(updated)
        self._version += 1
        return item


async def load_feed(client: FeedClient, unknown_author: str | None = None) -> FeedStore:
    """Fetch posts and authors concurrently and aggregate them into a store.

    Either fetch failing fails the whole load with :class:`AggregateLoadError`.
    """
    try:
        posts, authors = await asyncio.gather(client.fetch_posts(), client.fetch_authors())
    except TransportError as exc:
        logger.error("Failed to load feed: %s", exc)
        raise AggregateLoadError(str(exc)) from exc

    return FeedStore(aggregate(posts, authors, unknown_author=unknown_author))
