"""Per-item lazy comment cache with show/hide toggling.

Each item moves through ``absent → loading → loaded`` independently. The
first toggle on an absent item fetches its comments; later toggles on a loaded
item only flip visibility. Toggles on a loading item are ignored, so at most
one fetch is ever in flight per item, and none is issued once loaded.

A failed fetch puts the item back to ``absent`` (with ``last_error`` set) so
the next toggle retries it. Failures never leave the item they belong to.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence

from postfeed.client import TransportError
from postfeed.feed import FeedStore
from postfeed.models import (
    Comment,
    CommentsAbsent,
    CommentsLoaded,
    CommentsLoading,
    EnrichedItem,
)

logger = logging.getLogger(__name__)

CommentFetcher = Callable[[int], Awaitable[Sequence[Comment]]]


class CommentController:
    """Drives the comment lifecycle of every item in a :class:`FeedStore`."""

    def __init__(self, store: FeedStore, fetch_comments: CommentFetcher) -> None:
        self._store = store
        self._fetch_comments = fetch_comments

    # ── public ──────────────────────────────────────────────────────────

    async def toggle_comments(self, item_id: int) -> EnrichedItem | None:
        """Load, show or hide the comments of *item_id*, whichever applies.

        Returns the item as it stands once the toggle has finished, or
        ``None`` if the feed has no such item.
        """
        item = self._lookup(item_id)
        if item is None:
            return None

        state = item.comments
        if isinstance(state, CommentsLoading):
            logger.debug("Comments for item %d already loading; toggle ignored", item_id)
            return item
        if isinstance(state, CommentsLoaded):
            return self._set_visible(item, state, not state.visible)
        return await self._load(item)

    async def show_comments(self, item_id: int) -> EnrichedItem | None:
        """Make the comments of *item_id* visible, loading them if needed."""
        item = self._lookup(item_id)
        if item is None:
            return None

        state = item.comments
        if isinstance(state, CommentsAbsent):
            return await self._load(item)
        if isinstance(state, CommentsLoaded) and not state.visible:
            return self._set_visible(item, state, True)
        return item

    async def hide_comments(self, item_id: int) -> EnrichedItem | None:
        """Hide the comments of *item_id*; never fetches or drops the cache."""
        item = self._lookup(item_id)
        if item is None:
            return None

        state = item.comments
        if isinstance(state, CommentsLoaded) and state.visible:
            return self._set_visible(item, state, False)
        return item

    async def toggle_many(self, item_ids: Iterable[int]) -> list[EnrichedItem | None]:
        """Toggle several items concurrently; results follow *item_ids* order."""
        results = await asyncio.gather(*(self.toggle_comments(i) for i in item_ids))
        return list(results)

    # ── private ─────────────────────────────────────────────────────────

    def _lookup(self, item_id: int) -> EnrichedItem | None:
        item = self._store.get(item_id)
        if item is None:
            logger.warning("No item with id %d in feed; ignoring", item_id)
        return item

    def _set_visible(
        self, item: EnrichedItem, state: CommentsLoaded, visible: bool
    ) -> EnrichedItem:
        return self._store.replace(item.with_comments(state.model_copy(update={"visible": visible})))

    async def _load(self, item: EnrichedItem) -> EnrichedItem | None:
        item_id = item.id
        # Must be stored before the first await so re-entrant toggles see it.
        self._store.replace(item.with_comments(CommentsLoading()))

        try:
            comments = await self._fetch_comments(item_id)
        except TransportError as exc:
            logger.warning("Failed to load comments for item %d: %s", item_id, exc)
            return self._settle(item_id, CommentsAbsent(last_error=str(exc) or type(exc).__name__))
        except BaseException:
            self._settle(item_id, CommentsAbsent())
            raise

        logger.info("Loaded %d comments for item %d", len(comments), item_id)
        return self._settle(item_id, CommentsLoaded(comments=tuple(comments), visible=True))

    def _settle(
        self, item_id: int, state: CommentsAbsent | CommentsLoaded
    ) -> EnrichedItem | None:
        """Apply a finished fetch to whatever item *item_id* is now."""
        current = self._store.get(item_id)
        if current is None:
            logger.warning("Item %d left the feed before its comments arrived", item_id)
            return None
        return self._store.replace(current.with_comments(state))
