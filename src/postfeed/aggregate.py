"""Join posts with their authors into the enriched feed."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from postfeed import config
from postfeed.models import Author, EnrichedItem, Post

logger = logging.getLogger(__name__)


def aggregate(
    posts: Iterable[Post],
    authors: Iterable[Author],
    unknown_author: str | None = None,
) -> list[EnrichedItem]:
    """Return one :class:`EnrichedItem` per post, in post order.

    Posts whose ``author_id`` matches no author get *unknown_author*
    (``config.UNKNOWN_AUTHOR`` by default). On duplicate author ids the last
    one wins.
    """
    fallback = config.UNKNOWN_AUTHOR if unknown_author is None else unknown_author

    # Build author-id → display-name map
    author_map: dict[int, str] = {a.id: a.display_name for a in authors}

    items = [
        EnrichedItem(
            id=post.id,
            author_id=post.author_id,
            title=post.title,
            body=post.body,
            author_display_name=author_map.get(post.author_id, fallback),
        )
        for post in posts
    ]

    unresolved = sum(1 for item in items if item.author_id not in author_map)
    if unresolved:
        logger.info("Aggregated %d posts; %d with unknown author", len(items), unresolved)
    else:
        logger.info("Aggregated %d posts", len(items))
    return items
