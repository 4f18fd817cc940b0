"""Session orchestration: load → aggregate → toggle comments → render."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence

from postfeed import config
from postfeed.client import FeedClient
from postfeed.comments import CommentController
from postfeed.feed import AggregateLoadError, load_feed
from postfeed.render import render_feed, render_load_error

logger = logging.getLogger(__name__)


def _setup_logging() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # Reduce noise from the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def show_feed(
    client: FeedClient,
    toggles: Sequence[int] = (),
    limit: int | None = None,
) -> str:
    """Load the feed, apply *toggles* one after another and return the rendering.

    Raises :class:`AggregateLoadError` if the feed itself cannot be loaded.
    """
    store = await load_feed(client)
    logger.info("Feed loaded with %d posts", len(store))

    controller = CommentController(store, client.fetch_comments)
    for item_id in toggles:
        await controller.toggle_comments(item_id)

    items = store.snapshot()
    if limit is not None:
        items = items[:limit]
    return render_feed(items)


async def _run(toggles: Sequence[int], limit: int | None) -> str:
    async with FeedClient(base_url=config.API_BASE, timeout=config.TIMEOUT) as client:
        return await show_feed(client, toggles=toggles, limit=limit)


def run_show(toggles: Sequence[int] = (), limit: int | None = None) -> int:
    """Render the feed to stdout; return the process exit code."""
    _setup_logging()
    logger.info("=== postfeed start [api=%s] ===", config.API_BASE)

    try:
        output = asyncio.run(_run(toggles, limit))
    except AggregateLoadError as exc:
        sys.stdout.write(render_load_error(exc))
        return 1

    sys.stdout.write(output)
    logger.info("=== postfeed done ===")
    return 0
