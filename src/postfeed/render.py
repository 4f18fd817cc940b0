"""Render a feed snapshot as plain Markdown text."""

from __future__ import annotations

from collections.abc import Iterable

from postfeed.models import CommentsAbsent, CommentsLoaded, CommentsLoading, EnrichedItem

_TITLE = "# Blog Posts"

LABEL_LOADING = "Loading..."
LABEL_SHOW = "Show comments"
LABEL_HIDE = "Hide comments"
LABEL_RETRY = "Retry comments"


def toggle_label(item: EnrichedItem) -> str:
    """Text of the item's comments button for its current state."""
    state = item.comments
    if isinstance(state, CommentsLoading):
        return LABEL_LOADING
    if isinstance(state, CommentsLoaded):
        return LABEL_HIDE if state.visible else LABEL_SHOW
    return LABEL_RETRY if state.last_error else LABEL_SHOW


def render_item(item: EnrichedItem) -> str:
    lines = [
        f"## [{item.id}] {item.title}",
        f"by: @{item.author_display_name}",
        "",
        item.body,
        "",
        f"[{toggle_label(item)}]",
    ]

    state = item.comments
    if isinstance(state, CommentsAbsent) and state.last_error:
        lines.append("_Could not load comments._")

    # Comments section is shown while loading, or once loaded and visible.
    if isinstance(state, CommentsLoading) or (
        isinstance(state, CommentsLoaded) and state.visible
    ):
        lines += ["", "### Comments"]
        if isinstance(state, CommentsLoading):
            lines.append(LABEL_LOADING)
        elif not state.comments:
            lines.append("No comments.")
        else:
            for comment in state.comments:
                lines.append(f"- {comment.body}")
                lines.append(f"  - {comment.author_email}")

    return "\n".join(lines)


def render_feed(items: Iterable[EnrichedItem]) -> str:
    """Render every item in order under the feed heading."""
    blocks = [_TITLE] + [render_item(item) for item in items]
    return "\n\n".join(blocks) + "\n"


def render_load_error(exc: BaseException) -> str:
    return f"Error fetching data: {exc}\n"
