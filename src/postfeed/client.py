"""Async client for the posts / users / comments REST API (JSONPlaceholder shape)."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from postfeed.models import Author, Comment, Post

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the API cannot be reached or returns an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CommentFetchError(TransportError):
    """Raised when the comments of a single post could not be fetched."""

    def __init__(self, post_id: int, message: str, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.post_id = post_id


class FeedClient:
    """Thin wrapper around ``GET /posts``, ``GET /users`` and ``GET /comments``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required but was empty.")
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> FeedClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── public ──────────────────────────────────────────────────────────
    async def fetch_posts(self) -> list[Post]:
        """Return every post in API order."""
        rows = await self._get_list("/posts")
        posts = self._parse(rows, Post, "/posts")
        logger.info("Fetched %d posts", len(posts))
        return posts

    async def fetch_authors(self) -> list[Author]:
        """Return every user as an :class:`Author`."""
        rows = await self._get_list("/users")
        authors = self._parse(rows, Author, "/users")
        logger.info("Fetched %d authors", len(authors))
        return authors

    async def fetch_comments(self, post_id: int) -> list[Comment]:
        """Return the comments of *post_id*; a post with none yields ``[]``.

        Every failure is re-raised as :class:`CommentFetchError` so callers
        can tell which post it belongs to.
        """
        try:
            rows = await self._get_list("/comments", params={"postId": post_id})
            comments = self._parse(rows, Comment, "/comments")
        except CommentFetchError:
            raise
        except TransportError as exc:
            raise CommentFetchError(post_id, str(exc), status_code=exc.status_code) from exc
        logger.debug("Fetched %d comments for post %d", len(comments), post_id)
        return comments

    # ── private ─────────────────────────────────────────────────────────
    async def _get_list(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        try:
            resp = await self._http.get(path, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {path} failed: {exc}") from exc

        if not resp.is_success:
            raise TransportError(
                f"GET {path} returned {resp.status_code}: {resp.text[:500]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError(f"GET {path} returned invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise TransportError(f"GET {path} returned {type(data).__name__}, expected a list")
        return data

    @staticmethod
    def _parse(rows: list[Any], model: Any, path: str) -> list[Any]:
        try:
            return [model.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise TransportError(f"GET {path} returned malformed records: {exc}") from exc
