"""Domain models shared by the client, the aggregator and the comment controller."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    """Immutable record parsed from the API; accepts wire or Python field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Author(_Record):
    id: int
    display_name: str = Field(alias="username")


class Post(_Record):
    id: int
    author_id: int = Field(alias="userId")
    title: str = ""
    body: str = ""


class Comment(_Record):
    post_id: int = Field(alias="postId")
    id: int
    author_name: str = Field(default="", alias="name")
    author_email: str = Field(default="", alias="email")
    body: str = ""


# ── Comment lifecycle ──────────────────────────────────────────────────────


class CommentsAbsent(BaseModel):
    """Never fetched, or the last fetch failed (``last_error`` is then set)."""

    model_config = ConfigDict(frozen=True)

    status: Literal["absent"] = "absent"
    last_error: str | None = None


class CommentsLoading(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"


class CommentsLoaded(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loaded"] = "loaded"
    comments: tuple[Comment, ...] = ()
    visible: bool = True


CommentState = Annotated[
    Union[CommentsAbsent, CommentsLoading, CommentsLoaded],
    Field(discriminator="status"),
]


class EnrichedItem(BaseModel):
    """A post joined with its author's display name and its comment lifecycle."""

    model_config = ConfigDict(frozen=True)

    id: int
    author_id: int
    title: str = ""
    body: str = ""
    author_display_name: str
    comments: CommentState = Field(default_factory=CommentsAbsent)

    @property
    def comment_collection(self) -> tuple[Comment, ...] | None:
        if isinstance(self.comments, CommentsLoaded):
            return self.comments.comments
        return None

    @property
    def is_comments_loading(self) -> bool:
        return isinstance(self.comments, CommentsLoading)

    @property
    def are_comments_visible(self) -> bool:
        return isinstance(self.comments, CommentsLoaded) and self.comments.visible

    @property
    def last_comment_error(self) -> str | None:
        if isinstance(self.comments, CommentsAbsent):
            return self.comments.last_error
        return None

    def with_comments(self, state: CommentsAbsent | CommentsLoading | CommentsLoaded) -> EnrichedItem:
        """Return a copy of this item carrying *state*; ``self`` is left untouched."""
        return self.model_copy(update={"comments": state})
