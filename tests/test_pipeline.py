"""Tests for the session wiring and the CLI entry-point."""

from __future__ import annotations

import logging

import pytest

from postfeed import config
from postfeed.__main__ import main
from postfeed.client import TransportError
from postfeed.feed import AggregateLoadError
from postfeed.models import Author, Comment, Post
from postfeed.pipeline import show_feed


class FakeClient:
    def __init__(self, fail_authors: bool = False) -> None:
        self.fail_authors = fail_authors
        self.comment_calls: list[int] = []

    async def fetch_posts(self) -> list[Post]:
        return [
            Post(id=1, author_id=10, title="First", body="one"),
            Post(id=2, author_id=20, title="Second", body="two"),
        ]

    async def fetch_authors(self) -> list[Author]:
        if self.fail_authors:
            raise TransportError("GET /users returned 500", status_code=500)
        return [Author(id=10, display_name="ana")]

    async def fetch_comments(self, post_id: int) -> list[Comment]:
        self.comment_calls.append(post_id)
        return [Comment(post_id=post_id, id=1, author_email="c@x.io", body=f"comment on {post_id}")]


class TestShowFeed:
    @pytest.mark.asyncio
    async def test_toggle_shows_comments(self) -> None:
        client = FakeClient()
        text = await show_feed(client, toggles=[1])  # type: ignore[arg-type]

        assert "comment on 1" in text
        assert "comment on 2" not in text
        assert "by: @ana" in text
        assert f"by: @{config.UNKNOWN_AUTHOR}" in text
        assert client.comment_calls == [1]

    @pytest.mark.asyncio
    async def test_double_toggle_hides_without_refetch(self) -> None:
        client = FakeClient()
        text = await show_feed(client, toggles=[1, 1])  # type: ignore[arg-type]

        assert "comment on 1" not in text
        assert client.comment_calls == [1]

    @pytest.mark.asyncio
    async def test_limit(self) -> None:
        text = await show_feed(FakeClient(), limit=1)  # type: ignore[arg-type]
        assert "First" in text
        assert "Second" not in text

    @pytest.mark.asyncio
    async def test_load_failure_propagates(self) -> None:
        with pytest.raises(AggregateLoadError):
            await show_feed(FakeClient(fail_authors=True))  # type: ignore[arg-type]


class TestCli:
    def test_show_passes_arguments(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[list[int], int | None]] = []

        def fake_run_show(toggles: list[int], limit: int | None) -> int:
            calls.append((toggles, limit))
            return 0

        monkeypatch.setattr("postfeed.__main__.run_show", fake_run_show)

        with pytest.raises(SystemExit) as excinfo:
            main(["show", "--toggle", "3", "--toggle", "3", "--limit", "5"])

        assert excinfo.value.code == 0
        assert calls == [([3, 3], 5)]

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "postfeed" in capsys.readouterr().out

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["show", "--limit", "-1"])
        assert excinfo.value.code == 2


class TestConfig:
    def test_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "LOG_LEVEL", "debug")
        assert config.log_level() == logging.DEBUG

    def test_unknown_log_level_defaults_to_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "LOG_LEVEL", "chatty")
        assert config.log_level() == logging.INFO
