"""Tests for TimersManager."""

import json
import logging
import uuid
from pathlib import Path

import pytest

from eternal_timer import (
    CorruptStoreError,
    CreateTimerError,
    InvalidDurationError,
    JSONLTimersManager,
    PlainTextTimersManager,
    RemoveTimerError,
    ShowTimersError,
    TimerNotFoundError,
    TimersManager,
)
from eternal_timer.codec import JSONLCodec, PlainTextCodec
from eternal_timer.config import TimerConfig, get_default_timer_file
from eternal_timer.manager import create_timers_manager


class TestConstruction:
    """Tests for manager construction and default paths."""

    def test_creates_file(self, jsonl_file: Path):
        JSONLTimersManager(jsonl_file)
        assert jsonl_file.exists()

    def test_accepts_string_path(self, tmp_path: Path):
        manager = PlainTextTimersManager(str(tmp_path / "timers.txt"))
        assert manager.path == tmp_path / "timers.txt"
        assert isinstance(manager.codec, PlainTextCodec)

    def test_default_codec_is_jsonl(self, tmp_path: Path):
        manager = TimersManager(tmp_path / "t.jsonl")
        assert isinstance(manager.codec, JSONLCodec)

    def test_default_path_under_project_root(self, tmp_path: Path, monkeypatch):
        root = tmp_path.resolve()
        (root / "pyproject.toml").write_text("[project]\nname = 'demo'\n")
        nested = root / "src" / "pkg"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert JSONLTimersManager().path == root / ".timers.jsonl"
        assert PlainTextTimersManager().path == root / ".timers"
        assert (root / ".timers.jsonl").exists()

    def test_default_path_matches_config(self, tmp_path: Path, monkeypatch):
        root = tmp_path.resolve()
        (root / "pyproject.toml").write_text("[project]\nname = 'demo'\n")
        monkeypatch.chdir(root)

        for storage in ("jsonl", "plain"):
            config = TimerConfig(storage=storage)
            assert create_timers_manager(config).path == config.resolve_path()
            assert config.resolve_path() == get_default_timer_file(storage)

    def test_create_from_config(self, tmp_path: Path):
        config = TimerConfig(storage="plain", path=tmp_path / "custom")
        manager = create_timers_manager(config)
        assert manager.path == tmp_path / "custom"
        assert isinstance(manager.codec, PlainTextCodec)


class TestCreateTimer:
    """Tests for create_timer."""

    @pytest.mark.asyncio
    async def test_returns_uuid(self, manager: TimersManager):
        timer_id = await manager.create_timer(1000)
        assert len(timer_id) == 36
        assert uuid.UUID(timer_id).version == 4

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, manager: TimersManager):
        ids = [await manager.create_timer(1000) for _ in range(50)]
        assert len(set(ids)) == 50

    @pytest.mark.asyncio
    async def test_stop_is_start_plus_duration(self, manager: TimersManager):
        timer_id = await manager.create_timer(1500)
        timer = await manager.get_timer(timer_id)
        assert timer is not None
        assert timer.stop - timer.start == 1500

    @pytest.mark.asyncio
    async def test_zero_duration(self, manager: TimersManager):
        timer_id = await manager.create_timer(0)
        timer = await manager.get_timer(timer_id)
        assert timer is not None
        assert timer.stop == timer.start

    @pytest.mark.asyncio
    async def test_duration_is_truncated(self, manager: TimersManager):
        timer_id = await manager.create_timer(1500.9)
        timer = await manager.get_timer(timer_id)
        assert timer is not None
        assert timer.duration == 1500

    @pytest.mark.asyncio
    @pytest.mark.parametrize("duration", [-1, -0.5, float("nan"), float("inf")])
    async def test_rejects_invalid_duration(self, manager: TimersManager, duration):
        with pytest.raises(InvalidDurationError):
            await manager.create_timer(duration)
        assert manager.path.read_text() == ""

    @pytest.mark.asyncio
    async def test_rejects_non_numeric_duration(self, manager: TimersManager):
        with pytest.raises(InvalidDurationError):
            await manager.create_timer("1000")  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_appends_one_line(self, manager: TimersManager):
        await manager.create_timer(1000)
        await manager.create_timer(2000)
        lines = manager.path.read_text().splitlines()
        assert len(lines) == 2

    @pytest.mark.asyncio
    async def test_jsonl_stores_details(self, jsonl_manager: TimersManager):
        timer_id = await jsonl_manager.create_timer(
            1000, title="T1", description="steep the tea"
        )
        data = json.loads(jsonl_manager.path.read_text())
        assert data == {
            "id": timer_id,
            "start": data["start"],
            "stop": data["start"] + 1000,
            "title": "T1",
            "description": "steep the tea",
        }

    @pytest.mark.asyncio
    async def test_jsonl_omits_missing_details(self, jsonl_manager: TimersManager):
        await jsonl_manager.create_timer(1000)
        data = json.loads(jsonl_manager.path.read_text())
        assert set(data) == {"id", "start", "stop"}

    @pytest.mark.asyncio
    async def test_plain_ignores_details_with_hint(
        self, plain_manager: TimersManager, caplog
    ):
        caplog.set_level(logging.WARNING, logger="eternal_timer")

        timer_id = await plain_manager.create_timer(1000, title="T1")

        fields = plain_manager.path.read_text().split()
        assert len(fields) == 3
        assert fields[0] == timer_id
        assert "timer_details_ignored" in caplog.messages

    @pytest.mark.asyncio
    async def test_corrupt_file_blocks_create(self, manager: TimersManager):
        original = "this line is broken\n"
        manager.path.write_text(original)

        with pytest.raises(CorruptStoreError):
            await manager.create_timer(1000)
        assert manager.path.read_text() == original

    @pytest.mark.asyncio
    async def test_wraps_io_errors(self, manager: TimersManager):
        manager.path.unlink()
        manager.path.mkdir()

        with pytest.raises(CreateTimerError) as exc_info:
            await manager.create_timer(1000)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert "create timer" in str(exc_info.value)


class TestRemoveTimer:
    """Tests for remove_timer."""

    @pytest.mark.asyncio
    async def test_removes_only_target(self, manager: TimersManager):
        first = await manager.create_timer(5000)
        second = await manager.create_timer(5000)

        await manager.remove_timer(first)

        assert [t.id for t in await manager.show_timers()] == [second]

    @pytest.mark.asyncio
    async def test_unknown_id(self, manager: TimersManager):
        await manager.create_timer(5000)
        with pytest.raises(TimerNotFoundError) as exc_info:
            await manager.remove_timer("00000000-0000-4000-8000-000000000000")
        assert "not found" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_second_remove_is_not_found(self, manager: TimersManager):
        timer_id = await manager.create_timer(5000)
        await manager.remove_timer(timer_id)
        with pytest.raises(TimerNotFoundError):
            await manager.remove_timer(timer_id)

    @pytest.mark.asyncio
    async def test_not_found_is_lookup_error(self, manager: TimersManager):
        with pytest.raises(LookupError):
            await manager.remove_timer("missing")

    @pytest.mark.asyncio
    async def test_corrupt_file_blocks_remove(self, manager: TimersManager):
        timer_id = await manager.create_timer(5000)
        with manager.path.open("a") as f:
            f.write("garbage\n")
        before = manager.path.read_text()

        with pytest.raises(CorruptStoreError):
            await manager.remove_timer(timer_id)
        assert manager.path.read_text() == before

    @pytest.mark.asyncio
    async def test_wraps_io_errors(self, manager: TimersManager):
        manager.path.unlink()
        manager.path.mkdir()

        with pytest.raises(RemoveTimerError):
            await manager.remove_timer("00000000-0000-4000-8000-000000000000")


class TestShowTimers:
    """Tests for show_timers."""

    @pytest.mark.asyncio
    async def test_empty(self, manager: TimersManager):
        assert await manager.show_timers() == []

    @pytest.mark.asyncio
    async def test_lists_all_timers(self, manager: TimersManager):
        a = await manager.create_timer(1000)
        b = await manager.create_timer(1500)
        ids = {t.id for t in await manager.show_timers()}
        assert ids == {a, b}

    @pytest.mark.asyncio
    async def test_jsonl_details_round_trip(self, jsonl_manager: TimersManager):
        timer_id = await jsonl_manager.create_timer(1000, title="T1")
        [timer] = await jsonl_manager.show_timers()
        assert timer.id == timer_id
        assert timer.title == "T1"
        assert timer.description is None
        assert timer.duration == 1000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["a\u2028b", "a\u2029b", "a\x85b"])
    async def test_unicode_line_separator_in_title(
        self, jsonl_manager: TimersManager, title: str
    ):
        timer_id = await jsonl_manager.create_timer(1000, title=title)
        other_id = await jsonl_manager.create_timer(2000)

        timers = await jsonl_manager.show_timers()
        assert [t.id for t in timers] == [timer_id, other_id]
        assert timers[0].title == title

        await jsonl_manager.remove_timer(other_id)
        assert (await jsonl_manager.get_timer(timer_id)).title == title

    @pytest.mark.asyncio
    async def test_corrupt_line_raises(self, manager: TimersManager):
        manager.path.write_text("not a timer\n")
        with pytest.raises(CorruptStoreError):
            await manager.show_timers()

    @pytest.mark.asyncio
    async def test_wraps_io_errors(self, manager: TimersManager):
        manager.path.unlink()
        manager.path.mkdir()
        with pytest.raises(ShowTimersError):
            await manager.show_timers()

    @pytest.mark.asyncio
    async def test_get_timer_missing(self, manager: TimersManager):
        assert await manager.get_timer("missing") is None
