"""Shared test fixtures."""

from pathlib import Path

import pytest

from eternal_timer import JSONLTimersManager, PlainTextTimersManager, TimersManager


@pytest.fixture
def jsonl_file(tmp_path: Path) -> Path:
    return tmp_path / ".timers.jsonl"


@pytest.fixture
def plain_file(tmp_path: Path) -> Path:
    return tmp_path / ".timers"


@pytest.fixture
def jsonl_manager(jsonl_file: Path) -> TimersManager:
    return JSONLTimersManager(jsonl_file)


@pytest.fixture
def plain_manager(plain_file: Path) -> TimersManager:
    return PlainTextTimersManager(plain_file)


@pytest.fixture(params=["jsonl", "plain"])
def manager(request, tmp_path: Path) -> TimersManager:
    """A manager for each storage type."""
    if request.param == "jsonl":
        return JSONLTimersManager(tmp_path / ".timers.jsonl")
    return PlainTextTimersManager(tmp_path / ".timers")


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1", "COLUMNS": "200"})
