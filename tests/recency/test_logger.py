from __future__ import annotations

import json

import pytest
import structlog

from recency.cache import RecencyCache
from recency.logger import configure_logging, get_logger
from recency.playground import Playground


# ---- 1) Library use without configure_logging() stays quiet ----
def test_unconfigured_cache_writes_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    structlog.reset_defaults()
    cache: RecencyCache[int, str] = RecencyCache(1)
    cache.set(1, "a")
    cache.set(2, "b")
    cache.clear()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_unconfigured_reset_writes_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    structlog.reset_defaults()
    pg = Playground(2, [(1, "a")])
    pg.reset()
    assert not hasattr(pg, "log")
    assert capsys.readouterr().out == ""


def test_unconfigured_warning_goes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    structlog.reset_defaults()
    get_logger("cache").warning("cache.odd", key=1)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cache.odd" in captured.err


# ---- 2) Configured JSON output ----
def test_json_logging(capsys: pytest.CaptureFixture[str]) -> None:
    run_id = configure_logging("DEBUG", json=True)
    cache: RecencyCache[int, str] = RecencyCache(1, [(1, "a"), (2, "b")])
    assert cache.entries() == [(2, "b")]

    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
    evict = next(line for line in lines if line["event"] == "cache.evict")
    assert evict["key"] == 1
    assert evict["logger"] == "cache"
    assert evict["level"] == "debug"
    assert evict["run_id"] == run_id


def test_level_filter(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("WARNING", json=True)
    RecencyCache(1, [(1, "a"), (2, "b")]).clear()
    assert capsys.readouterr().err == ""
