from __future__ import annotations

import itertools
import logging
import sys

import pytest

from lib_log_aspect.domain.levels import LogLevel, compare, is_at_least

DEFINED = [level for level in LogLevel if level is not LogLevel.OFF]


@pytest.mark.parametrize("a, b", list(itertools.product(LogLevel, repeat=2)))
def test_is_at_least_matches_rank_order(a: LogLevel, b: LogLevel) -> None:
    assert is_at_least(a, b) is (a.rank >= b.rank)
    assert a.is_at_least(b) is (a.rank >= b.rank)


def test_extreme_orderings() -> None:
    assert is_at_least(LogLevel.FATAL, LogLevel.TRACE)
    assert not is_at_least(LogLevel.TRACE, LogLevel.FATAL)
    assert not is_at_least(LogLevel.STUB, LogLevel.OFF)


def test_stub_is_lowest_and_off_highest() -> None:
    ordered = sorted(LogLevel)
    assert ordered[0] is LogLevel.STUB
    assert ordered[-1] is LogLevel.OFF
    assert LogLevel.OFF.rank == sys.maxsize


def test_ranks_are_strictly_ordered() -> None:
    ranks = [level.rank for level in sorted(LogLevel)]
    assert ranks == sorted(set(ranks))


def test_compare_returns_sign() -> None:
    assert compare(LogLevel.INFO, LogLevel.WARN) == -1
    assert compare(LogLevel.WARN, LogLevel.INFO) == 1
    assert compare(LogLevel.ERROR, LogLevel.ERROR) == 0


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("Warn", LogLevel.WARN),
        ("warning", LogLevel.WARN),
        ("critical", LogLevel.FATAL),
        (" severe ", LogLevel.SEVERE),
        ("stub", LogLevel.STUB),
        ("off", LogLevel.OFF),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_unknown_falls_back_to_info_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="lib_log_aspect.domain.levels"):
        assert LogLevel.from_name("verbose") is LogLevel.INFO
    assert "Unknown log level: verbose" in caplog.text


@pytest.mark.parametrize("name", [None, "", "   "])
def test_from_name_blank_is_info_without_warning(name: str | None, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="lib_log_aspect.domain.levels"):
        assert LogLevel.from_name(name) is LogLevel.INFO
    assert caplog.records == []


@pytest.mark.parametrize(
    "rank, expected",
    [
        (50, LogLevel.STUB),
        (99, LogLevel.STUB),
        (100, LogLevel.TRACE),
        (349, LogLevel.INFO),
        (350, LogLevel.SUCCESS),
        (999, LogLevel.SEVERE),
        (5000, LogLevel.FATAL),
        (sys.maxsize, LogLevel.OFF),
    ],
)
def test_from_rank_rounds_down(rank: int, expected: LogLevel) -> None:
    assert LogLevel.from_rank(rank) is expected


@pytest.mark.parametrize("rank", [49, 0, -10])
def test_from_rank_below_stub_is_off(rank: int) -> None:
    assert LogLevel.from_rank(rank) is LogLevel.OFF


@pytest.mark.parametrize("rank", ["300", 300.0, True])
def test_from_rank_rejects_non_integers(rank: object) -> None:
    with pytest.raises(TypeError):
        LogLevel.from_rank(rank)  # type: ignore[arg-type]


def test_metadata_is_attached_to_every_level() -> None:
    for level in LogLevel:
        assert level.glyph
        assert level.description
        assert isinstance(level.style, str)
    assert LogLevel.ERROR.glyph == "❌"
    assert LogLevel.STUB.glyph == "🚧"
    assert LogLevel.WARN.label == "[WARN]"
    assert LogLevel.INFO.detailed_description == "INFO (value: 300): General information"


@pytest.mark.parametrize(
    "level, expected",
    [
        (LogLevel.TRACE, 5),
        (LogLevel.DEBUG, logging.DEBUG),
        (LogLevel.NOTICE, logging.INFO),
        (LogLevel.WARN, logging.WARNING),
        (LogLevel.ERROR, logging.ERROR),
        (LogLevel.FATAL, logging.CRITICAL),
    ],
)
def test_to_python_level_bridges_stdlib(level: LogLevel, expected: int) -> None:
    assert level.to_python_level() == expected


def test_comparison_with_foreign_type_is_unsupported() -> None:
    with pytest.raises(TypeError):
        _ = LogLevel.INFO < 3  # type: ignore[operator]
