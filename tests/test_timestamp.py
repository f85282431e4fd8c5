"""Tests for report capture-time resolution."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from loguru import logger

from contracts import (
    ActorReport,
    FullPositionVector,
    GeodeticPosition,
    PathHistory,
    PersonalDeviceUserType,
    TimeResolutionMode,
    UtcTime,
)
from conversion.timestamp import resolve_timestamp, usable_utc_time
from exceptions import TimestampError
from log_config.logger import reset_throttle


def _ns(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp()) * 1_000_000_000


def _report(sec_mark: int, utc: UtcTime = None) -> ActorReport:
    history = None
    if utc is not None:
        history = PathHistory(initial_position=FullPositionVector(utc_time=utc))
    return ActorReport(
        id=b"\x01",
        position=GeodeticPosition(38.95, -77.14, 0.0),
        heading_deg=0.0,
        speed=1.0,
        actor_type=PersonalDeviceUserType.PEDESTRIAN,
        sec_mark=sec_mark,
        path_history=history,
    )


FULL_UTC = UtcTime(year=2023, month=5, day=4, hour=12, minute=34, second_ms=56789)


@pytest.mark.parametrize(
    "clock_ns",
    [0, _ns(2023, 5, 4, 12, 34, 59), _ns(2030, 1, 1, 0, 0, 0), _ns(1999, 12, 31, 23, 59, 59)],
)
def test_utc_branch_ignores_local_clock(clock_ns: int) -> None:
    resolved = resolve_timestamp(_report(56789, FULL_UTC), clock=lambda: clock_ns)

    assert resolved.mode is TimeResolutionMode.UTC_PATH_HISTORY
    assert not resolved.degraded
    assert resolved.stamp_ns == _ns(2023, 5, 4, 12, 34, 0) + 56789 * 1_000_000


def test_utc_branch_does_not_read_clock() -> None:
    def clock() -> int:
        raise AssertionError("clock read on UTC branch")

    resolve_timestamp(_report(56789, FULL_UTC), clock=clock)


def test_fallback_uses_start_of_clock_minute() -> None:
    now = _ns(2023, 5, 4, 12, 34, 45) + 123_456_789
    resolved = resolve_timestamp(_report(59999), clock=lambda: now)

    assert resolved.mode is TimeResolutionMode.LOCAL_CLOCK_FALLBACK
    assert resolved.degraded
    assert resolved.stamp_ns == _ns(2023, 5, 4, 12, 34, 0) + 59_999_000_000


def test_fallback_at_minute_start() -> None:
    now = _ns(2023, 5, 4, 12, 35, 0)
    resolved = resolve_timestamp(_report(0), clock=lambda: now)
    assert resolved.stamp_ns == now


def test_second_mismatch_falls_back() -> None:
    now = _ns(2024, 2, 29, 8, 0, 10)
    resolved = resolve_timestamp(_report(1000, FULL_UTC), clock=lambda: now)

    assert resolved.mode is TimeResolutionMode.LOCAL_CLOCK_FALLBACK
    assert resolved.stamp_ns == _ns(2024, 2, 29, 8, 0, 1)


@pytest.mark.parametrize("missing", ["year", "month", "day", "hour", "minute", "second_ms"])
def test_incomplete_utc_falls_back(missing: str) -> None:
    fields = dict(year=2023, month=5, day=4, hour=12, minute=34, second_ms=56789)
    fields[missing] = None
    report = _report(56789, UtcTime(**fields))

    assert usable_utc_time(report) is None
    resolved = resolve_timestamp(report, clock=lambda: _ns(2023, 5, 4, 12, 0, 0))
    assert resolved.mode is TimeResolutionMode.LOCAL_CLOCK_FALLBACK


def test_path_history_without_initial_position_falls_back() -> None:
    report = ActorReport(
        id=b"",
        position=GeodeticPosition(0.0, 0.0),
        heading_deg=0.0,
        speed=0.0,
        actor_type=PersonalDeviceUserType.UNAVAILABLE,
        sec_mark=10,
        path_history=PathHistory(),
    )
    resolved = resolve_timestamp(report, clock=lambda: 0)
    assert resolved.stamp_ns == 10_000_000


def test_invalid_calendar_date_raises() -> None:
    utc = UtcTime(year=2023, month=2, day=30, hour=0, minute=0, second_ms=500)
    with pytest.raises(TimestampError):
        resolve_timestamp(_report(500, utc), clock=lambda: 0)


def test_invalid_time_of_day_raises() -> None:
    utc = UtcTime(year=2023, month=2, day=1, hour=24, minute=0, second_ms=500)
    with pytest.raises(TimestampError):
        resolve_timestamp(_report(500, utc), clock=lambda: 0)


def test_pre_epoch_utc_raises() -> None:
    utc = UtcTime(year=1969, month=12, day=31, hour=23, minute=59, second_ms=0)
    with pytest.raises(TimestampError):
        resolve_timestamp(_report(0, utc), clock=lambda: 0)


@pytest.mark.parametrize("sec_mark", [-1, 61000, 65535])
def test_out_of_range_sec_mark_raises(sec_mark: int) -> None:
    with pytest.raises(TimestampError) as excinfo:
        resolve_timestamp(_report(sec_mark), clock=lambda: _ns(2023, 1, 1, 0, 0, 0))
    assert excinfo.value.report_id == b"\x01"


def test_fallback_warning_is_throttled() -> None:
    reset_throttle()
    messages = []
    sink_id = logger.add(messages.append, level="WARNING")
    try:
        for _ in range(3):
            resolve_timestamp(_report(100), clock=lambda: 0, warning_period_s=60.0)
    finally:
        logger.remove(sink_id)
        reset_throttle()

    assert len(messages) == 1
    assert "NOT ADVISED" in messages[0]
