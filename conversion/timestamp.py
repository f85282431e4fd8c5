"""Capture-time resolution for actor reports.

A report only carries ``sec_mark`` (milliseconds within the current UTC
minute), which is ambiguous across minute boundaries. When the path history
carries a fully specified UTC time for the same instant, that time is used
directly. Otherwise the minute is taken from the local clock, which assumes
the sender and receiver clocks agree to within 30 seconds.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable, Optional

from contracts import ActorReport, ResolvedTime, TimeResolutionMode, UtcTime
from exceptions import TimestampError
from log_config.logger import get_logger, log_throttled

if TYPE_CHECKING:
    from loguru import Logger

logger = get_logger(__name__)

Clock = Callable[[], int]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NS_PER_MS = 1_000_000
NS_PER_MINUTE = 60 * 1_000 * NS_PER_MS
MAX_SEC_MARK_MS = 60_999  # leap second
FALLBACK_WARNING_PERIOD_S = 5.0


def usable_utc_time(report: ActorReport) -> Optional[UtcTime]:
    """Return the path history UTC time if it describes the report instant."""
    history = report.path_history
    if history is None or history.initial_position is None:
        return None
    utc = history.initial_position.utc_time
    if utc is None or not utc.is_complete():
        return None
    if utc.second_ms != report.sec_mark:
        return None
    return utc


def _utc_to_ns(utc: UtcTime) -> int:
    if not (0 <= utc.hour <= 23 and 0 <= utc.minute <= 59):
        raise TimestampError(f"Invalid UTC time of day {utc.hour:02d}:{utc.minute:02d}")
    try:
        day = datetime(utc.year, utc.month, utc.day, tzinfo=timezone.utc)
        stamp = day + timedelta(hours=utc.hour, minutes=utc.minute, milliseconds=utc.second_ms)
    except (ValueError, OverflowError) as e:
        raise TimestampError(f"Invalid UTC date in path history: {e}")
    return (stamp - EPOCH) // timedelta(microseconds=1) * 1_000


def _clock_minute_to_ns(now_ns: int, sec_mark: int) -> int:
    start_of_minute = now_ns - now_ns % NS_PER_MINUTE
    return start_of_minute + sec_mark * NS_PER_MS


def resolve_timestamp(
    report: ActorReport,
    clock: Clock = time.time_ns,
    log: Optional[Logger] = None,
    warning_period_s: float = FALLBACK_WARNING_PERIOD_S,
) -> ResolvedTime:
    """Determine the absolute capture time of ``report``.

    Args:
        report: Report to timestamp
        clock: Wall clock returning nanoseconds since the Unix epoch; only
            read on the fallback branch
        log: Logger for diagnostics (defaults to this module's logger)
        warning_period_s: Minimum seconds between fallback warnings

    Returns:
        ResolvedTime with the branch that produced it

    Raises:
        TimestampError: If the capture time is not representable
    """
    log = log or logger
    if not 0 <= report.sec_mark <= MAX_SEC_MARK_MS:
        raise TimestampError(f"sec_mark {report.sec_mark} outside 0..{MAX_SEC_MARK_MS}", report_id=report.id)

    utc = usable_utc_time(report)
    if utc is not None:
        log.debug("Using UTC time of path history; UTC is fully specified and matches sec_mark")
        try:
            stamp_ns = _utc_to_ns(utc)
        except TimestampError as e:
            e.report_id = report.id
            raise
        mode = TimeResolutionMode.UTC_PATH_HISTORY
    else:
        log_throttled(
            "timestamp_fallback",
            warning_period_s,
            "Path history UTC time unusable for sec_mark; assuming the local clock is synchronized "
            "with the sender to determine the minute. This is NOT ADVISED.",
            log=log,
        )
        stamp_ns = _clock_minute_to_ns(int(clock()), report.sec_mark)
        mode = TimeResolutionMode.LOCAL_CLOCK_FALLBACK

    if stamp_ns < 0:
        raise TimestampError(f"Resolved time {stamp_ns} ns precedes the epoch", report_id=report.id)
    return ResolvedTime(stamp_ns=stamp_ns, mode=mode)
