"""Weekly/monthly period anchors and their calendar windows.

Monthly anchors look like ``2024-06``. Weekly anchors look like ``2024-W23``,
where week 1 starts on January 1 and every following week starts exactly
seven days later. This is not ISO-8601 week numbering.
"""
import re
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from metric_pulse.errors import InvalidPeriodAnchor
from metric_pulse.models import PeriodWindow

_MONTHLY = re.compile(r"^(\d{4})-(\d{2})$")
_WEEKLY = re.compile(r"^(\d{4})-W(\d{1,2})$")

# Going back from week 1 always lands on week 52, even for 53-week years.
_WRAP_WEEK = 52
_MAX_WEEK = 53


def _parse_monthly(anchor: str) -> tuple[int, int]:
    match = _MONTHLY.match(anchor or "")
    if not match:
        raise InvalidPeriodAnchor(f"Monthly anchor must look like YYYY-MM, got {anchor!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidPeriodAnchor(f"Month out of range in anchor {anchor!r}")
    return year, month


def _parse_weekly(anchor: str) -> tuple[int, int]:
    match = _WEEKLY.match(anchor or "")
    if not match:
        raise InvalidPeriodAnchor(f"Weekly anchor must look like YYYY-Www, got {anchor!r}")
    year, week = int(match.group(1)), int(match.group(2))
    if not 1 <= week <= _MAX_WEEK or year < 1:
        raise InvalidPeriodAnchor(f"Week out of range in anchor {anchor!r}")
    return year, week


def _check_kind(kind: str) -> None:
    if kind not in ("weekly", "monthly"):
        raise InvalidPeriodAnchor(f"Unknown period kind {kind!r}. Use 'weekly' or 'monthly'.")


def resolve(kind: str, anchor: str, tz: Optional[tzinfo] = None) -> PeriodWindow:
    """Return the inclusive [start, end] window for an anchor."""
    _check_kind(kind)
    if kind == "monthly":
        year, month = _parse_monthly(anchor)
        start = datetime(year, month, 1, tzinfo=tz)
        if month == 12:
            next_start = datetime(year + 1, 1, 1, tzinfo=tz)
        else:
            next_start = datetime(year, month + 1, 1, tzinfo=tz)
        return PeriodWindow(start=start, end=next_start - timedelta(microseconds=1))

    year, week = _parse_weekly(anchor)
    start = datetime(year, 1, 1, tzinfo=tz) + timedelta(days=(week - 1) * 7)
    return PeriodWindow(start=start, end=start + timedelta(days=6))


def previous(kind: str, anchor: str) -> str:
    """Return the anchor of the cycle immediately before ``anchor``."""
    _check_kind(kind)
    if kind == "monthly":
        year, month = _parse_monthly(anchor)
        if month == 1:
            return f"{year - 1:04d}-12"
        return f"{year:04d}-{month - 1:02d}"

    year, week = _parse_weekly(anchor)
    if week > 1:
        return f"{year:04d}-W{week - 1:02d}"
    return f"{year - 1:04d}-W{_WRAP_WEEK:02d}"


def anchor_for(kind: str, reference_time: datetime) -> str:
    """Return the anchor of the cycle that ``reference_time`` falls in."""
    _check_kind(kind)
    if kind == "monthly":
        return reference_time.strftime("%Y-%m")
    week = (reference_time.timetuple().tm_yday - 1) // 7 + 1
    return f"{reference_time.year:04d}-W{week:02d}"


def weeks_in_period(kind: str) -> int:
    """Divisor used to turn a post count into a weekly cadence."""
    _check_kind(kind)
    return 1 if kind == "weekly" else 4
