"""Period and category selection over raw metric records."""
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional, Union

from metric_pulse.errors import UnsupportedCategory
from metric_pulse.models import Category, MetricRecord, PeriodWindow

PostTypeLookup = Mapping[str, Union[Category, str]]


def parse_category(value: Union[Category, str, None]) -> Optional[Category]:
    """Validate a caller-supplied category filter."""
    if value is None or isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise UnsupportedCategory(f"Unsupported category {value!r}. Use one of: {allowed}.") from None


def resolve_category(record: MetricRecord, post_types: Optional[PostTypeLookup] = None) -> Optional[Category]:
    """Manual entries carry their own category; linked records take the post's type."""
    if record.post_id is None:
        return record.category
    if not post_types or record.post_id not in post_types:
        return None
    value = post_types[record.post_id]
    try:
        return Category(value)
    except ValueError:
        return None


def align_timestamp(ts: datetime, reference: datetime) -> datetime:
    """Give ``ts`` the same naive or aware form as ``reference`` so the two compare.

    Aware timestamps compared with a naive reference are read as UTC; naive
    timestamps compared with an aware reference take its zone.
    """
    tz = reference.tzinfo
    if tz is None and ts.tzinfo is not None:
        return ts.astimezone(timezone.utc).replace(tzinfo=None)
    if tz is not None and ts.tzinfo is None:
        return ts.replace(tzinfo=tz)
    return ts


def in_window(record: MetricRecord, window: PeriodWindow) -> bool:
    ts = align_timestamp(record.published_at, window.start)
    return window.start <= ts <= window.end


def filter_records(
    records: Iterable[MetricRecord],
    window: PeriodWindow,
    category: Union[Category, str, None] = None,
    post_types: Optional[PostTypeLookup] = None,
) -> list[MetricRecord]:
    """Records published inside ``window`` (both ends inclusive), optionally of one category."""
    wanted = parse_category(category)
    selected = []
    for record in records:
        if not in_window(record, window):
            continue
        if wanted is not None and resolve_category(record, post_types) != wanted:
            continue
        selected.append(record)
    return selected
