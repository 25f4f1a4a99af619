from datetime import datetime, timedelta, timezone

import pytest

from metric_pulse.analyzers.records import filter_records, parse_category, resolve_category
from metric_pulse.errors import UnsupportedCategory
from metric_pulse.models import Category, MetricRecord
from metric_pulse.utils.periods import resolve


def _record(id, published_at, **kw):
    return MetricRecord(id=id, published_at=published_at, **kw)

JUNE = resolve("monthly", "2024-06")

RECORDS = [
    _record("first", datetime(2024, 6, 1, 0, 0), category="feed"),
    _record("last", datetime(2024, 6, 30, 23, 59), category="reel"),
    _record("july", datetime(2024, 7, 1, 0, 0), category="feed"),
    _record("may", datetime(2024, 5, 31, 23, 59), category="feed"),
    _record("linked", datetime(2024, 6, 10), post_id="p1", category="feed"),
]


def test_month_boundaries_are_inclusive():
    ids = [r.id for r in filter_records(RECORDS, JUNE)]
    assert ids == ["first", "last", "linked"]

def test_category_filter_on_manual_records():
    ids = [r.id for r in filter_records(RECORDS, JUNE, "reel")]
    assert ids == ["last"]

def test_linked_record_uses_post_type_not_own_category():
    ids = [r.id for r in filter_records(RECORDS, JUNE, Category.STORY, post_types={"p1": "story"})]
    assert ids == ["linked"]
    ids = [r.id for r in filter_records(RECORDS, JUNE, "feed", post_types={"p1": "story"})]
    assert ids == ["first"]

def test_linked_record_without_lookup_never_matches_category():
    ids = [r.id for r in filter_records(RECORDS, JUNE, "feed")]
    assert ids == ["first"]

def test_resolve_category():
    manual = _record("m", datetime(2024, 6, 1), category="story")
    linked = _record("l", datetime(2024, 6, 1), post_id="p9")
    assert resolve_category(manual) == Category.STORY
    assert resolve_category(linked) is None
    assert resolve_category(linked, {"p9": Category.REEL}) == Category.REEL

def test_unsupported_category_raises():
    with pytest.raises(UnsupportedCategory):
        filter_records(RECORDS, JUNE, "carousel")
    with pytest.raises(UnsupportedCategory):
        parse_category("video")

def test_weekly_window_end_is_sixth_day_midnight():
    week = resolve("weekly", "2024-W01")
    records = [
        _record("a", datetime(2024, 1, 7, 0, 0)),
        _record("b", datetime(2024, 1, 7, 0, 1)),
    ]
    assert [r.id for r in filter_records(records, week)] == ["a"]

def test_aware_timestamps_against_naive_window():
    records = [_record("utc", datetime(2024, 6, 30, 23, 0, tzinfo=timezone(timedelta(hours=-2))))]
    # 2024-07-01 01:00 UTC falls outside June
    assert filter_records(records, JUNE) == []

def test_naive_timestamps_against_aware_window():
    window = resolve("monthly", "2024-06", tz=timezone.utc)
    records = [_record("naive", datetime(2024, 6, 15))]
    assert len(filter_records(records, window)) == 1

def test_filter_does_not_mutate_input():
    before = list(RECORDS)
    filter_records(RECORDS, JUNE, "feed")
    assert RECORDS == before
