from datetime import datetime

import pytest

from metric_pulse.analyzers.breakdown import (
    analyze_breakdowns,
    best_time_slot,
    post_type_distribution,
    rank_hashtags,
    time_slot_profile,
)
from metric_pulse.models import Category, MetricRecord

WHEN = datetime(2024, 6, 1)


def _record(id, **kw):
    return MetricRecord(id=id, published_at=WHEN, **kw)


def test_hashtag_ranking_is_stable():
    records = [
        _record("1", hashtags=["a", "b"]),
        _record("2", hashtags=["a", "c"]),
        _record("3", hashtags=["b", "a"]),
    ]
    ranked = [h.hashtag for h in rank_hashtags(records)]
    assert ranked == ["a", "b", "c"]

def test_hashtag_ties_keep_first_seen_order():
    records = [_record("1", hashtags=["z", "y"]), _record("2", hashtags=["x"])]
    assert [h.hashtag for h in rank_hashtags(records)] == ["z", "y", "x"]

def test_hashtag_ranking_keeps_top_five():
    records = [_record("1", hashtags=[f"t{i}" for i in range(8)])]
    assert len(rank_hashtags(records)) == 5

def test_comma_separated_hashtags_are_split():
    record = _record("1", hashtags="#food, #travel,,#food")
    assert record.hashtags == ["#food", "#travel", "#food"]

def test_late_night_post_only_in_late_night_slot():
    profile = time_slot_profile([_record("1", published_time_of_day="22:30", likes=10)])
    counts = {slot.key: slot.posts for slot in profile}
    assert counts == {"early_morning": 0, "morning": 0, "afternoon": 0,
                      "evening": 0, "night": 0, "late_night": 1}

def test_posts_without_time_are_excluded():
    profile = time_slot_profile([_record("1", likes=10), _record("2", published_time_of_day="")])
    assert all(slot.posts == 0 for slot in profile)
    assert best_time_slot(profile) is None

def test_slot_mean_engagement_and_best_slot():
    records = [
        _record("1", published_time_of_day="07:15", likes=10, comments=2),
        _record("2", published_time_of_day="08:45", likes=4, shares=4),
        _record("3", published_time_of_day="13:00", likes=30),
        _record("4", published_time_of_day="03:00", likes=1),
    ]
    profile = time_slot_profile(records)
    by_key = {slot.key: slot for slot in profile}
    assert by_key["early_morning"].posts == 2
    assert by_key["early_morning"].avg_engagement == 10
    assert by_key["late_night"].posts == 1
    assert best_time_slot(profile).key == "afternoon"

def test_best_slot_ignores_empty_buckets():
    profile = time_slot_profile([_record("1", published_time_of_day="19:00")])
    assert best_time_slot(profile).key == "night"

def test_invalid_time_of_day_rejected():
    with pytest.raises(ValueError):
        _record("1", published_time_of_day="25:00")

@pytest.mark.parametrize("value", ["07:99", "07:60", "7", "ab:00"])
def test_malformed_time_of_day_rejected(value):
    with pytest.raises(ValueError):
        _record("1", published_time_of_day=value)

def test_slot_boundaries_follow_start_hour():
    records = [
        _record("1", published_time_of_day="05:59"),
        _record("2", published_time_of_day="06:00"),
        _record("3", published_time_of_day="20:59"),
        _record("4", published_time_of_day="21:00"),
    ]
    counts = {slot.key: slot.posts for slot in time_slot_profile(records)}
    assert counts == {"early_morning": 1, "morning": 0, "afternoon": 0,
                      "evening": 0, "night": 1, "late_night": 2}

def test_post_type_distribution():
    records = [
        _record("1", category="feed"),
        _record("2", category="feed"),
        _record("3", category="reel"),
        _record("4", post_id="p1", category="feed"),
    ]
    stats = {s.type: s for s in post_type_distribution(records, {"p1": "story"})}
    assert stats[Category.FEED].count == 2
    assert stats[Category.REEL].count == 1
    assert stats[Category.STORY].count == 1
    assert stats[Category.FEED].percentage == 50
    assert stats[Category.STORY].percentage == 25

def test_post_type_distribution_empty():
    stats = post_type_distribution([])
    assert [s.type for s in stats] == [Category.FEED, Category.REEL, Category.STORY]
    assert all(s.count == 0 and s.percentage == 0 for s in stats)

def test_analyze_breakdowns_bundles_all_three():
    result = analyze_breakdowns([_record("1", hashtags=["a"], published_time_of_day="10:00", category="reel")])
    assert result.hashtags[0].hashtag == "a"
    assert result.best_time_slot.key == "morning"
    assert len(result.time_slots) == 6
    assert len(result.post_types) == 3
