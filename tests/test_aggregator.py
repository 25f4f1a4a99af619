from datetime import datetime

import pytest

from metric_pulse.analyzers.aggregator import aggregate, compute_deltas, percent_change
from metric_pulse.models import MetricRecord, PeriodAggregate

RECORDS = [
    MetricRecord(id="1", published_at=datetime(2024, 6, 1), likes=10, comments=2, shares=1, reach=100, follower_change=5),
    MetricRecord(id="2", published_at=datetime(2024, 6, 2), likes=20, comments=3, shares=4, reach=300, follower_change=-2),
]


def test_empty_input_gives_zero_aggregate():
    totals = aggregate([])
    assert (totals.total_likes, totals.total_comments, totals.total_shares,
            totals.total_reach, totals.total_follower_change, totals.total_posts) == (0, 0, 0, 0, 0, 0)
    assert totals.engagement_rate is None
    assert totals.avg_reach == 0.0

def test_sums_every_field():
    totals = aggregate(RECORDS)
    assert totals.total_likes == 30
    assert totals.total_comments == 5
    assert totals.total_shares == 5
    assert totals.total_reach == 400
    assert totals.total_follower_change == 3
    assert totals.total_posts == 2
    assert totals.total_interactions == 40
    assert totals.engagement_rate == pytest.approx(0.1)
    assert totals.avg_reach == 200

def test_percent_change_zero_baseline():
    assert percent_change(0, 0) == 0
    assert percent_change(5, 0) == 100
    assert percent_change(-5, 0) == 0

def test_percent_change_ratio():
    assert percent_change(150, 100) == 50
    assert percent_change(50, 100) == -50

def test_deltas_cover_each_metric():
    current = aggregate(RECORDS)
    previous = PeriodAggregate(total_likes=15, total_comments=5, total_shares=0,
                               total_reach=200, total_follower_change=3, total_posts=1,
                               reached_interactions=20)
    deltas = compute_deltas(current, previous)
    assert deltas.likes == 100
    assert deltas.comments == 0
    assert deltas.shares == 100
    assert deltas.reach == 100
    assert deltas.follower_change == 0
    assert deltas.posts == 100
    # 10% now vs 10% before
    assert deltas.engagement_rate == pytest.approx(0)

def test_engagement_rate_delta_unavailable_without_reach():
    deltas = compute_deltas(aggregate(RECORDS), PeriodAggregate())
    assert deltas.engagement_rate is None

def test_engagement_rate_ignores_posts_without_reach():
    manual = MetricRecord(id="3", published_at=datetime(2024, 6, 3), likes=500, reach=0)
    totals = aggregate(RECORDS + [manual])
    assert totals.total_likes == 530
    assert totals.total_interactions == 540
    assert totals.reached_interactions == 40
    assert totals.engagement_rate == pytest.approx(0.1)
