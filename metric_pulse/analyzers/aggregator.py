from typing import Iterable, Optional

from metric_pulse.models import MetricRecord, PeriodAggregate, PeriodDeltas, PeriodWindow


def aggregate(records: Iterable[MetricRecord], window: Optional[PeriodWindow] = None) -> PeriodAggregate:
    """Sum the numeric fields of ``records``. Empty input gives an all-zero aggregate."""
    totals = PeriodAggregate(window=window)
    for r in records:
        totals.total_likes += r.likes
        totals.total_comments += r.comments
        totals.total_shares += r.shares
        totals.total_reach += r.reach
        if r.reach > 0:
            totals.reached_interactions += r.interactions
        totals.total_follower_change += r.follower_change
        totals.total_posts += 1
    return totals


def percent_change(current: float, previous: float) -> float:
    """Percent change from ``previous`` to ``current``.

    A zero baseline yields 100 when ``current`` is positive and 0 otherwise,
    so the result is always finite.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def compute_deltas(current: PeriodAggregate, previous: PeriodAggregate) -> PeriodDeltas:
    rate_now, rate_before = current.engagement_rate, previous.engagement_rate
    return PeriodDeltas(
        likes=percent_change(current.total_likes, previous.total_likes),
        comments=percent_change(current.total_comments, previous.total_comments),
        shares=percent_change(current.total_shares, previous.total_shares),
        reach=percent_change(current.total_reach, previous.total_reach),
        follower_change=percent_change(current.total_follower_change, previous.total_follower_change),
        posts=percent_change(current.total_posts, previous.total_posts),
        engagement_rate=(
            percent_change(rate_now, rate_before)
            if rate_now is not None and rate_before is not None
            else None
        ),
    )
