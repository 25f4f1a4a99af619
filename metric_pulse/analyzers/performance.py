"""Composite 0-100 performance score with a letter rating.

The score is the sum of four capped components:

- engagement (50): engagement rate over posts with reach, saturating at
  ``ScoringConfig.engagement_saturation`` percent
- growth (25): net follower gain; losses contribute nothing
- quality (15): average reach per post
- consistency (10): posts per week over the period

Each component is rounded half-up before summing so the total always equals
the sum of the breakdown.
"""
import math
from typing import Optional

from metric_pulse.config import ScoringConfig
from metric_pulse.models import PerformanceScore, PeriodAggregate, ScoreBreakdown
from metric_pulse.utils.periods import weeks_in_period

ENGAGEMENT_MAX = 50
GROWTH_MAX = 25
QUALITY_MAX = 15
CONSISTENCY_MAX = 10

# Lowest score for each rating, best first.
_RATINGS = [
    (85, "S", "Top tier"),
    (70, "A", "Excellent"),
    (55, "B", "Good"),
    (40, "C", "Average"),
    (25, "D", "Needs improvement"),
    (0, "F", "Needs major improvement"),
]


def _capped(value: float, cap: int) -> int:
    value = min(float(cap), max(0.0, value))
    return min(cap, math.floor(value + 0.5))


def rate(score: int) -> tuple[str, str]:
    """Return (rating, label) for a 0-100 score."""
    for threshold, rating, label in _RATINGS:
        if score >= threshold:
            return rating, label
    return _RATINGS[-1][1], _RATINGS[-1][2]


def score(
    aggregate: PeriodAggregate,
    avg_reach: float,
    kind: str = "monthly",
    config: Optional[ScoringConfig] = None,
) -> PerformanceScore:
    config = config or ScoringConfig()

    engagement_rate = aggregate.engagement_rate
    if engagement_rate is None:
        engagement = 0
        rate_pct = None
    else:
        rate_pct = engagement_rate * 100
        engagement = _capped(rate_pct * ENGAGEMENT_MAX / config.engagement_saturation, ENGAGEMENT_MAX)

    growth = _capped(aggregate.total_follower_change * config.growth_per_follower, GROWTH_MAX)
    quality = _capped(avg_reach / config.reach_per_quality_point, QUALITY_MAX)
    posts_per_week = aggregate.total_posts / weeks_in_period(kind)
    consistency = _capped(posts_per_week * config.points_per_weekly_post, CONSISTENCY_MAX)

    breakdown = ScoreBreakdown(engagement=engagement, growth=growth, quality=quality, consistency=consistency)
    total = breakdown.total
    rating, label = rate(total)
    return PerformanceScore(
        score=total,
        rating=rating,
        label=label,
        breakdown=breakdown,
        engagement_rate=rate_pct,
        engagement_rate_needs_reach_input=engagement_rate is None,
    )
