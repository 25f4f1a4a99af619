"""Follower growth projection: a realistic compounded model against the user's target."""
import math
import re
from datetime import date, timedelta
from typing import Optional

from metric_pulse.errors import InvalidSimulationInput
from metric_pulse.models import (
    GrowthRateComparison,
    GrowthSimulationResult,
    PostsPerWeek,
    SimulationInput,
    TrajectoryPoint,
)

BASE_MONTHLY_RATE = 0.02
QUALITY_MULTIPLIERS = {"low": 0.7, "medium": 1.0, "high": 1.5}
STRATEGY_MULTIPLIER = 1.2
BUDGET_MULTIPLIER = 1.3
WEEKS_PER_MONTH = 4
DAYS_PER_MONTH = 30

HIGH_FEASIBILITY = 0.8
MEDIUM_FEASIBILITY = 0.5

# Share of the weekly posting budget per post type, with a floor per type.
_POST_MIX = {"feed": (0.6, 1), "reel": (0.2, 0), "story": (0.2, 1)}

_PLAN_PERIOD = re.compile(r"^\s*(\d+)\s*(m|mo|month|months)?\s*$", re.IGNORECASE)


def _round(value: float) -> int:
    # Half-up, so 2.5 -> 3 like the dashboard charts expect.
    return math.floor(value + 0.5)


def parse_plan_period(text: str) -> int:
    """Parse '3', '3m' or '3 months' into a number of months."""
    match = _PLAN_PERIOD.match(text or "")
    if not match:
        raise InvalidSimulationInput(f"Unrecognised plan period {text!r}")
    months = int(match.group(1))
    if months <= 0:
        raise InvalidSimulationInput("Plan period must be at least one month")
    return months


def monthly_growth_rate(content_quality: str, strategy_count: int, budget: float) -> float:
    if content_quality not in QUALITY_MULTIPLIERS:
        raise InvalidSimulationInput(
            f"content_quality must be one of {sorted(QUALITY_MULTIPLIERS)}, got {content_quality!r}"
        )
    rate = BASE_MONTHLY_RATE * QUALITY_MULTIPLIERS[content_quality]
    if strategy_count > 0:
        rate *= STRATEGY_MULTIPLIER
    if budget > 0:
        rate *= BUDGET_MULTIPLIER
    return rate


def classify_feasibility(ratio: float) -> str:
    if ratio >= HIGH_FEASIBILITY:
        return "high"
    if ratio >= MEDIUM_FEASIBILITY:
        return "medium"
    return "low"


def _validate(params: SimulationInput) -> None:
    for name in ("current_followers", "target_gain", "period_months"):
        if getattr(params, name) <= 0:
            raise InvalidSimulationInput(f"{name} must be positive, got {getattr(params, name)}")
    if params.strategy_count < 0:
        raise InvalidSimulationInput("strategy_count must not be negative")
    if params.budget < 0:
        raise InvalidSimulationInput("budget must not be negative")
    if params.avg_posts_per_week < 0:
        raise InvalidSimulationInput("avg_posts_per_week must not be negative")


def recommend_posts_per_week(avg_posts_per_week: int) -> PostsPerWeek:
    mix = {
        post_type: max(floor, _round(avg_posts_per_week * share))
        for post_type, (share, floor) in _POST_MIX.items()
    }
    return PostsPerWeek(**mix)


def simulate(params: SimulationInput, reference_date: Optional[date] = None) -> GrowthSimulationResult:
    _validate(params)
    current = params.current_followers
    gain = params.target_gain
    months = params.period_months
    weeks = months * WEEKS_PER_MONTH

    rate = monthly_growth_rate(params.content_quality, params.strategy_count, params.budget)
    realistic_final = _round(current * (1 + rate) ** months)
    user_target_final = current + gain
    ratio = realistic_final / user_target_final

    trajectory = [
        TrajectoryPoint(
            week=week,
            realistic=_round(current * (1 + rate) ** (week / WEEKS_PER_MONTH)),
            user_target=_round(current + gain * week / weeks),
        )
        for week in range(1, weeks + 1)
    ]

    return GrowthSimulationResult(
        monthly_rate=rate,
        realistic_final=realistic_final,
        user_target_final=user_target_final,
        weekly_target=_round(gain / weeks),
        monthly_target=_round(gain / months),
        feasibility_ratio=ratio,
        feasibility=classify_feasibility(ratio),
        is_realistic=ratio >= HIGH_FEASIBILITY,
        trajectory=trajectory,
        growth_rate_comparison=GrowthRateComparison(
            realistic=round(rate * 100, 2),
            user_target=round(gain / current / months * 100, 2),
        ),
        recommended_posts_per_week=recommend_posts_per_week(params.avg_posts_per_week),
        target_date=(
            reference_date + timedelta(days=months * DAYS_PER_MONTH)
            if reference_date is not None
            else None
        ),
    )
