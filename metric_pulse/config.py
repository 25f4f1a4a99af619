"""Scoring coefficients, overridable through environment variables."""
import os

from pydantic import BaseModel, Field

_ENV_FIELDS = {
    "engagement_saturation": "METRIC_PULSE_ENGAGEMENT_SATURATION",
    "growth_per_follower": "METRIC_PULSE_GROWTH_PER_FOLLOWER",
    "reach_per_quality_point": "METRIC_PULSE_REACH_PER_QUALITY_POINT",
    "points_per_weekly_post": "METRIC_PULSE_POINTS_PER_WEEKLY_POST",
}


class ScoringConfig(BaseModel):
    # Engagement rate (percent) at which the engagement component saturates.
    engagement_saturation: float = Field(10.0, gt=0)
    growth_per_follower: float = Field(0.05, ge=0)
    reach_per_quality_point: float = Field(2000.0, gt=0)
    points_per_weekly_post: float = Field(3.33, ge=0)


def load_scoring_config() -> ScoringConfig:
    """Build a ScoringConfig from METRIC_PULSE_* variables, falling back to defaults."""
    overrides = {}
    for name, env_var in _ENV_FIELDS.items():
        raw = os.getenv(env_var)
        if raw:
            overrides[name] = float(raw)
    return ScoringConfig(**overrides)
