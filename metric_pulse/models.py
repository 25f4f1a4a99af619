from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

PeriodKind = Literal["weekly", "monthly"]
ContentQuality = Literal["low", "medium", "high"]
Rating = Literal["S", "A", "B", "C", "D", "F"]
Feasibility = Literal["high", "medium", "low"]


class Category(str, Enum):
    FEED = "feed"
    REEL = "reel"
    STORY = "story"


# ── Audience / reach-source distributions ─────────────────────────────────────
# Leaves are independent percentages; None means the field was not entered.

class GenderSplit(BaseModel):
    model_config = ConfigDict(frozen=True)

    male: Optional[float] = None
    female: Optional[float] = None
    other: Optional[float] = None


class AgeSplit(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    age_13_17: Optional[float] = Field(None, alias="13-17")
    age_18_24: Optional[float] = Field(None, alias="18-24")
    age_25_34: Optional[float] = Field(None, alias="25-34")
    age_35_44: Optional[float] = Field(None, alias="35-44")
    age_45_54: Optional[float] = Field(None, alias="45-54")
    age_55_64: Optional[float] = Field(None, alias="55-64")
    age_65_plus: Optional[float] = Field(None, alias="65+")


class AudienceDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    gender: GenderSplit = GenderSplit()
    age: AgeSplit = AgeSplit()


class SourceSplit(BaseModel):
    model_config = ConfigDict(frozen=True)

    posts: Optional[float] = None
    profile: Optional[float] = None
    explore: Optional[float] = None
    search: Optional[float] = None
    other: Optional[float] = None


class FollowerSplit(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    followers: Optional[float] = None
    non_followers: Optional[float] = Field(None, alias="nonFollowers")


class ReachSourceDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    sources: SourceSplit = SourceSplit()
    followers: FollowerSplit = FollowerSplit()


# ── Raw input ─────────────────────────────────────────────────────────────────

class MetricRecord(BaseModel):
    """One measured post, or a manually entered data point when post_id is None."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    owner_id: str = Field("", alias="ownerId")
    post_id: Optional[str] = Field(None, alias="postId")
    likes: int = Field(0, ge=0)
    comments: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)
    reach: int = Field(0, ge=0)
    follower_change: int = Field(0, alias="followerChange")
    published_at: datetime = Field(alias="publishedAt")
    published_time_of_day: Optional[str] = Field(None, alias="publishedTimeOfDay")
    hashtags: list[str] = []
    category: Optional[Category] = None
    audience: Optional[AudienceDistribution] = None
    reach_source: Optional[ReachSourceDistribution] = Field(None, alias="reachSource")

    @field_validator("published_time_of_day", mode="before")
    @classmethod
    def _check_time_of_day(cls, value):
        if value is None or value == "":
            return None
        hour, sep, minute = str(value).partition(":")
        if (not sep or not hour.isdigit() or not minute.isdigit() or not 0 <= int(hour) <= 23
                or not 0 <= int(minute) <= 59):
            raise ValueError(f"publishedTimeOfDay must be HH:MM, got {value!r}")
        return value

    @field_validator("hashtags", mode="before")
    @classmethod
    def _split_hashtags(cls, value):
        # Older documents store hashtags as one comma-separated string.
        if value is None:
            return []
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value

    @property
    def interactions(self) -> int:
        return self.likes + self.comments + self.shares

    @property
    def engagement_rate(self) -> Optional[float]:
        """(likes+comments+shares)/reach, or None when reach is zero."""
        if self.reach <= 0:
            return None
        return self.interactions / self.reach

    @property
    def hour_of_day(self) -> Optional[int]:
        if self.published_time_of_day is None:
            return None
        return int(self.published_time_of_day.split(":")[0])


# ── Derived report parts ──────────────────────────────────────────────────────

class PeriodWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime


class PeriodAggregate(BaseModel):
    total_likes: int = 0
    total_comments: int = 0
    total_shares: int = 0
    total_reach: int = 0
    total_follower_change: int = 0
    total_posts: int = 0
    # Interactions of the records whose reach was entered; the engagement
    # rate is taken over these only.
    reached_interactions: int = 0
    window: Optional[PeriodWindow] = None

    @computed_field
    @property
    def total_interactions(self) -> int:
        return self.total_likes + self.total_comments + self.total_shares

    @computed_field
    @property
    def engagement_rate(self) -> Optional[float]:
        if self.total_reach <= 0:
            return None
        return self.reached_interactions / self.total_reach

    @computed_field
    @property
    def avg_reach(self) -> float:
        if self.total_posts == 0:
            return 0.0
        return self.total_reach / self.total_posts


class PeriodDeltas(BaseModel):
    likes: float = 0.0
    comments: float = 0.0
    shares: float = 0.0
    reach: float = 0.0
    follower_change: float = 0.0
    posts: float = 0.0
    engagement_rate: Optional[float] = None


class ScoreBreakdown(BaseModel):
    engagement: int = Field(0, ge=0, le=50)
    growth: int = Field(0, ge=0, le=25)
    quality: int = Field(0, ge=0, le=15)
    consistency: int = Field(0, ge=0, le=10)

    @property
    def total(self) -> int:
        return self.engagement + self.growth + self.quality + self.consistency


class PerformanceScore(BaseModel):
    score: int = Field(ge=0, le=100)
    rating: Rating
    label: str
    breakdown: ScoreBreakdown
    engagement_rate: Optional[float] = None     # percent, None when reach is missing
    engagement_rate_needs_reach_input: bool = False


class HashtagCount(BaseModel):
    hashtag: str
    count: int


class TimeSlotStats(BaseModel):
    key: str
    label: str
    start_hour: int
    end_hour: int
    posts: int = 0
    avg_engagement: float = 0.0


class PostTypeStats(BaseModel):
    type: Category
    count: int = 0
    percentage: float = 0.0


class Breakdowns(BaseModel):
    hashtags: list[HashtagCount] = []
    time_slots: list[TimeSlotStats] = []
    best_time_slot: Optional[TimeSlotStats] = None
    post_types: list[PostTypeStats] = []


class AudienceReachAverages(BaseModel):
    audience: AudienceDistribution
    reach_source: ReachSourceDistribution
    audience_samples: int = 0
    reach_source_samples: int = 0


class PeriodReport(BaseModel):
    kind: PeriodKind
    anchor: str
    previous_anchor: str
    category: Optional[Category] = None
    aggregate: PeriodAggregate
    previous_aggregate: PeriodAggregate
    deltas: PeriodDeltas
    score: PerformanceScore
    breakdowns: Breakdowns
    audience_reach_averages: AudienceReachAverages


# ── Growth simulation ─────────────────────────────────────────────────────────

class SimulationInput(BaseModel):
    current_followers: int
    target_gain: int
    period_months: int
    strategy_count: int = 0
    content_quality: ContentQuality = "medium"
    budget: float = 0
    avg_posts_per_week: int = 5


class TrajectoryPoint(BaseModel):
    week: int
    realistic: int
    user_target: int


class GrowthRateComparison(BaseModel):
    realistic: float      # percent per month
    user_target: float


class PostsPerWeek(BaseModel):
    feed: int
    reel: int
    story: int


class GrowthSimulationResult(BaseModel):
    monthly_rate: float
    realistic_final: int
    user_target_final: int
    weekly_target: int
    monthly_target: int
    feasibility_ratio: float
    feasibility: Feasibility
    is_realistic: bool
    trajectory: list[TrajectoryPoint]
    growth_rate_comparison: GrowthRateComparison
    recommended_posts_per_week: PostsPerWeek
    target_date: Optional[date] = None
