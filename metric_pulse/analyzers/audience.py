"""Average audience demographics and reach sources across records that carry them.

Each leaf percentage is averaged over the records where it is present. The
averages are not renormalised, so a group may not sum to 100.
"""
from typing import Iterable

from pydantic import BaseModel

from metric_pulse.models import (
    AgeSplit,
    AudienceDistribution,
    AudienceReachAverages,
    FollowerSplit,
    GenderSplit,
    MetricRecord,
    ReachSourceDistribution,
    SourceSplit,
)


def _average_leaves(model: type[BaseModel], parts: list[BaseModel]) -> BaseModel:
    averaged = {}
    for name in model.model_fields:
        values = [getattr(p, name) for p in parts if getattr(p, name) is not None]
        averaged[name] = sum(values) / len(values) if values else 0.0
    return model(**averaged)


def average_audience(distributions: list[AudienceDistribution]) -> AudienceDistribution:
    return AudienceDistribution(
        gender=_average_leaves(GenderSplit, [d.gender for d in distributions]),
        age=_average_leaves(AgeSplit, [d.age for d in distributions]),
    )


def average_reach_source(distributions: list[ReachSourceDistribution]) -> ReachSourceDistribution:
    return ReachSourceDistribution(
        sources=_average_leaves(SourceSplit, [d.sources for d in distributions]),
        followers=_average_leaves(FollowerSplit, [d.followers for d in distributions]),
    )


def average_audience_reach(records: Iterable[MetricRecord]) -> AudienceReachAverages:
    records = list(records)
    audiences = [r.audience for r in records if r.audience is not None]
    sources = [r.reach_source for r in records if r.reach_source is not None]
    return AudienceReachAverages(
        audience=average_audience(audiences),
        reach_source=average_reach_source(sources),
        audience_samples=len(audiences),
        reach_source_samples=len(sources),
    )
