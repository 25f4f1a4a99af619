"""Secondary analyses over a filtered record set: hashtags, posting time, post type."""
from collections import Counter
from typing import Iterable, Optional

from metric_pulse.analyzers.records import PostTypeLookup, resolve_category
from metric_pulse.models import (
    Breakdowns,
    Category,
    HashtagCount,
    MetricRecord,
    PostTypeStats,
    TimeSlotStats,
)
from metric_pulse.utils.patterns import hour_to_slot, time_slots

TOP_HASHTAGS = 5


def rank_hashtags(records: Iterable[MetricRecord], limit: int = TOP_HASHTAGS) -> list[HashtagCount]:
    """Most used hashtags, count descending; equal counts keep first-seen order."""
    counts: Counter = Counter()
    for r in records:
        counts.update(r.hashtags)
    # Counter keeps insertion order and sorted() is stable.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [HashtagCount(hashtag=tag, count=n) for tag, n in ranked[:limit]]


def time_slot_profile(records: Iterable[MetricRecord]) -> list[TimeSlotStats]:
    """Post count and mean interactions for each of the six fixed time slots."""
    timed = [r for r in records if r.hour_of_day is not None]
    profile = []
    for key, label, start, end in time_slots():
        in_slot = [r for r in timed if hour_to_slot(r.hour_of_day) == key]
        avg = sum(r.interactions for r in in_slot) / len(in_slot) if in_slot else 0.0
        profile.append(TimeSlotStats(
            key=key, label=label, start_hour=start, end_hour=end,
            posts=len(in_slot), avg_engagement=avg,
        ))
    return profile


def best_time_slot(profile: list[TimeSlotStats]) -> Optional[TimeSlotStats]:
    best = None
    for slot in profile:
        if slot.posts == 0:
            continue
        if best is None or slot.avg_engagement > best.avg_engagement:
            best = slot
    return best


def post_type_distribution(
    records: Iterable[MetricRecord],
    post_types: Optional[PostTypeLookup] = None,
) -> list[PostTypeStats]:
    counts = {c: 0 for c in Category}
    for r in records:
        category = resolve_category(r, post_types)
        if category is not None:
            counts[category] += 1
    total = sum(counts.values())
    return [
        PostTypeStats(type=c, count=n, percentage=(n / total * 100) if total > 0 else 0.0)
        for c, n in counts.items()
    ]


def analyze_breakdowns(
    records: list[MetricRecord],
    post_types: Optional[PostTypeLookup] = None,
) -> Breakdowns:
    profile = time_slot_profile(records)
    return Breakdowns(
        hashtags=rank_hashtags(records),
        time_slots=profile,
        best_time_slot=best_time_slot(profile),
        post_types=post_type_distribution(records, post_types),
    )
