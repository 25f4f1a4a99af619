from typing import Optional

from metric_pulse.models import GrowthSimulationResult, PeriodReport


def _pct(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    return f"{value:+.1f}%"


def format_report(report: PeriodReport) -> str:
    """Format a period report into a Markdown string."""
    agg, prev, deltas, score = report.aggregate, report.previous_aggregate, report.deltas, report.score
    title = f"# {report.kind.capitalize()} Report: {report.anchor}"
    if report.category is not None:
        title += f" ({report.category.value})"
    sections = [title + "\n", f"*Compared with {report.previous_anchor}*\n"]

    sections.append("## Totals\n")
    sections.append("| Metric | Current | Previous | Change |")
    sections.append("|---|---|---|---|")
    rows = [
        ("Posts", agg.total_posts, prev.total_posts, deltas.posts),
        ("Likes", agg.total_likes, prev.total_likes, deltas.likes),
        ("Comments", agg.total_comments, prev.total_comments, deltas.comments),
        ("Shares", agg.total_shares, prev.total_shares, deltas.shares),
        ("Reach", agg.total_reach, prev.total_reach, deltas.reach),
        ("Follower change", agg.total_follower_change, prev.total_follower_change, deltas.follower_change),
    ]
    for name, now, before, change in rows:
        sections.append(f"| {name} | {now:,} | {before:,} | {_pct(change)} |")
    sections.append("")

    sections.append("## Performance\n")
    sections.append(f"**{score.score}/100, rating {score.rating}** ({score.label})\n")
    b = score.breakdown
    sections.append(f"- Engagement: {b.engagement}/50")
    sections.append(f"- Growth: {b.growth}/25")
    sections.append(f"- Quality: {b.quality}/15")
    sections.append(f"- Consistency: {b.consistency}/10")
    if score.engagement_rate_needs_reach_input:
        sections.append("\n> Engagement rate unavailable: enter reach for this period's posts.")
    else:
        sections.append(f"\nEngagement rate: {score.engagement_rate:.2f}%")
    sections.append("")

    breakdowns = report.breakdowns
    if breakdowns.hashtags:
        sections.append("## Top Hashtags\n")
        for i, h in enumerate(breakdowns.hashtags, 1):
            sections.append(f"{i}. {h.hashtag} ({h.count})")
        sections.append("")

    sections.append("## Posting Time\n")
    sections.append("| Slot | Posts | Avg engagement |")
    sections.append("|---|---|---|")
    for slot in breakdowns.time_slots:
        sections.append(f"| {slot.label} | {slot.posts} | {slot.avg_engagement:.1f} |")
    if breakdowns.best_time_slot is not None:
        sections.append(f"\n**Best slot**: {breakdowns.best_time_slot.label}")
    sections.append("")

    sections.append("## Post Types\n")
    for pt in breakdowns.post_types:
        sections.append(f"- **{pt.type.value}**: {pt.count} ({pt.percentage:.1f}%)")
    sections.append("")

    return "\n".join(sections)


def format_simulation(result: GrowthSimulationResult) -> str:
    sections = ["# Growth Simulation\n"]
    sections.append(f"- **Feasibility**: {result.feasibility} (ratio {result.feasibility_ratio:.2f})")
    sections.append(f"- **Realistic final**: {result.realistic_final:,} followers")
    sections.append(f"- **Target final**: {result.user_target_final:,} followers")
    sections.append(f"- **Monthly target**: +{result.monthly_target:,}")
    sections.append(f"- **Weekly target**: +{result.weekly_target:,}")
    comparison = result.growth_rate_comparison
    sections.append(
        f"- **Monthly growth rate**: {comparison.realistic:.2f}% realistic vs {comparison.user_target:.2f}% needed"
    )
    if result.target_date is not None:
        sections.append(f"- **Target date**: {result.target_date.isoformat()}")
    mix = result.recommended_posts_per_week
    sections.append(f"- **Posts per week**: {mix.feed} feed, {mix.reel} reel, {mix.story} story")
    sections.append("")

    sections.append("## Trajectory\n")
    sections.append("| Week | Realistic | Target |")
    sections.append("|---|---|---|")
    for point in result.trajectory:
        sections.append(f"| {point.week} | {point.realistic:,} | {point.user_target:,} |")
    sections.append("")
    return "\n".join(sections)
