"""Library entry points: period report assembly and growth simulation."""
import logging
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Union

from metric_pulse.analyzers import aggregator, performance
from metric_pulse.analyzers.audience import average_audience_reach
from metric_pulse.analyzers.breakdown import analyze_breakdowns
from metric_pulse.analyzers.growth import simulate
from metric_pulse.analyzers.records import PostTypeLookup, filter_records, parse_category
from metric_pulse.config import ScoringConfig
from metric_pulse.errors import InvalidPeriodAnchor
from metric_pulse.models import (
    Category,
    GrowthSimulationResult,
    MetricRecord,
    PeriodReport,
    SimulationInput,
)
from metric_pulse.utils import periods

_log = logging.getLogger(__name__)


def compute_period_report(
    records: Iterable[MetricRecord],
    kind: str,
    anchor: Optional[str] = None,
    category: Union[Category, str, None] = None,
    *,
    reference_time: Optional[datetime] = None,
    post_types: Optional[PostTypeLookup] = None,
    tz: Optional[tzinfo] = None,
    config: Optional[ScoringConfig] = None,
) -> PeriodReport:
    """Build the current-vs-previous report for one weekly or monthly cycle.

    ``anchor`` names the cycle; when omitted, the cycle containing
    ``reference_time`` is used. One of the two must be given.
    """
    if anchor is None:
        if reference_time is None:
            raise InvalidPeriodAnchor("Either an anchor or a reference_time is required")
        anchor = periods.anchor_for(kind, reference_time)
    wanted = parse_category(category)
    records = list(records)

    window = periods.resolve(kind, anchor, tz)
    previous_anchor = periods.previous(kind, anchor)
    previous_window = periods.resolve(kind, previous_anchor, tz)

    current = filter_records(records, window, wanted, post_types)
    earlier = filter_records(records, previous_window, wanted, post_types)
    _log.debug(
        "report %s %s: %d of %d records in period, %d in %s",
        kind, anchor, len(current), len(records), len(earlier), previous_anchor,
    )

    totals = aggregator.aggregate(current, window)
    previous_totals = aggregator.aggregate(earlier, previous_window)
    return PeriodReport(
        kind=kind,
        anchor=anchor,
        previous_anchor=previous_anchor,
        category=wanted,
        aggregate=totals,
        previous_aggregate=previous_totals,
        deltas=aggregator.compute_deltas(totals, previous_totals),
        score=performance.score(totals, totals.avg_reach, kind, config),
        breakdowns=analyze_breakdowns(current, post_types),
        audience_reach_averages=average_audience_reach(current),
    )


def simulate_growth(params: SimulationInput, reference_date: Optional[date] = None) -> GrowthSimulationResult:
    result = simulate(params, reference_date)
    _log.debug(
        "simulation %d+%d over %d months: rate=%.4f ratio=%.3f (%s)",
        params.current_followers, params.target_gain, params.period_months,
        result.monthly_rate, result.feasibility_ratio, result.feasibility,
    )
    return result
