# analyzer/aggregate.py
"""
Aggregation: summary statistics and chart series.

- aggregate() is a single fold over the (filtered) records; every group-by map
  keeps first-seen order so "first N" truncation is reproducible.
- The region universe and the region chart series always come from the full,
  unfiltered batch, while every other number reflects the filtered view.
"""

import math
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config import (
    CHART_SERIES_LIMIT,
    NEUTRAL_COLOR,
    SEVERITY_COLORS,
    STATUS_FAIL,
    STATUS_MANUAL,
    STATUS_PASS,
    UNKNOWN_ACCOUNT,
)
from models import (
    AggregateStats,
    ChartSeries,
    Record,
    RegionPoint,
    ServicePoint,
    SeverityPoint,
)


def security_score(passed: int, total: int) -> int:
    """Percentage of checks that passed, rounded half up; 0 for an empty batch."""
    if total == 0:
        return 0
    return int(math.floor(passed / total * 100 + 0.5))


def distinct_regions(records: Iterable[Record]) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for r in records:
        if r.region:
            seen.setdefault(r.region, None)
    return tuple(seen)


def _bump(counts: Dict[str, int], key: str) -> None:
    counts[key] = counts.get(key, 0) + 1


def aggregate(records: Sequence[Record], universe: Optional[Sequence[Record]] = None) -> AggregateStats:
    """
    Compute AggregateStats for `records`.

    `universe` is the full unfiltered batch the region options are drawn from;
    it defaults to `records` itself.
    """
    status_counts = {STATUS_FAIL: 0, STATUS_PASS: 0, STATUS_MANUAL: 0}
    severities: Dict[str, int] = {}
    services: Dict[str, int] = {}
    frameworks: Dict[str, int] = {}

    for r in records:
        if r.status_code in status_counts:
            status_counts[r.status_code] += 1
        _bump(severities, r.severity_bucket)
        _bump(services, r.service_bucket)
        # mapping keys are already distinct, one increment each
        for key in r.compliance or {}:
            _bump(frameworks, key)

    total = len(records)
    passed = status_counts[STATUS_PASS]
    account_id = (records[0].account_id if records else None) or UNKNOWN_ACCOUNT

    return AggregateStats(
        total=total,
        failed=status_counts[STATUS_FAIL],
        passed=passed,
        manual=status_counts[STATUS_MANUAL],
        regions=distinct_regions(records if universe is None else universe),
        severity_breakdown=MappingProxyType(severities),
        services=MappingProxyType(services),
        compliance_frameworks=MappingProxyType(frameworks),
        security_score=security_score(passed, total),
        critical_high=severities.get("Critical", 0) + severities.get("High", 0),
        account_id=account_id,
    )

# --- Chart series ------------------------------------------------------------------

def severity_series(stats: AggregateStats) -> List[SeverityPoint]:
    return [
        SeverityPoint(name=name, value=count, color=SEVERITY_COLORS.get(name, NEUTRAL_COLOR))
        for name, count in stats.severity_breakdown.items()
    ]


def service_series(stats: AggregateStats, limit: int = CHART_SERIES_LIMIT) -> List[ServicePoint]:
    return [ServicePoint(name=name, value=count) for name, count in list(stats.services.items())[:limit]]


def region_series(stats: AggregateStats, universe: Sequence[Record],
                  limit: int = CHART_SERIES_LIMIT) -> List[RegionPoint]:
    """
    Per-region pass/fail counts over the full batch, independent of active filters.
    """
    points: List[RegionPoint] = []
    for region in stats.regions[:limit]:
        in_region = [r for r in universe if r.region == region]
        points.append(RegionPoint(
            name=region,
            failed=sum(1 for r in in_region if r.status_code == STATUS_FAIL),
            passed=sum(1 for r in in_region if r.status_code == STATUS_PASS),
            total=len(in_region),
        ))
    return points


def chart_series(stats: AggregateStats, universe: Sequence[Record]) -> ChartSeries:
    return ChartSeries(
        severity=tuple(severity_series(stats)),
        services=tuple(service_series(stats)),
        regions=tuple(region_series(stats, universe)),
    )
