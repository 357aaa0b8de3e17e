"""
app/services/aggregation_service.py

Aggregation layer for the dashboard views.

Two populations are used on purpose:

    summary totals     every filtered row (non-deduplicated)
    rankings/scatter   the latest snapshot, one record per keyword

No filtering happens here; callers pass already-filtered records.
"""

from __future__ import annotations

import logging
from typing import Final, Iterable, Sequence

from app.domain.buzz_record import (
    UNKNOWN_QUADRANT_LABEL,
    AggregatedPoint,
    BuzzRecord,
    ChartDataPoint,
    SummaryStats,
)
from app.mappers.month_normalizer import month_ordinal
from app.services.snapshot_service import latest_per_keyword

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Metric name constants
# ---------------------------------------------------------------------------


class TrendMetric:
    BUZZ: Final[str] = "buzz"
    SEARCH: Final[str] = "search"
    YOY: Final[str] = "yoy"


SUPPORTED_METRICS: Final[tuple[str, ...]] = (TrendMetric.BUZZ, TrendMetric.SEARCH, TrendMetric.YOY)

DEFAULT_TOP_LIMIT: Final[int] = 10
SUMMARY_TOP_KEYWORDS: Final[int] = 10


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_metric(metric: str) -> str:
    if metric not in SUPPORTED_METRICS:
        raise ValueError(f"Unsupported metric {metric!r}; expected one of {SUPPORTED_METRICS}.")
    return metric


def metric_value(record: BuzzRecord, metric: str) -> float:
    """
    Read *metric* from a record in display units (yoy as a percentage).
    """

    if metric == TrendMetric.BUZZ:
        return record.buzz_total
    if metric == TrendMetric.SEARCH:
        return record.total_search
    if metric == TrendMetric.YOY:
        return record.yoy_percent
    raise ValueError(f"Unsupported metric {metric!r}; expected one of {SUPPORTED_METRICS}.")


def to_chart_point(record: BuzzRecord) -> ChartDataPoint:
    return ChartDataPoint(
        keyword=record.keyword,
        buzz=record.buzz_total,
        yoy=record.yoy_percent,
        search=record.total_search,
        quadrant=record.quadrant or UNKNOWN_QUADRANT_LABEL,
        category=record.category,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def aggregate_trend(
    records: Iterable[BuzzRecord],
    metric: str = TrendMetric.BUZZ,
    categories: Sequence[str] | None = None,
) -> list[AggregatedPoint]:
    """
    Sum *metric* per (year, month, category) and order chronologically.

    Within one period, points keep the order in which their group was first
    seen. When *categories* is given, only those categories are kept and
    they are ordered by their position in *categories* inside each period.
    """

    _require_metric(metric)
    allowlist = {category: position for position, category in enumerate(categories or ())}

    sums: dict[tuple[int, str, str], float] = {}
    counts: dict[tuple[int, str, str], int] = {}
    for record in records:
        if allowlist and record.category not in allowlist:
            continue
        key = (record.year, record.month, record.category)
        sums[key] = sums.get(key, 0.0) + metric_value(record, metric)
        counts[key] = counts.get(key, 0) + 1

    points = [
        AggregatedPoint(year=year, month=month, category=category, value=value, count=counts[(year, month, category)])
        for (year, month, category), value in sums.items()
    ]
    if allowlist:
        points.sort(key=lambda point: allowlist[point.category])
    # sort is stable: first-seen (or allowlist) order survives inside a period
    points.sort(key=lambda point: (point.year, month_ordinal(point.month)))
    return points


def top_keywords(
    records: Iterable[BuzzRecord],
    limit: int = DEFAULT_TOP_LIMIT,
    sort_by: str = TrendMetric.BUZZ,
) -> list[ChartDataPoint]:
    """
    Rank the latest snapshot by *sort_by* (descending) and return the first *limit*.
    """

    _require_metric(sort_by)
    if limit <= 0:
        return []
    snapshot = latest_per_keyword(records)
    ranked = sorted(snapshot.values(), key=lambda record: metric_value(record, sort_by), reverse=True)
    return [to_chart_point(record) for record in ranked[:limit]]


def quadrant_points(records: Iterable[BuzzRecord]) -> list[ChartDataPoint]:
    """
    Every latest-snapshot record as a scatter point, in first-seen keyword order.
    """

    return [to_chart_point(record) for record in latest_per_keyword(records).values()]


def summary_stats(records: Sequence[BuzzRecord]) -> SummaryStats:
    """
    Headline totals over the filtered rows plus snapshot-based keyword figures.
    """

    if not records:
        return SummaryStats(total_buzz=0.0, avg_yoy=0.0, total_search=0.0, keyword_count=0, top_keywords=[])

    total_buzz = sum(record.buzz_total for record in records)
    total_search = sum(record.total_search for record in records)
    avg_yoy = sum(record.yoy_percent for record in records) / len(records)

    snapshot = latest_per_keyword(records)
    ranked = sorted(snapshot.values(), key=lambda record: record.buzz_total, reverse=True)

    stats = SummaryStats(
        total_buzz=total_buzz,
        avg_yoy=avg_yoy,
        total_search=total_search,
        keyword_count=len(snapshot),
        top_keywords=[record.keyword for record in ranked[:SUMMARY_TOP_KEYWORDS]],
    )
    logger.debug(
        "summary_stats rows=%d keywords=%d total_buzz=%.2f avg_yoy=%.2f",
        len(records),
        stats.keyword_count,
        stats.total_buzz,
        stats.avg_yoy,
    )
    return stats
