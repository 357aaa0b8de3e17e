"""
tests/test_aggregation_service.py

Pytest unit tests for trend aggregation, rankings and summary stats.
"""

from __future__ import annotations

from typing import Any

import pytest

from app.domain.buzz_record import UNKNOWN_QUADRANT_LABEL, BuzzRecord
from app.services.aggregation_service import (
    TrendMetric,
    aggregate_trend,
    metric_value,
    quadrant_points,
    summary_stats,
    top_keywords,
)


def _record(**overrides: Any) -> BuzzRecord:
    values: dict[str, Any] = {"year": 2024, "month": "Jan", "category": "裤子", "keyword": "K"}
    values.update(overrides)
    return BuzzRecord(**values)


@pytest.fixture()
def records() -> list[BuzzRecord]:
    return [
        _record(keyword="K", month="Jan", buzz_total=100, buzz_yoy=0.10, search_channel_a=10),
        _record(keyword="K", month="Feb", buzz_total=150, buzz_yoy=0.20, search_channel_b=5),
        _record(keyword="L", month="Jan", buzz_total=120, buzz_yoy=-0.10, quadrant="明星"),
    ]


class TestMetricValue:
    def test_yoy_in_percent_and_search_summed(self) -> None:
        record = _record(buzz_yoy=0.25, search_channel_a=3, search_channel_b=4)
        assert metric_value(record, TrendMetric.YOY) == pytest.approx(25.0)
        assert metric_value(record, TrendMetric.SEARCH) == pytest.approx(7.0)

    def test_unknown_metric_raises(self) -> None:
        with pytest.raises(ValueError):
            metric_value(_record(), "likes")


class TestAggregateTrend:
    def test_groups_and_sorts_chronologically(self) -> None:
        rows = [
            _record(year=2024, month="Mar", category="包", buzz_total=1),
            _record(year=2023, month="Dec", category="裤子", buzz_total=2),
            _record(year=2024, month="Mar", category="包", buzz_total=3),
            _record(year=2024, month="Jan", category="裤子", buzz_total=4),
        ]

        points = aggregate_trend(rows, TrendMetric.BUZZ)

        assert [(point.period, point.category, point.value, point.count) for point in points] == [
            ("2023-Dec", "裤子", 2.0, 1),
            ("2024-Jan", "裤子", 4.0, 1),
            ("2024-Mar", "包", 4.0, 2),
        ]

    def test_allowlist_filters_and_orders_within_period(self) -> None:
        rows = [
            _record(month="Jan", category="鞋", buzz_total=1),
            _record(month="Jan", category="包", buzz_total=2),
            _record(month="Jan", category="裤子", buzz_total=3),
            _record(month="Feb", category="裤子", buzz_total=4),
        ]

        points = aggregate_trend(rows, TrendMetric.BUZZ, categories=["裤子", "包"])

        assert [(point.month, point.category) for point in points] == [
            ("Jan", "裤子"),
            ("Jan", "包"),
            ("Feb", "裤子"),
        ]

    def test_first_seen_order_within_period_without_allowlist(self) -> None:
        rows = [_record(category="鞋"), _record(category="包")]
        assert [point.category for point in aggregate_trend(rows)] == ["鞋", "包"]

    def test_unsupported_metric_raises(self) -> None:
        with pytest.raises(ValueError):
            aggregate_trend([], "likes")

    def test_empty_input(self) -> None:
        assert aggregate_trend([], TrendMetric.SEARCH) == []


class TestRankings:
    def test_top_keywords_reads_latest_snapshot(self, records: list[BuzzRecord]) -> None:
        top = top_keywords(records, limit=1)

        assert len(top) == 1
        assert top[0].keyword == "K"
        assert top[0].buzz == pytest.approx(150.0)

    def test_top_keywords_by_yoy(self, records: list[BuzzRecord]) -> None:
        top = top_keywords(records, limit=10, sort_by=TrendMetric.YOY)
        assert [point.keyword for point in top] == ["K", "L"]

    def test_non_positive_limit(self, records: list[BuzzRecord]) -> None:
        assert top_keywords(records, limit=0) == []

    def test_quadrant_points_default_label(self, records: list[BuzzRecord]) -> None:
        points = quadrant_points(records)

        assert [point.keyword for point in points] == ["K", "L"]
        assert points[0].quadrant == UNKNOWN_QUADRANT_LABEL
        assert points[1].quadrant == "明星"


class TestSummaryStats:
    def test_totals_use_every_row(self, records: list[BuzzRecord]) -> None:
        stats = summary_stats(records)

        assert stats.total_buzz == pytest.approx(370.0)
        assert stats.total_search == pytest.approx(15.0)
        assert stats.avg_yoy == pytest.approx(6.6667, abs=1e-3)
        assert stats.keyword_count == 2
        assert stats.top_keywords == ["K", "L"]

    def test_empty_input_is_all_zero(self) -> None:
        stats = summary_stats([])

        assert stats.total_buzz == 0.0
        assert stats.avg_yoy == 0.0
        assert stats.total_search == 0.0
        assert stats.keyword_count == 0
        assert stats.top_keywords == []
