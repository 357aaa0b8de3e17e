"""
tests/test_anomaly.py

Pytest unit tests for per-keyword anomaly detection.
"""

from __future__ import annotations

from typing import Any, Sequence

import pytest

from analytics.anomaly import Severity, classify_severity, detect_keyword_anomalies, robust_deviations
from app.config import AnalyticsSettings
from app.domain.buzz_record import BuzzRecord
from app.mappers.month_normalizer import CANONICAL_MONTHS
from app.services.aggregation_service import TrendMetric


def _series(keyword: str, buzz: Sequence[float], yoy: Sequence[float] | None = None, **extra: Any) -> list[BuzzRecord]:
    yoy = yoy or [0.0] * len(buzz)
    return [
        BuzzRecord(year=2024, month=CANONICAL_MONTHS[index], keyword=keyword, buzz_total=value, buzz_yoy=ratio, **extra)
        for index, (value, ratio) in enumerate(zip(buzz, yoy))
    ]


class TestRobustDeviations:
    def test_mad_fallback_flags_single_spike(self) -> None:
        median, deviations = robust_deviations([100, 100, 100, 100, 500])

        assert median == 100.0
        assert deviations[-1] == pytest.approx(3.99, abs=0.01)
        assert deviations[:4] == [0.0, 0.0, 0.0, 0.0]

    def test_constant_series_scores_zero(self) -> None:
        assert robust_deviations([5, 5, 5]) == (5.0, [0.0, 0.0, 0.0])

    def test_empty(self) -> None:
        assert robust_deviations([]) == (0.0, [])


class TestClassifySeverity:
    def test_bands(self) -> None:
        settings = AnalyticsSettings()
        assert classify_severity(3.5, settings) == Severity.HIGH
        assert classify_severity(-2.5, settings) == Severity.MEDIUM
        assert classify_severity(2.0, settings) is None


class TestDetectKeywordAnomalies:
    def test_spike_is_high_severity(self) -> None:
        anomalies = detect_keyword_anomalies(_series("K", [100, 100, 100, 100, 500]))

        assert len(anomalies) == 1
        anomaly = anomalies[0]
        assert anomaly.keyword == "K"
        assert anomaly.period == "2024-May"
        assert anomaly.metric == TrendMetric.BUZZ
        assert anomaly.value == 500.0
        assert anomaly.expected_value == 100.0
        assert anomaly.severity == Severity.HIGH

    def test_short_history_is_skipped(self) -> None:
        assert detect_keyword_anomalies(_series("K", [1, 1000])) == []

    def test_keywords_are_scored_independently(self) -> None:
        rows = _series("small", [10, 10, 10, 10]) + _series("big", [10_000, 10_000, 10_000, 10_000])
        assert detect_keyword_anomalies(rows) == []

    def test_yoy_below_minimum_is_ignored(self) -> None:
        rows = _series("K", [1, 1, 1, 1, 1], yoy=[0.01, 0.01, 0.01, 0.01, 0.4])
        assert detect_keyword_anomalies(rows, [TrendMetric.YOY]) == []

    def test_yoy_above_minimum_is_flagged(self) -> None:
        rows = _series("K", [1, 1, 1, 1, 1], yoy=[0.01, 0.01, 0.01, 0.01, 2.0])

        anomalies = detect_keyword_anomalies(rows, [TrendMetric.YOY])

        assert len(anomalies) == 1
        assert anomalies[0].value == pytest.approx(200.0)

    def test_sorted_by_absolute_deviation(self) -> None:
        rows = _series("A", [100, 100, 100, 200, 300]) + _series("B", [100, 100, 100, 100, 900])

        anomalies = detect_keyword_anomalies(rows)

        assert [(anomaly.keyword, anomaly.severity) for anomaly in anomalies] == [
            ("B", Severity.HIGH),
            ("A", Severity.MEDIUM),
        ]

    def test_min_points_from_settings(self) -> None:
        settings = AnalyticsSettings(anomaly_min_points=10)
        assert detect_keyword_anomalies(_series("K", [100, 100, 100, 100, 500]), settings=settings) == []
