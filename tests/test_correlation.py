"""
tests/test_correlation.py

Pytest unit tests for the metric correlation matrix.
"""

from __future__ import annotations

import pytest

from analytics.correlation import (
    DEFAULT_CORRELATION_METRICS,
    CorrelationMetric,
    classify_correlation,
    correlation_matrix,
    pearson,
)
from app.config import AnalyticsSettings
from app.domain.buzz_record import BuzzRecord


@pytest.fixture()
def records() -> list[BuzzRecord]:
    return [
        BuzzRecord(keyword=f"k{index}", buzz_total=buzz, search_channel_a=a, search_channel_b=b, buzz_yoy=0.1)
        for index, (buzz, a, b) in enumerate([(10, 1, 9), (20, 2, 7), (30, 3, 8), (40, 4, 2)])
    ]


class TestPearson:
    def test_perfect_positive_and_negative(self) -> None:
        assert pearson([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
        assert pearson([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)

    def test_zero_variance_is_zero(self) -> None:
        assert pearson([1, 1, 1], [1, 2, 3]) == 0.0

    def test_mismatched_or_empty_is_zero(self) -> None:
        assert pearson([], []) == 0.0
        assert pearson([1, 2], [1, 2, 3]) == 0.0


class TestCorrelationMatrix:
    def test_shape_labels_and_diagonal(self, records: list[BuzzRecord]) -> None:
        result = correlation_matrix(records)

        assert result.labels == [metric.label for metric in DEFAULT_CORRELATION_METRICS]
        assert len(result.matrix) == 4
        for index in range(4):
            assert result.matrix[index][index] == 1.0

    def test_symmetric_and_bounded(self, records: list[BuzzRecord]) -> None:
        matrix = correlation_matrix(records).matrix
        for i in range(4):
            for j in range(4):
                assert matrix[i][j] == matrix[j][i]
                assert -1.0 <= matrix[i][j] <= 1.0

    def test_known_pairs(self, records: list[BuzzRecord]) -> None:
        result = correlation_matrix(records)

        assert result.value("声量", "小红书搜索") == pytest.approx(1.0)
        # buzz_yoy is constant
        assert result.value("声量", "YOY增速") == 0.0

    def test_diagonal_is_one_even_without_variance(self) -> None:
        metrics = (CorrelationMetric("buzz_total", "a"), CorrelationMetric("buzz_mom", "b"))
        result = correlation_matrix([BuzzRecord(), BuzzRecord()], metrics)
        assert result.matrix == [[1.0, 0.0], [0.0, 1.0]]


class TestClassifyCorrelation:
    @pytest.mark.parametrize(
        ("r", "strength", "direction"),
        [
            (0.85, "strong", "positive"),
            (-0.75, "strong", "negative"),
            (0.5, "medium", "positive"),
            (0.7, "medium", "positive"),
            (-0.2, "weak", "negative"),
            (0.4, "weak", "positive"),
            (0.0, "weak", "none"),
        ],
    )
    def test_bands(self, r: float, strength: str, direction: str) -> None:
        result = classify_correlation(r)
        assert (result.strength, result.direction) == (strength, direction)

    def test_thresholds_come_from_settings(self) -> None:
        settings = AnalyticsSettings(correlation_strong=0.3, correlation_medium=0.1)
        assert classify_correlation(0.35, settings=settings).strength == "strong"
