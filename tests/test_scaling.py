"""
tests/test_scaling.py

Pytest unit tests for log-axis heuristics and normalization.
"""

from __future__ import annotations

import pytest

from analytics.scaling import (
    NormalizationType,
    from_log_scale,
    normalize,
    should_use_log_scale,
    to_log_scale,
)
from app.config import AnalyticsSettings


class TestLogScale:
    def test_round_trip_for_positive_values(self) -> None:
        assert to_log_scale(1000.0) == pytest.approx(3.0)
        assert from_log_scale(3.0) == pytest.approx(1000.0)

    def test_non_positive_uses_floor(self) -> None:
        assert to_log_scale(0.0) == pytest.approx(-2.0)
        assert to_log_scale(-5.0) == pytest.approx(-2.0)

    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            ([1.0, 5.0, 10.0], False),
            ([1.0, 11.0], True),
            ([0.0, -3.0, 500.0], False),
            ([], False),
        ],
    )
    def test_should_use_log_scale(self, values: list[float], expected: bool) -> None:
        assert should_use_log_scale(values) is expected

    def test_multiplier_override(self) -> None:
        assert should_use_log_scale([1.0, 5.0], 4.0)
        assert should_use_log_scale([1.0, 5.0], settings=AnalyticsSettings(log_scale_multiplier=3.0))


class TestNormalize:
    def test_minmax(self) -> None:
        assert normalize([10.0, 20.0, 30.0]) == pytest.approx([0.0, 0.5, 1.0])

    def test_minmax_constant(self) -> None:
        assert normalize([7.0, 7.0]) == [0.5, 0.5]

    def test_zscore(self) -> None:
        result = normalize([1.0, 2.0, 3.0], NormalizationType.ZSCORE)
        assert result == pytest.approx([-1.2247, 0.0, 1.2247], abs=1e-4)

    def test_zscore_constant(self) -> None:
        assert normalize([3.0, 3.0, 3.0], NormalizationType.ZSCORE) == [0.0, 0.0, 0.0]

    def test_log(self) -> None:
        assert normalize([1.0, 10.0, 100.0], NormalizationType.LOG) == pytest.approx([0.0, 0.5, 1.0])

    def test_empty_and_unknown(self) -> None:
        assert normalize([]) == []
        with pytest.raises(ValueError):
            normalize([1.0], "rank")
