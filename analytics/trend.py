"""
analytics/trend.py

Simple linear trend fitting and up/down/stable classification.
No sklearn, no statsmodels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from app.config import AnalyticsSettings
from app.domain.buzz_record import BuzzRecord
from app.mappers.month_normalizer import month_ordinal
from app.services.aggregation_service import TrendMetric, metric_value


class TrendDirection:
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class TrendPrediction:
    slope: float
    intercept: float
    r_squared: float
    next_value: float
    trend: str
    confidence: float


@dataclass(frozen=True)
class SeriesPoint:
    period: str
    value: float


class LinearTrendModel:
    """
    Fits an OLS line over the series index:

        m = cov(x, y) / var(x)
        b = mean(y) - m * mean(x)

    where x = [0, 1, ..., n-1]. ``next_value`` is the fitted line at x = n.
    """

    def fit(self, values: Sequence[float]) -> tuple[float, float, float]:
        """
        Return ``(slope, intercept, r_squared)``; r_squared is 0.0 for a flat series.
        """

        y = np.asarray(values, dtype=float)
        x = np.arange(len(y), dtype=float)
        dx = x - x.mean()
        var_x = float(np.dot(dx, dx))
        if var_x == 0.0:
            return 0.0, float(y.mean()) if len(y) else 0.0, 0.0

        slope = float(np.dot(dx, y - y.mean()) / var_x)
        intercept = float(y.mean() - slope * x.mean())

        ss_total = float(np.sum((y - y.mean()) ** 2))
        if ss_total == 0.0:
            return slope, intercept, 0.0
        ss_residual = float(np.sum((y - (slope * x + intercept)) ** 2))
        return slope, intercept, 1.0 - ss_residual / ss_total


class TrendClassifier:
    """
    Maps a slope to up/down/stable relative to the series mean, so a slope of
    10 means something different around 100 than around 10 000.
    """

    def __init__(self, noise_threshold: float = 0.1) -> None:
        self.noise_threshold = noise_threshold

    def classify(self, slope: float, average_value: float) -> str:
        magnitude = abs(average_value)
        change_rate = abs(slope) / magnitude if magnitude > 0 else 0.0
        if change_rate > self.noise_threshold:
            return TrendDirection.UP if slope > 0 else TrendDirection.DOWN
        return TrendDirection.STABLE


def predict_trend(
    values: Sequence[float],
    *,
    settings: AnalyticsSettings | None = None,
) -> TrendPrediction | None:
    """
    Fit and classify *values* (oldest first).

    Returns None when the series is shorter than ``trend_min_points``.
    Confidence is the fit's r_squared clamped to [0, 1].
    """

    settings = settings or AnalyticsSettings()
    if len(values) < settings.trend_min_points:
        return None

    slope, intercept, r_squared = LinearTrendModel().fit(values)
    average = sum(values) / len(values)
    trend = TrendClassifier(settings.trend_noise_threshold).classify(slope, average)
    confidence = min(1.0, max(0.0, r_squared))
    return TrendPrediction(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        next_value=slope * len(values) + intercept,
        trend=trend,
        confidence=confidence,
    )


def period_series(
    records: Iterable[BuzzRecord],
    metric: str = TrendMetric.BUZZ,
    *,
    keyword: str | None = None,
) -> list[SeriesPoint]:
    """
    Sum *metric* per period in chronological order, optionally for one keyword.

    yoy is averaged rather than summed.
    """

    sums: dict[tuple[int, int], float] = {}
    counts: dict[tuple[int, int], int] = {}
    labels: dict[tuple[int, int], str] = {}
    for record in records:
        if keyword is not None and record.keyword != keyword:
            continue
        key = (record.year, month_ordinal(record.month))
        sums[key] = sums.get(key, 0.0) + metric_value(record, metric)
        counts[key] = counts.get(key, 0) + 1
        labels.setdefault(key, record.period)

    points: list[SeriesPoint] = []
    for key in sorted(sums):
        value = sums[key] / counts[key] if metric == TrendMetric.YOY else sums[key]
        points.append(SeriesPoint(period=labels[key], value=value))
    return points
