"""
analytics/correlation.py

Pairwise Pearson correlation between record metrics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from app.config import AnalyticsSettings
from app.domain.buzz_record import BuzzRecord, CanonicalField


@dataclass(frozen=True)
class CorrelationMetric:
    field: str
    label: str


DEFAULT_CORRELATION_METRICS: tuple[CorrelationMetric, ...] = (
    CorrelationMetric(CanonicalField.BUZZ_TOTAL, "声量"),
    CorrelationMetric(CanonicalField.SEARCH_CHANNEL_A, "小红书搜索"),
    CorrelationMetric(CanonicalField.SEARCH_CHANNEL_B, "抖音搜索"),
    CorrelationMetric(CanonicalField.BUZZ_YOY, "YOY增速"),
)


@dataclass(frozen=True)
class CorrelationMatrix:
    """
    Symmetric N x N matrix; ``matrix[i][j]`` pairs ``labels[i]`` and ``labels[j]``.
    """

    labels: list[str]
    matrix: list[list[float]]

    def value(self, first: str, second: str) -> float:
        return self.matrix[self.labels.index(first)][self.labels.index(second)]


@dataclass(frozen=True)
class CorrelationStrength:
    strength: str
    direction: str


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson r of two equal-length series; 0.0 when either has no variance.
    """

    if len(x) != len(y) or not x:
        return 0.0
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    dx = xs - xs.mean()
    dy = ys - ys.mean()
    denominator = float(np.sqrt(np.dot(dx, dx) * np.dot(dy, dy)))
    if denominator == 0.0 or not np.isfinite(denominator):
        return 0.0
    return float(np.clip(np.dot(dx, dy) / denominator, -1.0, 1.0))


def correlation_matrix(
    records: Sequence[BuzzRecord],
    metrics: Sequence[CorrelationMetric] = DEFAULT_CORRELATION_METRICS,
) -> CorrelationMatrix:
    columns = [[float(getattr(record, metric.field)) for record in records] for metric in metrics]
    size = len(metrics)
    matrix = [[0.0] * size for _ in range(size)]
    for i in range(size):
        matrix[i][i] = 1.0
        for j in range(i + 1, size):
            r = pearson(columns[i], columns[j])
            matrix[i][j] = r
            matrix[j][i] = r
    return CorrelationMatrix(labels=[metric.label for metric in metrics], matrix=matrix)


def classify_correlation(r: float, *, settings: AnalyticsSettings | None = None) -> CorrelationStrength:
    settings = settings or AnalyticsSettings()
    magnitude = abs(r)
    if magnitude > settings.correlation_strong:
        strength = "strong"
    elif magnitude > settings.correlation_medium:
        strength = "medium"
    else:
        strength = "weak"

    if r > 0:
        direction = "positive"
    elif r < 0:
        direction = "negative"
    else:
        direction = "none"
    return CorrelationStrength(strength=strength, direction=direction)
