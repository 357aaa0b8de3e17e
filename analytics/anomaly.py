"""
analytics/anomaly.py

Per-keyword anomaly scoring.

Each keyword is scored against its own history, never against the
cross-sectional population. The deviation is a robust z-score:

    deviation = 0.6745 * (x - median) / MAD

When more than half the series is identical the MAD is 0; the mean
absolute deviation around the median is used instead:

    deviation = (x - median) / (1.2533 * mean|x - median|)

Both scale factors make the score comparable to a standard-normal sigma.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from app.config import AnalyticsSettings
from app.domain.buzz_record import BuzzRecord
from app.services.aggregation_service import TrendMetric, metric_value
from app.services.snapshot_service import recency_key

logger = logging.getLogger(__name__)

MAD_SCALE = 0.6745
MEAN_AD_SCALE = 1.253314

DEFAULT_ANOMALY_METRICS: tuple[str, ...] = (TrendMetric.BUZZ, TrendMetric.YOY)


class Severity:
    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class AnomalyRecord:
    """
    One flagged observation. ``value`` and ``expected_value`` are in display
    units (yoy as a percentage); ``deviation`` is in sigma.
    """

    keyword: str
    year: int
    month: str
    metric: str
    value: float
    expected_value: float
    deviation: float
    severity: str

    @property
    def period(self) -> str:
        return f"{self.year}-{self.month}"


def robust_deviations(values: Sequence[float]) -> tuple[float, list[float]]:
    """
    Return the series median and each point's robust z-score.
    """

    if not values:
        return 0.0, []
    array = np.asarray(values, dtype=float)
    median = float(np.median(array))
    absolute = np.abs(array - median)

    mad = float(np.median(absolute))
    if mad > 0.0:
        return median, (MAD_SCALE * (array - median) / mad).tolist()

    mean_ad = float(absolute.mean())
    if mean_ad > 0.0:
        return median, ((array - median) / (MEAN_AD_SCALE * mean_ad)).tolist()
    return median, [0.0] * len(values)


def classify_severity(deviation: float, settings: AnalyticsSettings) -> str | None:
    magnitude = abs(deviation)
    if magnitude > settings.anomaly_high_sigma:
        return Severity.HIGH
    if magnitude > settings.anomaly_medium_sigma:
        return Severity.MEDIUM
    return None


def detect_keyword_anomalies(
    records: Iterable[BuzzRecord],
    metrics: Sequence[str] = DEFAULT_ANOMALY_METRICS,
    *,
    settings: AnalyticsSettings | None = None,
) -> list[AnomalyRecord]:
    """
    Flag observations that deviate from their keyword's own history.

    Keywords with fewer than ``anomaly_min_points`` observations are skipped.
    yoy points also need ``|value| > anomaly_min_yoy_percent``. Results are
    sorted by absolute deviation, largest first.
    """

    settings = settings or AnalyticsSettings()
    series: dict[str, list[BuzzRecord]] = {}
    for record in records:
        series.setdefault(record.keyword, []).append(record)

    anomalies: list[AnomalyRecord] = []
    for keyword, rows in series.items():
        if len(rows) < settings.anomaly_min_points:
            continue
        rows = sorted(rows, key=recency_key)

        for metric in metrics:
            values = [metric_value(row, metric) for row in rows]
            expected, deviations = robust_deviations(values)
            for row, value, deviation in zip(rows, values, deviations):
                severity = classify_severity(deviation, settings)
                if severity is None:
                    continue
                if metric == TrendMetric.YOY and abs(value) <= settings.anomaly_min_yoy_percent:
                    continue
                anomalies.append(
                    AnomalyRecord(
                        keyword=keyword,
                        year=row.year,
                        month=row.month,
                        metric=metric,
                        value=value,
                        expected_value=expected,
                        deviation=deviation,
                        severity=severity,
                    )
                )

    anomalies.sort(key=lambda anomaly: abs(anomaly.deviation), reverse=True)
    logger.debug("detect_keyword_anomalies keywords=%d flagged=%d", len(series), len(anomalies))
    return anomalies
