"""
analytics/seasonality.py

Calendar-month profile of buzz and growth across all years.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from app.domain.buzz_record import BuzzRecord
from app.mappers.month_normalizer import CANONICAL_MONTHS, month_ordinal


@dataclass(frozen=True)
class SeasonalityPoint:
    month: int
    label: str
    avg_buzz: float
    avg_yoy: float
    data_points: int


def analyze_seasonality(records: Iterable[BuzzRecord]) -> list[SeasonalityPoint]:
    """
    Twelve buckets (Jan..Dec) of mean buzz and mean yoy percent.

    Rows whose month is not a canonical token are left out. Empty months
    report zeros.
    """

    buzz: dict[int, list[float]] = {ordinal: [] for ordinal in range(1, 13)}
    yoy: dict[int, list[float]] = {ordinal: [] for ordinal in range(1, 13)}
    for record in records:
        ordinal = month_ordinal(record.month)
        if ordinal == 0:
            continue
        buzz[ordinal].append(record.buzz_total)
        yoy[ordinal].append(record.yoy_percent)

    return [
        SeasonalityPoint(
            month=ordinal,
            label=CANONICAL_MONTHS[ordinal - 1],
            avg_buzz=sum(buzz[ordinal]) / len(buzz[ordinal]) if buzz[ordinal] else 0.0,
            avg_yoy=sum(yoy[ordinal]) / len(yoy[ordinal]) if yoy[ordinal] else 0.0,
            data_points=len(buzz[ordinal]),
        )
        for ordinal in range(1, 13)
    ]
