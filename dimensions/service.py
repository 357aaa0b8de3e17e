"""
dimensions/service.py

Per-category keyword views grouped by semantic dimension.

All functions scope to one category and optionally one year and a set of
months before grouping. ``heat`` is summed buzz and ``growth`` the mean yoy
percentage of a keyword over the scoped rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from app.domain.buzz_record import BuzzRecord, FilterCriteria
from app.services.filter_service import filter_records
from dimensions.classifier import DimensionClassifier, get_dimension_classifier
from dimensions.vocabulary import ALL_DIMENSIONS, DIMENSION_ORDER

MAX_DIMENSION_KEYWORDS = 50
DETAIL_TOP_KEYWORDS = 5


@dataclass(frozen=True)
class DimensionKeyword:
    keyword: str
    heat: float
    growth: float
    dimension: str
    months: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DimensionDetailStats:
    keyword_count: int
    total_buzz: float
    avg_growth: float
    top_keywords: list[DimensionKeyword] = field(default_factory=list)


@dataclass(frozen=True)
class DimensionPeriodChange:
    dimension: str
    period1_buzz: float
    period2_buzz: float
    buzz_change: float
    period1_keywords: int
    period2_keywords: int
    keyword_change: float


@dataclass(frozen=True)
class PeriodScope:
    year: int
    months: tuple[str, ...] = ()


def _scope(
    records: Iterable[BuzzRecord],
    category: str,
    year: int | None,
    months: Sequence[str],
) -> list[BuzzRecord]:
    criteria = FilterCriteria(categories=frozenset({category}), year=year, months=frozenset(months))
    return filter_records(records, criteria)


def keywords_by_dimension(
    records: Iterable[BuzzRecord],
    category: str,
    dimension: str = ALL_DIMENSIONS,
    *,
    year: int | None = None,
    months: Sequence[str] = (),
    classifier: DimensionClassifier | None = None,
) -> list[DimensionKeyword]:
    """
    Keywords of *category* tagged *dimension* (``"all"`` for every
    dimension), by heat descending, at most 50.
    """

    if not category:
        return []
    classifier = classifier or get_dimension_classifier()

    heat: dict[str, float] = {}
    growth: dict[str, list[float]] = {}
    months_seen: dict[str, list[str]] = {}
    tags: dict[str, str] = {}
    for record in _scope(records, category, year, months):
        keyword = record.keyword
        if not keyword:
            continue
        if keyword not in tags:
            tags[keyword] = classifier.classify(keyword)
        if dimension != ALL_DIMENSIONS and tags[keyword] != dimension:
            continue
        heat[keyword] = heat.get(keyword, 0.0) + record.buzz_total
        growth.setdefault(keyword, []).append(record.yoy_percent)
        seen = months_seen.setdefault(keyword, [])
        if record.month and record.month not in seen:
            seen.append(record.month)

    entries = [
        DimensionKeyword(
            keyword=keyword,
            heat=value,
            growth=sum(growth[keyword]) / len(growth[keyword]),
            dimension=tags[keyword],
            months=months_seen[keyword],
        )
        for keyword, value in heat.items()
    ]
    entries.sort(key=lambda entry: entry.heat, reverse=True)
    return entries[:MAX_DIMENSION_KEYWORDS]


def dimension_stats(
    records: Iterable[BuzzRecord],
    category: str,
    *,
    year: int | None = None,
    months: Sequence[str] = (),
    classifier: DimensionClassifier | None = None,
) -> dict[str, int]:
    """
    Distinct keyword counts per dimension, plus the ``all`` total.
    """

    stats = {ALL_DIMENSIONS: 0, **{dimension: 0 for dimension in DIMENSION_ORDER}}
    if not category:
        return stats
    classifier = classifier or get_dimension_classifier()

    keywords = {record.keyword for record in _scope(records, category, year, months) if record.keyword}
    for keyword in keywords:
        stats[classifier.classify(keyword)] += 1
    stats[ALL_DIMENSIONS] = len(keywords)
    return stats


def dimension_detail_stats(
    records: Iterable[BuzzRecord],
    category: str,
    dimension: str,
    *,
    year: int | None = None,
    months: Sequence[str] = (),
    classifier: DimensionClassifier | None = None,
) -> DimensionDetailStats:
    keywords = keywords_by_dimension(
        records,
        category,
        dimension,
        year=year,
        months=months,
        classifier=classifier,
    )
    if not keywords:
        return DimensionDetailStats(keyword_count=0, total_buzz=0.0, avg_growth=0.0)
    return DimensionDetailStats(
        keyword_count=len(keywords),
        total_buzz=sum(entry.heat for entry in keywords),
        avg_growth=sum(entry.growth for entry in keywords) / len(keywords),
        top_keywords=keywords[:DETAIL_TOP_KEYWORDS],
    )


def _percent_change(before: float, after: float) -> float:
    return (after - before) / before * 100 if before > 0 else 0.0


def compare_dimension_periods(
    records: Sequence[BuzzRecord],
    category: str,
    period1: PeriodScope,
    period2: PeriodScope,
    *,
    classifier: DimensionClassifier | None = None,
) -> list[DimensionPeriodChange]:
    """
    Buzz and keyword-count change per dimension between two periods.
    """

    changes: list[DimensionPeriodChange] = []
    for dimension in DIMENSION_ORDER:
        before = keywords_by_dimension(
            records, category, dimension, year=period1.year, months=period1.months, classifier=classifier
        )
        after = keywords_by_dimension(
            records, category, dimension, year=period2.year, months=period2.months, classifier=classifier
        )
        before_buzz = sum(entry.heat for entry in before)
        after_buzz = sum(entry.heat for entry in after)
        changes.append(
            DimensionPeriodChange(
                dimension=dimension,
                period1_buzz=before_buzz,
                period2_buzz=after_buzz,
                buzz_change=_percent_change(before_buzz, after_buzz),
                period1_keywords=len(before),
                period2_keywords=len(after),
                keyword_change=_percent_change(len(before), len(after)),
            )
        )
    return changes
