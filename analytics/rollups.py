"""
analytics/rollups.py

Category and subcategory rollups over filtered (non-deduplicated) records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from app.domain.buzz_record import UNCLASSIFIED_SUBCATEGORY_LABEL, BuzzRecord

# Categories whose rows carry a meaningful subcategory column.
DEFAULT_SUBCATEGORY_CATEGORIES: tuple[str, ...] = ("裤子", "包", "鞋")
SUBCATEGORY_TOP_KEYWORDS = 5


@dataclass(frozen=True)
class CategoryMetrics:
    category: str
    total_buzz: float
    avg_yoy: float
    keyword_count: int
    share_of_voice: float
    growth_momentum: float


@dataclass(frozen=True)
class KeywordBuzz:
    keyword: str
    buzz: float
    yoy: float


@dataclass(frozen=True)
class SubcategoryMetrics:
    category: str
    subcategory: str
    total_buzz: float
    avg_yoy: float
    keyword_count: int
    share_in_category: float
    growth_momentum: float
    top_keywords: list[KeywordBuzz] = field(default_factory=list)


@dataclass
class _Bucket:
    total_buzz: float = 0.0
    yoy_values: list[float] = field(default_factory=list)
    keywords: dict[str, KeywordBuzz] = field(default_factory=dict)

    def add(self, record: BuzzRecord) -> None:
        self.total_buzz += record.buzz_total
        self.yoy_values.append(record.yoy_percent)
        previous = self.keywords.get(record.keyword)
        buzz = record.buzz_total + (previous.buzz if previous else 0.0)
        # yoy of the last row seen for the keyword
        self.keywords[record.keyword] = KeywordBuzz(record.keyword, buzz, record.yoy_percent)

    @property
    def avg_yoy(self) -> float:
        return sum(self.yoy_values) / len(self.yoy_values) if self.yoy_values else 0.0


def growth_momentum(avg_yoy: float, total_buzz: float) -> float:
    """
    Growth rate dampened by scale: ``avg_yoy * log10(total_buzz + 1)``.
    """

    return avg_yoy * math.log10(max(total_buzz, 0.0) + 1)


def _share(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def analyze_categories(records: Iterable[BuzzRecord]) -> list[CategoryMetrics]:
    """
    Per-category totals, mean yoy (percent), share of voice and momentum,
    sorted by total buzz descending.
    """

    buckets: dict[str, _Bucket] = {}
    for record in records:
        buckets.setdefault(record.category, _Bucket()).add(record)

    grand_total = sum(bucket.total_buzz for bucket in buckets.values())
    results = [
        CategoryMetrics(
            category=category,
            total_buzz=bucket.total_buzz,
            avg_yoy=bucket.avg_yoy,
            keyword_count=len(bucket.keywords),
            share_of_voice=_share(bucket.total_buzz, grand_total),
            growth_momentum=growth_momentum(bucket.avg_yoy, bucket.total_buzz),
        )
        for category, bucket in buckets.items()
    ]
    results.sort(key=lambda metrics: metrics.total_buzz, reverse=True)
    return results


def has_subcategories(
    category: str,
    subcategory_categories: Sequence[str] = DEFAULT_SUBCATEGORY_CATEGORIES,
) -> bool:
    return category in subcategory_categories


def analyze_subcategories(
    records: Iterable[BuzzRecord],
    category: str,
    *,
    subcategory_categories: Sequence[str] = DEFAULT_SUBCATEGORY_CATEGORIES,
) -> list[SubcategoryMetrics]:
    """
    Rollups for the subcategories of one category.

    Returns an empty list for categories without subcategories. Rows with no
    subcategory are grouped under ``未分类``.
    """

    if not has_subcategories(category, subcategory_categories):
        return []

    buckets: dict[str, _Bucket] = {}
    for record in records:
        if record.category != category:
            continue
        subcategory = record.subcategory or UNCLASSIFIED_SUBCATEGORY_LABEL
        buckets.setdefault(subcategory, _Bucket()).add(record)

    category_total = sum(bucket.total_buzz for bucket in buckets.values())
    results: list[SubcategoryMetrics] = []
    for subcategory, bucket in buckets.items():
        ranked = sorted(bucket.keywords.values(), key=lambda item: item.buzz, reverse=True)
        results.append(
            SubcategoryMetrics(
                category=category,
                subcategory=subcategory,
                total_buzz=bucket.total_buzz,
                avg_yoy=bucket.avg_yoy,
                keyword_count=len(bucket.keywords),
                share_in_category=_share(bucket.total_buzz, category_total),
                growth_momentum=growth_momentum(bucket.avg_yoy, bucket.total_buzz),
                top_keywords=ranked[:SUBCATEGORY_TOP_KEYWORDS],
            )
        )
    results.sort(key=lambda metrics: metrics.total_buzz, reverse=True)
    return results
