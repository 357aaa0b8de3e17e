"""
app/services/filter_service.py

Multi-predicate filtering over parsed records and the distinct values that
feed the dashboard filter controls.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from app.domain.buzz_record import BuzzRecord, FilterCriteria, FilterOptions
from app.mappers.month_normalizer import normalize_month, period_sort_key


def filter_records(records: Iterable[BuzzRecord], criteria: FilterCriteria) -> list[BuzzRecord]:
    """
    Return the records satisfying every active predicate, in input order.

    Empty sets, a None year and a blank keyword substring do not constrain.
    Month criteria are normalized first, so ``{"3月"}`` matches ``"Mar"``.
    """

    months = frozenset(normalize_month(month) for month in criteria.months)
    needle = (criteria.keyword_substring or "").strip().casefold()

    matched: list[BuzzRecord] = []
    for record in records:
        if criteria.categories and record.category not in criteria.categories:
            continue
        if criteria.year is not None and record.year != criteria.year:
            continue
        if months and record.month not in months:
            continue
        if criteria.quadrants and record.quadrant not in criteria.quadrants:
            continue
        if needle and needle not in record.keyword.casefold():
            continue
        matched.append(record)
    return matched


def available_options(records: Sequence[BuzzRecord]) -> FilterOptions:
    """
    Collect sorted distinct categories, quadrants, years and periods.
    """

    categories = sorted({record.category for record in records if record.category})
    quadrants = sorted({record.quadrant for record in records if record.quadrant})
    years = sorted({record.year for record in records if record.year})
    periods = sorted(
        {record.period for record in records if record.year and record.month},
        key=period_sort_key,
    )
    return FilterOptions(
        categories=categories,
        quadrants=quadrants,
        years=years,
        periods=periods,
    )
