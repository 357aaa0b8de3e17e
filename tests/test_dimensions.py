"""
tests/test_dimensions.py

Pytest unit tests for keyword dimension tagging and the per-dimension views.
"""

from __future__ import annotations

from typing import Any

import pytest

from app.domain.buzz_record import BuzzRecord
from dimensions.classifier import DimensionClassifier, classify
from dimensions.service import (
    MAX_DIMENSION_KEYWORDS,
    PeriodScope,
    compare_dimension_periods,
    dimension_detail_stats,
    dimension_stats,
    keywords_by_dimension,
)
from dimensions.vocabulary import ALL_DIMENSIONS, DIMENSION_ORDER, Dimension, DimensionVocabulary


def _record(**overrides: Any) -> BuzzRecord:
    values: dict[str, Any] = {"year": 2024, "month": "Jan", "category": "裤子"}
    values.update(overrides)
    return BuzzRecord(**values)


class TestDimensionClassifier:
    @pytest.mark.parametrize(
        ("keyword", "expected"),
        [
            ("运动裤", Dimension.SCENE),
            ("休闲", Dimension.SCENE),
            ("防晒衣", Dimension.FUNCTION),
            ("纯棉T恤", Dimension.MATERIAL),
            ("阔腿裤", Dimension.FIT),
            ("复古", Dimension.DESIGN),
            ("xyz", Dimension.OTHER),
            ("", Dimension.OTHER),
            ("   ", Dimension.OTHER),
            (None, Dimension.OTHER),
        ],
    )
    def test_default_vocabulary(self, keyword: str | None, expected: str) -> None:
        assert classify(keyword) == expected

    def test_case_insensitive(self) -> None:
        assert classify("OVERSIZE卫衣") == Dimension.FIT

    def test_keyword_contained_in_trigger_matches(self) -> None:
        classifier = DimensionClassifier(DimensionVocabulary(entries=((Dimension.MATERIAL, ("羊绒大衣",)),)))
        assert classifier.classify("羊绒") == Dimension.MATERIAL

    def test_vocabulary_order_decides_overlaps(self) -> None:
        design_first = DimensionVocabulary(
            entries=((Dimension.DESIGN, ("运动",)), (Dimension.SCENE, ("运动",)))
        )
        assert DimensionClassifier(design_first).classify("运动裤") == Dimension.DESIGN


@pytest.fixture()
def records() -> list[BuzzRecord]:
    return [
        _record(keyword="运动裤", month="Jan", buzz_total=100, buzz_yoy=0.1),
        _record(keyword="运动裤", month="Feb", buzz_total=50, buzz_yoy=0.3),
        _record(keyword="阔腿裤", month="Jan", buzz_total=200, buzz_yoy=-0.1),
        _record(keyword="纯棉裤", year=2023, month="Jan", buzz_total=80),
        _record(keyword="托特包", category="包", buzz_total=999),
    ]


class TestKeywordsByDimension:
    def test_all_dimensions_by_heat(self, records: list[BuzzRecord]) -> None:
        result = keywords_by_dimension(records, "裤子")

        assert [(entry.keyword, entry.heat) for entry in result] == [
            ("阔腿裤", 200.0),
            ("运动裤", 150.0),
            ("纯棉裤", 80.0),
        ]
        sport = result[1]
        assert sport.dimension == Dimension.SCENE
        assert sport.growth == pytest.approx(20.0)
        assert sport.months == ["Jan", "Feb"]

    def test_single_dimension(self, records: list[BuzzRecord]) -> None:
        result = keywords_by_dimension(records, "裤子", Dimension.FIT)
        assert [entry.keyword for entry in result] == ["阔腿裤"]

    def test_year_and_month_scope(self, records: list[BuzzRecord]) -> None:
        result = keywords_by_dimension(records, "裤子", year=2024, months=["1月"])
        assert [(entry.keyword, entry.heat) for entry in result] == [("阔腿裤", 200.0), ("运动裤", 100.0)]

    def test_blank_category_is_empty(self, records: list[BuzzRecord]) -> None:
        assert keywords_by_dimension(records, "") == []

    def test_capped(self) -> None:
        rows = [_record(keyword=f"kw{index}", buzz_total=index) for index in range(MAX_DIMENSION_KEYWORDS + 5)]
        assert len(keywords_by_dimension(rows, "裤子")) == MAX_DIMENSION_KEYWORDS


class TestDimensionStats:
    def test_counts_per_dimension(self, records: list[BuzzRecord]) -> None:
        stats = dimension_stats(records, "裤子")

        assert stats[ALL_DIMENSIONS] == 3
        assert stats[Dimension.SCENE] == 1
        assert stats[Dimension.FIT] == 1
        assert stats[Dimension.MATERIAL] == 1
        assert set(stats) == {ALL_DIMENSIONS, *DIMENSION_ORDER}

    def test_blank_category_is_all_zero(self) -> None:
        assert set(dimension_stats([], "").values()) == {0}

    def test_detail_stats(self, records: list[BuzzRecord]) -> None:
        detail = dimension_detail_stats(records, "裤子", ALL_DIMENSIONS)

        assert detail.keyword_count == 3
        assert detail.total_buzz == pytest.approx(430.0)
        assert [entry.keyword for entry in detail.top_keywords] == ["阔腿裤", "运动裤", "纯棉裤"]

    def test_detail_stats_empty(self, records: list[BuzzRecord]) -> None:
        detail = dimension_detail_stats(records, "裤子", Dimension.DESIGN)
        assert (detail.keyword_count, detail.total_buzz, detail.avg_growth) == (0, 0.0, 0.0)


class TestCompareDimensionPeriods:
    def test_changes_per_dimension(self, records: list[BuzzRecord]) -> None:
        rows = [*records, _record(keyword="纯棉裤", year=2024, month="Jan", buzz_total=120)]

        changes = compare_dimension_periods(rows, "裤子", PeriodScope(year=2023), PeriodScope(year=2024))

        assert [change.dimension for change in changes] == list(DIMENSION_ORDER)
        by_dimension = {change.dimension: change for change in changes}
        material = by_dimension[Dimension.MATERIAL]
        assert (material.period1_buzz, material.period2_buzz) == (80.0, 120.0)
        assert material.buzz_change == pytest.approx(50.0)
        assert material.keyword_change == pytest.approx(0.0)
        # nothing to compare against in the first period
        assert by_dimension[Dimension.FIT].buzz_change == 0.0
