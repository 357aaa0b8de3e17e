"""
tests/test_month_normalizer.py

Pytest unit tests for month canonicalization.
"""

from __future__ import annotations

from types import MappingProxyType

import pytest

from app.mappers.month_normalizer import (
    CANONICAL_MONTHS,
    MonthVocabulary,
    is_canonical_month,
    month_ordinal,
    normalize_month,
    period_sort_key,
)

ACCEPTED_INPUTS = [
    *[(number, CANONICAL_MONTHS[number - 1]) for number in range(1, 13)],
    *[(f"{number}月", CANONICAL_MONTHS[number - 1]) for number in range(1, 13)],
    ("01", "Jan"),
    ("12", "Dec"),
    (3.0, "Mar"),
    ("jan", "Jan"),
    ("JAN", "Jan"),
    ("January", "Jan"),
    ("SEPTEMBER", "Sep"),
    ("Sept", "Sep"),
    (" may ", "May"),
]


class TestNormalizeMonth:
    @pytest.mark.parametrize(("raw", "expected"), ACCEPTED_INPUTS)
    def test_accepted_inputs(self, raw: object, expected: str) -> None:
        assert normalize_month(raw) == expected

    @pytest.mark.parametrize(("raw", "_expected"), ACCEPTED_INPUTS)
    def test_idempotent(self, raw: object, _expected: str) -> None:
        once = normalize_month(raw)
        assert normalize_month(once) == once

    @pytest.mark.parametrize("raw", [None, "", "   ", float("nan")])
    def test_blank_inputs_become_empty(self, raw: object) -> None:
        assert normalize_month(raw) == ""

    @pytest.mark.parametrize("raw", ["Q1", "13", "13月", " Spring "])
    def test_unrecognized_tokens_pass_through(self, raw: str) -> None:
        result = normalize_month(raw)
        assert result == raw.strip()
        assert not is_canonical_month(result)

    def test_out_of_range_integer_is_stringified(self) -> None:
        assert normalize_month(0) == "0"
        assert normalize_month(13) == "13"

    def test_injected_vocabulary(self) -> None:
        vocabulary = MonthVocabulary(names=MappingProxyType({"janvier": "Jan", "mars": "Mar"}))

        assert normalize_month("Janvier", vocabulary) == "Jan"
        assert normalize_month("January", vocabulary) == "January"


class TestMonthOrdinal:
    def test_canonical_tokens(self) -> None:
        assert [month_ordinal(token) for token in CANONICAL_MONTHS] == list(range(1, 13))

    def test_any_notation_and_unknown(self) -> None:
        assert month_ordinal("7月") == 7
        assert month_ordinal("Q3") == 0
        assert month_ordinal("") == 0

    def test_period_sort_key(self) -> None:
        periods = ["2024-Mar", "2023-Dec", "2024-Jan"]
        assert sorted(periods, key=period_sort_key) == ["2023-Dec", "2024-Jan", "2024-Mar"]
