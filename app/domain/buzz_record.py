"""
app/domain/buzz_record.py

Domain models shared by workbook ingestion, filtering, and analytics.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class CanonicalField:
    YEAR = "year"
    MONTH = "month"
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    KEYWORD = "keyword"
    BUZZ_CHANNEL_A = "buzz_channel_a"
    BUZZ_CHANNEL_B = "buzz_channel_b"
    BUZZ_TOTAL = "buzz_total"
    BUZZ_YOY = "buzz_yoy"
    BUZZ_MOM = "buzz_mom"
    SEARCH_CHANNEL_A = "search_channel_a"
    SEARCH_CHANNEL_A_VS_REF = "search_channel_a_vs_ref"
    SEARCH_CHANNEL_B = "search_channel_b"
    SEARCH_CHANNEL_B_VS_REF = "search_channel_b_vs_ref"
    QUADRANT = "quadrant"


CANONICAL_FIELDS: tuple[str, ...] = (
    CanonicalField.YEAR,
    CanonicalField.MONTH,
    CanonicalField.CATEGORY,
    CanonicalField.SUBCATEGORY,
    CanonicalField.KEYWORD,
    CanonicalField.BUZZ_CHANNEL_A,
    CanonicalField.BUZZ_CHANNEL_B,
    CanonicalField.BUZZ_TOTAL,
    CanonicalField.BUZZ_YOY,
    CanonicalField.BUZZ_MOM,
    CanonicalField.SEARCH_CHANNEL_A,
    CanonicalField.SEARCH_CHANNEL_A_VS_REF,
    CanonicalField.SEARCH_CHANNEL_B,
    CanonicalField.SEARCH_CHANNEL_B_VS_REF,
    CanonicalField.QUADRANT,
)

REQUIRED_CANONICAL_FIELDS: tuple[str, ...] = (
    CanonicalField.YEAR,
    CanonicalField.MONTH,
    CanonicalField.CATEGORY,
    CanonicalField.KEYWORD,
    CanonicalField.BUZZ_TOTAL,
)

NUMERIC_FIELDS: frozenset[str] = frozenset(
    {
        CanonicalField.BUZZ_CHANNEL_A,
        CanonicalField.BUZZ_CHANNEL_B,
        CanonicalField.BUZZ_TOTAL,
        CanonicalField.BUZZ_YOY,
        CanonicalField.BUZZ_MOM,
        CanonicalField.SEARCH_CHANNEL_A,
        CanonicalField.SEARCH_CHANNEL_A_VS_REF,
        CanonicalField.SEARCH_CHANNEL_B,
        CanonicalField.SEARCH_CHANNEL_B_VS_REF,
    }
)

STRING_FIELDS: frozenset[str] = frozenset(
    {
        CanonicalField.CATEGORY,
        CanonicalField.SUBCATEGORY,
        CanonicalField.KEYWORD,
        CanonicalField.QUADRANT,
    }
)

UNKNOWN_QUADRANT_LABEL = "未知"
UNCLASSIFIED_SUBCATEGORY_LABEL = "未分类"


def to_percent(value: float | None) -> float:
    """
    Convert a stored ratio (0.15) into a display percentage (15.0).

    Only applied at presentation boundaries; records always keep the ratio.
    """

    if value is None or value != value:
        return 0.0
    return value * 100


@dataclass(frozen=True)
class BuzzRecord:
    """
    One canonicalized workbook row.
    """

    year: int = 0
    month: str = ""
    category: str = ""
    keyword: str = ""
    subcategory: str = ""
    buzz_channel_a: float = 0.0
    buzz_channel_b: float = 0.0
    buzz_total: float = 0.0
    buzz_yoy: float = 0.0
    buzz_mom: float = 0.0
    search_channel_a: float = 0.0
    search_channel_a_vs_ref: float = 0.0
    search_channel_b: float = 0.0
    search_channel_b_vs_ref: float = 0.0
    quadrant: str = ""

    @property
    def total_search(self) -> float:
        return self.search_channel_a + self.search_channel_b

    @property
    def yoy_percent(self) -> float:
        return to_percent(self.buzz_yoy)

    @property
    def period(self) -> str:
        return f"{self.year}-{self.month}"


@dataclass(frozen=True)
class FilterCriteria:
    """
    Multi-predicate record filter. Empty sets and None mean "no constraint".
    """

    categories: frozenset[str] = frozenset()
    year: int | None = None
    months: frozenset[str] = frozenset()
    quadrants: frozenset[str] = frozenset()
    keyword_substring: str | None = None


@dataclass(frozen=True)
class ChartDataPoint:
    """
    Ranking/scatter view of exactly one latest-snapshot record.
    """

    keyword: str
    buzz: float
    yoy: float
    search: float
    quadrant: str
    category: str


@dataclass(frozen=True)
class AggregatedPoint:
    """
    One trend-series point for a (year, month, category) group.
    """

    year: int
    month: str
    category: str
    value: float
    count: int = 1

    @property
    def period(self) -> str:
        return f"{self.year}-{self.month}"


@dataclass(frozen=True)
class SummaryStats:
    """
    Headline numbers for the dashboard header cards.
    """

    total_buzz: float
    avg_yoy: float
    total_search: float
    keyword_count: int
    top_keywords: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FilterOptions:
    """
    Distinct values available for building filter controls.
    """

    categories: list[str]
    quadrants: list[str]
    years: list[int]
    periods: list[str]


@dataclass(frozen=True)
class RowValidationError:
    """
    One sheet row validation issue. ``row_number`` is the sheet row (data
    starts on row 3).
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None

    def describe(self) -> str:
        if self.column:
            return f"Row {self.row_number}: {self.column} {self.message}"
        return f"Row {self.row_number}: {self.message}"
