"""
app/domain package marker.
"""

from app.domain.buzz_record import (
    AggregatedPoint,
    BuzzRecord,
    CanonicalField,
    ChartDataPoint,
    FilterCriteria,
    FilterOptions,
    RowValidationError,
    SummaryStats,
)

__all__ = [
    "AggregatedPoint",
    "BuzzRecord",
    "CanonicalField",
    "ChartDataPoint",
    "FilterCriteria",
    "FilterOptions",
    "RowValidationError",
    "SummaryStats",
]
