"""
app/mappers package marker.
"""

from app.mappers.month_normalizer import MonthVocabulary, month_ordinal, normalize_month
from app.mappers.schema_mapper import ColumnAliasTable, HeaderResolution, SchemaResolver, resolve_header

__all__ = [
    "ColumnAliasTable",
    "HeaderResolution",
    "MonthVocabulary",
    "SchemaResolver",
    "month_ordinal",
    "normalize_month",
    "resolve_header",
]
