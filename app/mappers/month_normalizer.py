"""
app/mappers/month_normalizer.py

Canonicalizes heterogeneous month encodings to three-letter English tokens.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

CANONICAL_MONTHS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

DEFAULT_MONTH_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "january": "Jan",
        "jan": "Jan",
        "february": "Feb",
        "feb": "Feb",
        "march": "Mar",
        "mar": "Mar",
        "april": "Apr",
        "apr": "Apr",
        "may": "May",
        "june": "Jun",
        "jun": "Jun",
        "july": "Jul",
        "jul": "Jul",
        "august": "Aug",
        "aug": "Aug",
        "september": "Sep",
        "sept": "Sep",
        "sep": "Sep",
        "october": "Oct",
        "oct": "Oct",
        "november": "Nov",
        "nov": "Nov",
        "december": "Dec",
        "dec": "Dec",
    }
)

# "3", "03", "3月"
_NUMERIC_MONTH_PATTERN = re.compile(r"^(\d{1,2})月?$")


@dataclass(frozen=True)
class MonthVocabulary:
    """
    Lowercase month names mapped to canonical tokens.
    """

    names: Mapping[str, str] = field(default_factory=lambda: DEFAULT_MONTH_NAMES)
    canonical: tuple[str, ...] = CANONICAL_MONTHS


DEFAULT_MONTH_VOCABULARY = MonthVocabulary()


def normalize_month(raw: Any, vocabulary: MonthVocabulary = DEFAULT_MONTH_VOCABULARY) -> str:
    """
    Map one raw month value to its canonical token.

    Blank input returns ``""``. Unrecognized tokens are returned unchanged
    (stripped); callers that care should check :func:`is_canonical_month`.
    """

    if raw is None or isinstance(raw, bool):
        return "" if raw is None else str(raw)

    if isinstance(raw, (int, float)):
        if raw != raw:
            return ""
        if float(raw).is_integer():
            number = int(raw)
            if 1 <= number <= 12:
                return vocabulary.canonical[number - 1]
            return str(number)
        return str(raw)

    token = str(raw).strip()
    if not token:
        return ""
    if token in vocabulary.canonical:
        return token

    numeric = _NUMERIC_MONTH_PATTERN.match(token)
    if numeric:
        number = int(numeric.group(1))
        if 1 <= number <= 12:
            return vocabulary.canonical[number - 1]
        return token

    return vocabulary.names.get(token.lower(), token)


def is_canonical_month(token: str, vocabulary: MonthVocabulary = DEFAULT_MONTH_VOCABULARY) -> bool:
    return token in vocabulary.canonical


def month_ordinal(raw: Any, vocabulary: MonthVocabulary = DEFAULT_MONTH_VOCABULARY) -> int:
    """
    Return 1..12 for anything that normalizes to a canonical month, else 0.
    """

    token = normalize_month(raw, vocabulary)
    try:
        return vocabulary.canonical.index(token) + 1
    except ValueError:
        return 0


def period_sort_key(period: str, vocabulary: MonthVocabulary = DEFAULT_MONTH_VOCABULARY) -> tuple[int, int]:
    """
    Sort key for ``"YEAR-Mon"`` period labels.
    """

    year_part, _, month_part = period.partition("-")
    try:
        year = int(year_part)
    except ValueError:
        year = 0
    return year, month_ordinal(month_part, vocabulary)
