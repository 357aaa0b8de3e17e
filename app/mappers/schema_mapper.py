"""
app/mappers/schema_mapper.py

Header resolution engine for workbook-to-canonical mapping.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from app.domain.buzz_record import CANONICAL_FIELDS, REQUIRED_CANONICAL_FIELDS, CanonicalField as F

# Literal header spellings observed in source workbooks.
DEFAULT_EXACT_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "YEAR": F.YEAR,
        "MONTH": F.MONTH,
        "CATEGORY": F.CATEGORY,
        "SUBCATEGORY": F.SUBCATEGORY,
        "KEYWORDS": F.KEYWORD,
        "年份": F.YEAR,
        "月份": F.MONTH,
        "品类": F.CATEGORY,
        "细分类目": F.SUBCATEGORY,
        "子品类": F.SUBCATEGORY,
        "关键词": F.KEYWORD,
        "小红书_Buzz": F.BUZZ_CHANNEL_A,
        "小红书-Buzz": F.BUZZ_CHANNEL_A,
        "小红书-BUZZ": F.BUZZ_CHANNEL_A,
        "小红书_BUZZ": F.BUZZ_CHANNEL_A,
        "小红书_声量": F.BUZZ_CHANNEL_A,
        "抖音_Buzz": F.BUZZ_CHANNEL_B,
        "抖音-Buzz": F.BUZZ_CHANNEL_B,
        "抖音-BUZZ": F.BUZZ_CHANNEL_B,
        "抖音_BUZZ": F.BUZZ_CHANNEL_B,
        "抖音_声量": F.BUZZ_CHANNEL_B,
        "TTL_Buzz": F.BUZZ_TOTAL,
        "TTL Buzz": F.BUZZ_TOTAL,
        "TTL BUZZ": F.BUZZ_TOTAL,
        "TTL_BUZZ": F.BUZZ_TOTAL,
        "总声量": F.BUZZ_TOTAL,
        "TTL_Buzz_YOY": F.BUZZ_YOY,
        "TTL Buzz YOY": F.BUZZ_YOY,
        "TTL BUZZ YOY": F.BUZZ_YOY,
        "TTL_BUZZ_YOY": F.BUZZ_YOY,
        "TTL-Buzz-YOY": F.BUZZ_YOY,
        "TTL-BUZZ-YOY": F.BUZZ_YOY,
        "总声量_同比": F.BUZZ_YOY,
        "TTL_Buzz_MOM": F.BUZZ_MOM,
        "TTL Buzz MOM": F.BUZZ_MOM,
        "TTL BUZZ MOM": F.BUZZ_MOM,
        "TTL_BUZZ_MOM": F.BUZZ_MOM,
        "TTL-Buzz-MOM": F.BUZZ_MOM,
        "TTL-BUZZ-MOM": F.BUZZ_MOM,
        "总声量_环比": F.BUZZ_MOM,
        "小红书_SEARCH": F.SEARCH_CHANNEL_A,
        "小红书-SEARCH": F.SEARCH_CHANNEL_A,
        "小红书_搜索量": F.SEARCH_CHANNEL_A,
        "小红书_SEARCH_vs_Dec": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书-SEARCH vs.Dec": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书-SEARCH vs.Jul": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书-SEARCH vs.Aug": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书-SEARCH vs.May": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书-SEARCHvs.Dec": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书-SEARCHvs.Jul": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书-SEARCHvs.May": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书_搜索量_环比": F.SEARCH_CHANNEL_A_VS_REF,
        "抖音_SEARCH": F.SEARCH_CHANNEL_B,
        "抖音-SEARCH": F.SEARCH_CHANNEL_B,
        "抖音_搜索量": F.SEARCH_CHANNEL_B,
        "抖音_SEARCH_vs_Dec": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音-SEARCH vs.Dec": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音-SEARCH vs.Jul": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音-SEARCH vs.Aug": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音-SEARCH vs.May": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音-SEARCHvs.Dec": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音-SEARCHvs.Jul": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音-SEARCHvs.May": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音_搜索量_环比": F.SEARCH_CHANNEL_B_VS_REF,
        "象限图": F.QUADRANT,
    }
)

DEFAULT_NORMALIZED_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "YEAR": F.YEAR,
        "MONTH": F.MONTH,
        "CATEGORY": F.CATEGORY,
        "SUBCATEGORY": F.SUBCATEGORY,
        "KEYWORDS": F.KEYWORD,
        "KEYWORD": F.KEYWORD,
        "QUADRANT": F.QUADRANT,
        "小红书BUZZ": F.BUZZ_CHANNEL_A,
        "抖音BUZZ": F.BUZZ_CHANNEL_B,
        "TTLBUZZ": F.BUZZ_TOTAL,
        "TTLBUZZYOY": F.BUZZ_YOY,
        "TTLBUZZMOM": F.BUZZ_MOM,
        "小红书SEARCH": F.SEARCH_CHANNEL_A,
        "小红书SEARCHVSDEC": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书SEARCHVSJUL": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书SEARCHVSAUG": F.SEARCH_CHANNEL_A_VS_REF,
        "小红书SEARCHVSMAY": F.SEARCH_CHANNEL_A_VS_REF,
        "抖音SEARCH": F.SEARCH_CHANNEL_B,
        "抖音SEARCHVSDEC": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音SEARCHVSJUL": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音SEARCHVSAUG": F.SEARCH_CHANNEL_B_VS_REF,
        "抖音SEARCHVSMAY": F.SEARCH_CHANNEL_B_VS_REF,
        "象限图": F.QUADRANT,
    }
)

_STRIP_PATTERN = re.compile(r"[\s\-_.]")


def normalize_header(header: str) -> str:
    """
    Normalize a column name for format-insensitive matching.
    """

    return _STRIP_PATTERN.sub("", str(header).strip()).upper()


@dataclass(frozen=True)
class ColumnAliasTable:
    """
    Immutable alias configuration for header resolution.

    ``exact`` is consulted with the trimmed header; ``normalized`` with the
    output of :func:`normalize_header`. Normalized forms of every exact alias
    are also accepted.
    """

    exact: Mapping[str, str] = field(default_factory=lambda: DEFAULT_EXACT_ALIASES)
    normalized: Mapping[str, str] = field(default_factory=lambda: DEFAULT_NORMALIZED_ALIASES)
    substring_rules: tuple[tuple[str, str], ...] = (("YOY", F.BUZZ_YOY), ("MOM", F.BUZZ_MOM))

    def __post_init__(self) -> None:
        merged = {normalize_header(alias): target for alias, target in self.exact.items()}
        merged.update(self.normalized)
        object.__setattr__(self, "_normalized_lookup", MappingProxyType(merged))

    @property
    def normalized_lookup(self) -> Mapping[str, str]:
        return self._normalized_lookup  # type: ignore[attr-defined]


DEFAULT_ALIAS_TABLE = ColumnAliasTable()


@dataclass(frozen=True)
class HeaderResolution:
    """
    Resolved header row metadata.
    """

    column_fields: dict[int, str]
    source_headers: tuple[str, ...]
    match_strategies: dict[str, str]
    unresolved_headers: tuple[str, ...] = ()
    duplicate_headers: tuple[tuple[str, str], ...] = ()
    missing_required: tuple[str, ...] = ()

    @property
    def resolved_fields(self) -> frozenset[str]:
        return frozenset(self.column_fields.values())

    def field_to_header(self) -> dict[str, str]:
        return {
            canonical: self.source_headers[index]
            for index, canonical in self.column_fields.items()
        }


class SchemaResolver:
    """
    Resolves arbitrary spreadsheet headers to canonical fields.
    """

    def __init__(
        self,
        *,
        aliases: ColumnAliasTable | None = None,
        required_fields: Sequence[str] = REQUIRED_CANONICAL_FIELDS,
    ) -> None:
        self._aliases = aliases or DEFAULT_ALIAS_TABLE
        self._required_fields = tuple(required_fields)

    def resolve(self, header: Any) -> str | None:
        """
        Resolve one header to a canonical field, or None when unknown.
        """

        return self._resolve_with_strategy(header)[0]

    def resolve_headers(self, headers: Sequence[Any]) -> HeaderResolution:
        """
        Resolve a full header row. The first column claiming a field wins.
        """

        source_headers = tuple("" if header is None else str(header).strip() for header in headers)
        column_fields: dict[int, str] = {}
        strategies: dict[str, str] = {}
        unresolved: list[str] = []
        duplicates: list[tuple[str, str]] = []
        claimed: set[str] = set()

        for index, header in enumerate(source_headers):
            if not header:
                continue
            canonical, strategy = self._resolve_with_strategy(header)
            if canonical is None:
                unresolved.append(header)
                continue
            if canonical in claimed:
                duplicates.append((header, canonical))
                continue
            claimed.add(canonical)
            column_fields[index] = canonical
            strategies[canonical] = strategy

        missing = tuple(required for required in self._required_fields if required not in claimed)
        return HeaderResolution(
            column_fields=column_fields,
            source_headers=source_headers,
            match_strategies=strategies,
            unresolved_headers=tuple(unresolved),
            duplicate_headers=tuple(duplicates),
            missing_required=missing,
        )

    def _resolve_with_strategy(self, header: Any) -> tuple[str | None, str]:
        if header is None:
            return None, "none"
        trimmed = str(header).strip()
        if not trimmed:
            return None, "none"

        exact = self._aliases.exact.get(trimmed)
        if exact is not None:
            return exact, "exact"

        normalized = normalize_header(trimmed)
        alias = self._aliases.normalized_lookup.get(normalized)
        if alias is not None:
            return alias, "normalized"

        for token, canonical in self._aliases.substring_rules:
            if token in normalized:
                return canonical, "substring"

        return None, "none"


_DEFAULT_RESOLVER = SchemaResolver()


def resolve_header(header: Any) -> str | None:
    """
    Resolve one header with the default alias tables.
    """

    return _DEFAULT_RESOLVER.resolve(header)


__all__ = [
    "CANONICAL_FIELDS",
    "ColumnAliasTable",
    "DEFAULT_ALIAS_TABLE",
    "HeaderResolution",
    "SchemaResolver",
    "normalize_header",
    "resolve_header",
]
