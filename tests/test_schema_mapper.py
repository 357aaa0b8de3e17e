from __future__ import annotations

import unittest
from types import MappingProxyType

from app.domain.buzz_record import CanonicalField
from app.mappers.schema_mapper import ColumnAliasTable, SchemaResolver, normalize_header, resolve_header


class TestResolveHeader(unittest.TestCase):
    def test_exact_aliases_resolve(self) -> None:
        self.assertEqual(resolve_header("TTL_Buzz"), CanonicalField.BUZZ_TOTAL)
        self.assertEqual(resolve_header("总声量_同比"), CanonicalField.BUZZ_YOY)
        self.assertEqual(resolve_header("关键词"), CanonicalField.KEYWORD)
        self.assertEqual(resolve_header("象限图"), CanonicalField.QUADRANT)

    def test_format_variants_resolve_to_the_same_field(self) -> None:
        variants = ["TTL_Buzz", "TTL-BUZZ", "TTL Buzz", " ttl.buzz ", "ttl_buzz"]

        resolved = {resolve_header(header) for header in variants}

        self.assertEqual(resolved, {CanonicalField.BUZZ_TOTAL})

    def test_reference_month_variants_collapse(self) -> None:
        self.assertEqual(resolve_header("小红书-SEARCH vs.Jul"), CanonicalField.SEARCH_CHANNEL_A_VS_REF)
        self.assertEqual(resolve_header("小红书-SEARCH vs.Dec"), CanonicalField.SEARCH_CHANNEL_A_VS_REF)
        self.assertEqual(resolve_header("抖音 search vs aug"), CanonicalField.SEARCH_CHANNEL_B_VS_REF)

    def test_substring_fallback_for_growth_columns(self) -> None:
        self.assertEqual(resolve_header("Buzz YoY growth"), CanonicalField.BUZZ_YOY)
        self.assertEqual(resolve_header("buzz_mom_pct"), CanonicalField.BUZZ_MOM)

    def test_unknown_and_blank_headers_return_none(self) -> None:
        self.assertIsNone(resolve_header("Notes"))
        self.assertIsNone(resolve_header("   "))
        self.assertIsNone(resolve_header(None))

    def test_normalize_header_strips_separators(self) -> None:
        self.assertEqual(normalize_header(" 小红书-SEARCH vs.Dec "), "小红书SEARCHVSDEC")


class TestSchemaResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = SchemaResolver()

    def test_resolve_headers_reports_unresolved_duplicates_and_missing(self) -> None:
        headers = ["YEAR", "MONTH", "KEYWORDS", "TTL_Buzz", "TTL BUZZ", "Comment", None]

        resolution = self.resolver.resolve_headers(headers)

        self.assertEqual(resolution.column_fields[3], CanonicalField.BUZZ_TOTAL)
        self.assertNotIn(4, resolution.column_fields)
        self.assertEqual(resolution.duplicate_headers, (("TTL BUZZ", CanonicalField.BUZZ_TOTAL),))
        self.assertEqual(resolution.unresolved_headers, ("Comment",))
        self.assertEqual(resolution.missing_required, (CanonicalField.CATEGORY,))

    def test_match_strategies_are_recorded(self) -> None:
        resolution = self.resolver.resolve_headers(["YEAR", "ttl-buzz", "Buzz YoY growth"])

        self.assertEqual(resolution.match_strategies[CanonicalField.YEAR], "exact")
        self.assertEqual(resolution.match_strategies[CanonicalField.BUZZ_TOTAL], "normalized")
        self.assertEqual(resolution.match_strategies[CanonicalField.BUZZ_YOY], "substring")

    def test_field_to_header_uses_source_spelling(self) -> None:
        resolution = self.resolver.resolve_headers(["年份", "品类"])

        self.assertEqual(
            resolution.field_to_header(),
            {CanonicalField.YEAR: "年份", CanonicalField.CATEGORY: "品类"},
        )

    def test_injected_alias_table_replaces_defaults(self) -> None:
        aliases = ColumnAliasTable(
            exact=MappingProxyType({"Jahr": CanonicalField.YEAR}),
            normalized=MappingProxyType({}),
            substring_rules=(),
        )
        resolver = SchemaResolver(aliases=aliases)

        self.assertEqual(resolver.resolve("Jahr"), CanonicalField.YEAR)
        self.assertEqual(resolver.resolve("JAHR"), CanonicalField.YEAR)
        self.assertIsNone(resolver.resolve("YEAR"))
        self.assertIsNone(resolver.resolve("TTL Buzz YOY"))


if __name__ == "__main__":
    unittest.main()
