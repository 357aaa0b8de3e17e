"""
app/validators/sheet_validator.py

Row-level type parsing for workbook ingestion. Never raises on cell content:
bad numbers fall back to 0.0, blanks to "" or 0, and every fallback that
hides real data is reported as a RowValidationError.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

from app.domain.buzz_record import (
    NUMERIC_FIELDS,
    STRING_FIELDS,
    BuzzRecord,
    CanonicalField,
    RowValidationError,
)
from app.mappers.month_normalizer import (
    DEFAULT_MONTH_VOCABULARY,
    MonthVocabulary,
    is_canonical_month,
    normalize_month,
)


class SheetRowValidator:
    """
    Parses mapped workbook cells into a BuzzRecord.
    """

    def __init__(self, *, month_vocabulary: MonthVocabulary = DEFAULT_MONTH_VOCABULARY) -> None:
        self._months = month_vocabulary

    def is_completely_empty_row(self, cells: Sequence[Any] | None) -> bool:
        """
        Return True when every cell in the row is empty or whitespace.
        """

        if not cells:
            return True
        return all(self._is_blank(value) for value in cells)

    def parse_row(
        self,
        *,
        cells: Sequence[Any],
        column_fields: Mapping[int, str],
        row_number: int,
    ) -> tuple[BuzzRecord, list[RowValidationError]]:
        """
        Parse one data row using the resolved column index -> field mapping.
        """

        errors: list[RowValidationError] = []
        values: dict[str, Any] = {}

        for index, canonical in column_fields.items():
            raw = cells[index] if index < len(cells) else None

            if canonical == CanonicalField.YEAR:
                values[canonical] = self._parse_year(raw, row_number=row_number, errors=errors)
            elif canonical == CanonicalField.MONTH:
                values[canonical] = self._parse_month(raw, row_number=row_number, errors=errors)
            elif canonical in NUMERIC_FIELDS:
                values[canonical] = self._parse_number(
                    raw,
                    row_number=row_number,
                    column=canonical,
                    errors=errors,
                )
            elif canonical in STRING_FIELDS:
                values[canonical] = self._parse_string(raw)

        return BuzzRecord(**values), errors

    def _parse_year(
        self,
        value: Any,
        *,
        row_number: int,
        errors: list[RowValidationError],
    ) -> int:
        number = self._parse_number(
            value,
            row_number=row_number,
            column=CanonicalField.YEAR,
            errors=errors,
        )
        if not number.is_integer():
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=CanonicalField.YEAR,
                    message="should be a whole number.",
                    value=self._stringify_value(value),
                )
            )
        return int(number)

    def _parse_month(
        self,
        value: Any,
        *,
        row_number: int,
        errors: list[RowValidationError],
    ) -> str:
        if self._is_blank(value):
            return ""
        month = normalize_month(value, self._months)
        if not is_canonical_month(month, self._months):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=CanonicalField.MONTH,
                    message="is not a recognized month; kept as-is.",
                    value=self._stringify_value(value),
                )
            )
        return month

    def _parse_number(
        self,
        value: Any,
        *,
        row_number: int,
        column: str,
        errors: list[RowValidationError],
    ) -> float:
        if self._is_blank(value):
            return 0.0

        if isinstance(value, bool):
            parsed: float | None = None
        elif isinstance(value, (int, float)):
            parsed = float(value)
        else:
            parsed = self._parse_numeric_text(str(value))

        if parsed is None or not math.isfinite(parsed):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message="should be a number; using 0.",
                    value=self._stringify_value(value),
                )
            )
            return 0.0
        return parsed

    @staticmethod
    def _parse_numeric_text(raw: str) -> float | None:
        text = raw.strip().replace(",", "").replace(" ", "")
        scale = 1.0
        if text.endswith("%"):
            text = text[:-1]
            scale = 0.01
        try:
            return float(text) * scale
        except ValueError:
            return None

    def _parse_string(self, value: Any) -> str:
        if self._is_blank(value):
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and value != value:
            return True
        return str(value).strip() == ""

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
