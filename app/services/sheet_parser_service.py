"""
app/services/sheet_parser_service.py

Turns an in-memory sheet (header row + data rows) into canonical records.

Layout contract of the ingestion boundary:

    row 1   free-text annotation (ignored)
    row 2   header
    row 3+  data

Only a missing/blank header row is fatal (WorkbookStructureError). Everything
else is fail-soft: unresolved or duplicate columns, missing required
columns, bad numbers and unknown month tokens become warnings, and parsing
continues. The warning list is capped; one overflow marker summarizes the
rest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Sequence

from app.config import get_ingestion_settings
from app.domain.buzz_record import BuzzRecord, RowValidationError
from app.mappers.schema_mapper import HeaderResolution, SchemaResolver
from app.validators.mapping_validator import MappingErrorDetail, MappingValidator
from app.validators.sheet_validator import SheetRowValidator

logger = logging.getLogger(__name__)

FIRST_DATA_ROW_NUMBER = 3


@dataclass(frozen=True)
class SheetParseResult:
    """
    Parsed records plus the bounded warning list.
    """

    records: list[BuzzRecord]
    warnings: list[str]
    resolution: HeaderResolution
    rows_skipped: int = 0
    warning_count: int = 0


@dataclass
class _WarningCollector:
    limit: int
    messages: list[str] = field(default_factory=list)
    total: int = 0

    def add(self, message: str) -> None:
        self.total += 1
        if len(self.messages) < self.limit:
            self.messages.append(message)

    def result(self) -> list[str]:
        overflow = self.total - len(self.messages)
        if overflow > 0:
            return [*self.messages, f"... and {overflow} more warnings omitted"]
        return list(self.messages)


class SheetParserService:
    """
    Coordinates header resolution, row parsing, and warning collection.
    """

    def __init__(
        self,
        *,
        max_warnings: int = 10,
        log_column_mapping: bool = True,
        resolver: SchemaResolver | None = None,
        mapping_validator: MappingValidator | None = None,
        row_validator: SheetRowValidator | None = None,
    ) -> None:
        self._max_warnings = max(1, max_warnings)
        self._log_column_mapping = log_column_mapping
        self._resolver = resolver or SchemaResolver()
        self._mapping_validator = mapping_validator or MappingValidator()
        self._row_validator = row_validator or SheetRowValidator()

    def parse_sheet(
        self,
        header_row: Sequence[Any] | None,
        data_rows: Sequence[Sequence[Any]],
    ) -> SheetParseResult:
        """
        Parse a sheet into records and warnings.

        Raises WorkbookStructureError when the header row is missing or blank.
        """

        self._mapping_validator.require_header_row(header_row)
        assert header_row is not None

        resolution = self._resolver.resolve_headers(header_row)
        if self._log_column_mapping:
            self._log_resolution(resolution)

        warnings = _WarningCollector(limit=self._max_warnings)
        for issue in self._mapping_validator.validate(resolution):
            self._record_mapping_issue(warnings, issue)

        records: list[BuzzRecord] = []
        skipped = 0
        for row_number, cells in enumerate(data_rows, start=FIRST_DATA_ROW_NUMBER):
            if self._row_validator.is_completely_empty_row(cells):
                skipped += 1
                continue

            record, row_errors = self._row_validator.parse_row(
                cells=cells,
                column_fields=resolution.column_fields,
                row_number=row_number,
            )
            for error in row_errors:
                self._record_row_error(warnings, error)
            records.append(record)

        logger.info(
            "Sheet parsed records=%d skipped_blank_rows=%d warnings=%d",
            len(records),
            skipped,
            warnings.total,
        )
        return SheetParseResult(
            records=records,
            warnings=warnings.result(),
            resolution=resolution,
            rows_skipped=skipped,
            warning_count=warnings.total,
        )

    def _log_resolution(self, resolution: HeaderResolution) -> None:
        for index, header in enumerate(resolution.source_headers):
            if not header:
                continue
            canonical = resolution.column_fields.get(index)
            logger.debug(
                "Column mapping column=%d header=%r field=%s",
                index + 1,
                header,
                canonical or "unmapped",
            )

    @staticmethod
    def _record_mapping_issue(warnings: _WarningCollector, issue: MappingErrorDetail) -> None:
        logger.warning(
            "Sheet mapping issue code=%s field=%s column=%r",
            issue.code,
            issue.canonical_field,
            issue.source_column,
        )
        warnings.add(issue.message)

    @staticmethod
    def _record_row_error(warnings: _WarningCollector, error: RowValidationError) -> None:
        logger.warning(
            "Sheet validation warning row=%s column=%s message=%s value=%r",
            error.row_number,
            error.column,
            error.message,
            error.value,
        )
        warnings.add(f"{error.describe()} (got {error.value!r})")


@lru_cache(maxsize=1)
def get_sheet_parser_service() -> SheetParserService:
    """
    Build and cache the parser with env-driven settings.
    """

    settings = get_ingestion_settings()
    return SheetParserService(
        max_warnings=settings.max_warnings,
        log_column_mapping=settings.log_column_mapping,
    )


def parse_sheet(
    header_row: Sequence[Any] | None,
    data_rows: Sequence[Sequence[Any]],
) -> SheetParseResult:
    """
    Parse with the default service; see SheetParserService.parse_sheet.
    """

    return get_sheet_parser_service().parse_sheet(header_row, data_rows)
