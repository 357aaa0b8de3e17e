"""
app/services/workbook_service.py

Input boundary: reads workbook bytes into plain row lists for the parser.

pandas does the file decoding (openpyxl for .xlsx); nothing downstream sees
file bytes. Structural failures are raised as WorkbookStructureError so the
caller can report a failed import distinctly from row warnings.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, BinaryIO

import pandas as pd

from app.services.sheet_parser_service import SheetParseResult, SheetParserService, get_sheet_parser_service
from app.validators.mapping_validator import WorkbookStructureError

logger = logging.getLogger(__name__)

ANNOTATION_ROW_INDEX = 0
HEADER_ROW_INDEX = 1
CSV_SUFFIXES = (".csv",)


@dataclass(frozen=True)
class SheetInfo:
    """
    Sheet metadata shown before the user picks a sheet to import.
    """

    name: str
    row_count: int
    columns: list[str]


@dataclass(frozen=True)
class SheetRows:
    """
    Raw rows of one sheet split along the fixed layout contract.
    """

    name: str
    annotation: list[Any]
    header_row: list[Any] | None
    data_rows: list[list[Any]]


class WorkbookReadError(WorkbookStructureError):
    """
    Raised when the workbook bytes cannot be decoded at all.
    """


class WorkbookService:
    """
    Reads spreadsheets and hands rows to the sheet parser.
    """

    def __init__(self, *, parser: SheetParserService | None = None) -> None:
        self._parser = parser

    def list_sheets(self, content: bytes | BinaryIO, *, filename: str | None = None) -> list[SheetInfo]:
        """
        Return name, data row count and header labels for every sheet.
        """

        frames = self._read_all(content, filename=filename)
        infos: list[SheetInfo] = []
        for name, frame in frames.items():
            rows = _frame_to_rows(frame)
            header = rows[HEADER_ROW_INDEX] if len(rows) > HEADER_ROW_INDEX else []
            infos.append(
                SheetInfo(
                    name=name,
                    row_count=max(0, len(rows) - 2),
                    columns=[str(cell).strip() for cell in header if not _is_blank(cell)],
                )
            )
        return infos

    def read_sheet(
        self,
        content: bytes | BinaryIO,
        *,
        sheet_name: str | None = None,
        filename: str | None = None,
    ) -> SheetRows:
        """
        Read one sheet (the first one when *sheet_name* is None).
        """

        frames = self._read_all(content, filename=filename)
        if not frames:
            raise WorkbookStructureError(message="Workbook contains no sheets.", code="no_sheets")

        name = sheet_name if sheet_name is not None else next(iter(frames))
        if name not in frames:
            raise WorkbookStructureError(
                message=f"Sheet {name!r} does not exist.",
                code="sheet_not_found",
            )

        rows = _frame_to_rows(frames[name])
        logger.info("Workbook sheet read sheet=%r rows=%d", name, len(rows))
        return SheetRows(
            name=name,
            annotation=rows[ANNOTATION_ROW_INDEX] if rows else [],
            header_row=rows[HEADER_ROW_INDEX] if len(rows) > HEADER_ROW_INDEX else None,
            data_rows=rows[HEADER_ROW_INDEX + 1 :],
        )

    def import_sheet(
        self,
        content: bytes | BinaryIO,
        *,
        sheet_name: str | None = None,
        filename: str | None = None,
    ) -> tuple[SheetRows, SheetParseResult]:
        """
        Read and parse one sheet.
        """

        sheet = self.read_sheet(content, sheet_name=sheet_name, filename=filename)
        parser = self._parser or get_sheet_parser_service()
        return sheet, parser.parse_sheet(sheet.header_row, sheet.data_rows)

    @staticmethod
    def _read_all(content: bytes | BinaryIO, *, filename: str | None) -> dict[str, pd.DataFrame]:
        buffer = io.BytesIO(content) if isinstance(content, (bytes, bytearray)) else content
        is_csv = bool(filename) and filename.strip().lower().endswith(CSV_SUFFIXES)
        try:
            if is_csv:
                text = buffer.read().decode("utf-8-sig")
                # the annotation row is usually narrower than the header row
                width = max((len(row) for row in csv.reader(io.StringIO(text))), default=0)
                if width == 0:
                    return {"Sheet1": pd.DataFrame()}
                frame = pd.read_csv(
                    io.StringIO(text),
                    header=None,
                    names=list(range(width)),
                    dtype=object,
                    keep_default_na=False,
                )
                return {"Sheet1": frame}
            return pd.read_excel(buffer, sheet_name=None, header=None, dtype=object)
        except UnicodeDecodeError as exc:
            raise WorkbookReadError(message="CSV must be UTF-8 encoded.", code="unreadable_source") from exc
        except (ValueError, OSError, KeyError) as exc:
            raise WorkbookReadError(
                message=f"Workbook could not be read: {exc}",
                code="unreadable_source",
            ) from exc
        except Exception as exc:  # noqa: BLE001
            # openpyxl/xlrd raise library-specific errors for corrupt archives
            raise WorkbookReadError(
                message=f"Workbook could not be read: {exc}",
                code="unreadable_source",
            ) from exc


def _frame_to_rows(frame: pd.DataFrame) -> list[list[Any]]:
    rows: list[list[Any]] = []
    for values in frame.itertuples(index=False, name=None):
        rows.append([_clean_cell(value) for value in values])
    return rows


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and value != value:
        return None
    if isinstance(value, (pd.Timestamp, datetime, date)):
        # date-typed month cells: keep only the month number
        return value.month
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        # numpy scalars -> Python scalars
        return value.item()
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def get_workbook_service() -> WorkbookService:
    return WorkbookService()
