"""
tests/test_workbook_service.py

Pytest tests for reading workbooks into rows and importing a sheet.

Workbooks are built in memory with openpyxl; nothing touches disk.
"""

from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from app.services.sheet_parser_service import SheetParserService
from app.services.workbook_service import WorkbookReadError, WorkbookService
from app.validators.mapping_validator import WorkbookStructureError

HEADER = ["YEAR", "MONTH", "CATEGORY", "KEYWORDS", "TTL_Buzz", "TTL_Buzz_YOY", "象限图"]


def _xlsx_bytes() -> bytes:
    workbook = Workbook()
    first = workbook.active
    first.title = "2024"
    first.append(["数据来源: 社媒监测"])
    first.append(HEADER)
    first.append([2024, "1月", "裤子", "阔腿裤", 1200, 0.15, "明星"])
    first.append([None, None, None, None, None, None, None])
    first.append([2024, 2, "裤子", "阔腿裤", 1500, 0.2, "明星"])

    second = workbook.create_sheet("2023")
    second.append(["备注"])
    second.append(HEADER)
    second.append([2023, "Dec", "包", "托特包", 300, -0.1, ""])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture()
def service() -> WorkbookService:
    return WorkbookService(parser=SheetParserService(max_warnings=10))


class TestListSheets:
    def test_names_rows_and_columns(self, service: WorkbookService) -> None:
        sheets = service.list_sheets(_xlsx_bytes(), filename="buzz.xlsx")

        assert [sheet.name for sheet in sheets] == ["2024", "2023"]
        assert sheets[0].columns == HEADER
        assert sheets[1].row_count == 1


class TestReadSheet:
    def test_layout_split(self, service: WorkbookService) -> None:
        sheet = service.read_sheet(_xlsx_bytes(), filename="buzz.xlsx")

        assert sheet.name == "2024"
        assert sheet.annotation[0] == "数据来源: 社媒监测"
        assert sheet.header_row == HEADER
        assert sheet.data_rows[0][:4] == [2024, "1月", "裤子", "阔腿裤"]

    def test_missing_sheet(self, service: WorkbookService) -> None:
        with pytest.raises(WorkbookStructureError) as excinfo:
            service.read_sheet(_xlsx_bytes(), sheet_name="2022", filename="buzz.xlsx")
        assert excinfo.value.code == "sheet_not_found"

    def test_unreadable_bytes(self, service: WorkbookService) -> None:
        with pytest.raises(WorkbookReadError) as excinfo:
            service.read_sheet(b"not a workbook", filename="buzz.xlsx")
        assert excinfo.value.code == "unreadable_source"


class TestImportSheet:
    def test_records_from_named_sheet(self, service: WorkbookService) -> None:
        sheet, result = service.import_sheet(_xlsx_bytes(), sheet_name="2024", filename="buzz.xlsx")

        assert sheet.name == "2024"
        assert [record.month for record in result.records] == ["Jan", "Feb"]
        assert result.records[1].buzz_total == 1500.0
        assert result.rows_skipped == 1
        assert result.warnings == []

    def test_csv_with_narrow_annotation_row(self, service: WorkbookService) -> None:
        content = "\n".join(
            [
                "导出说明",
                ",".join(HEADER),
                "2024,3月,鞋,德训鞋,\"1,200\",12%,潜力",
            ]
        ).encode("utf-8-sig")

        sheet, result = service.import_sheet(content, filename="buzz.csv")

        assert sheet.name == "Sheet1"
        record = result.records[0]
        assert (record.year, record.month, record.keyword) == (2024, "Mar", "德训鞋")
        assert record.buzz_total == pytest.approx(1200.0)
        assert record.buzz_yoy == pytest.approx(0.12)

    def test_sheet_without_header_row(self, service: WorkbookService) -> None:
        content = "只有一行说明\n".encode("utf-8")

        with pytest.raises(WorkbookStructureError) as excinfo:
            service.import_sheet(content, filename="buzz.csv")
        assert excinfo.value.code == "missing_header_row"
