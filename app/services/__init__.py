"""
app/services package marker.
"""

from app.services.dataset_store import DatasetNotLoadedError, DatasetStore, get_dataset_store
from app.services.export_service import ExportService, get_export_service
from app.services.sheet_parser_service import SheetParseResult, SheetParserService, get_sheet_parser_service
from app.services.workbook_service import WorkbookReadError, WorkbookService, get_workbook_service

__all__ = [
    "DatasetNotLoadedError",
    "DatasetStore",
    "ExportService",
    "SheetParseResult",
    "SheetParserService",
    "WorkbookReadError",
    "WorkbookService",
    "get_dataset_store",
    "get_export_service",
    "get_sheet_parser_service",
    "get_workbook_service",
]
