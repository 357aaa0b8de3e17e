"""
app/schemas package marker.
"""

from app.schemas.dashboard import ChartPointListResponse, SummaryStatsResponse, TrendResponse
from app.schemas.workbook import SheetListResponse, WorkbookImportResponse

__all__ = [
    "ChartPointListResponse",
    "SheetListResponse",
    "SummaryStatsResponse",
    "TrendResponse",
    "WorkbookImportResponse",
]
