"""
app/schemas/workbook.py

Response schemas for workbook ingestion endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SheetInfoResponse(BaseModel):
    """
    API response model for one sheet of an uploaded workbook.
    """

    name: str
    row_count: int = Field(..., ge=0)
    columns: list[str] = Field(default_factory=list)


class SheetListResponse(BaseModel):
    filename: str | None = None
    sheets: list[SheetInfoResponse] = Field(default_factory=list)


class ColumnMappingResponse(BaseModel):
    """
    How one source header was resolved.
    """

    column: int = Field(..., ge=1)
    header: str
    canonical_field: str | None = None
    strategy: str


class WorkbookImportResponse(BaseModel):
    """
    API response model for a completed sheet import.
    """

    sheet_name: str
    rows_imported: int = Field(..., ge=0)
    rows_skipped: int = Field(..., ge=0)
    warning_count: int = Field(..., ge=0)
    warnings: list[str] = Field(default_factory=list)
    missing_required_fields: list[str] = Field(default_factory=list)
    columns: list[ColumnMappingResponse] = Field(default_factory=list)
