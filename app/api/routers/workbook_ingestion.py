"""
app/api/routers/workbook_ingestion.py

Workbook ingestion HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from app.api.dependencies import get_workbook_upload
from app.mappers.schema_mapper import HeaderResolution
from app.schemas.workbook import (
    ColumnMappingResponse,
    SheetInfoResponse,
    SheetListResponse,
    WorkbookImportResponse,
)
from app.services.dataset_store import DatasetStore, get_dataset_store
from app.services.workbook_service import WorkbookService, get_workbook_service
from app.validators.mapping_validator import WorkbookStructureError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workbooks", tags=["ingestion"])


def _column_mappings(resolution: HeaderResolution) -> list[ColumnMappingResponse]:
    duplicate_headers = {header for header, _ in resolution.duplicate_headers}
    mappings: list[ColumnMappingResponse] = []
    for index, header in enumerate(resolution.source_headers):
        if not header:
            continue
        canonical = resolution.column_fields.get(index)
        if canonical is not None:
            strategy = resolution.match_strategies.get(canonical, "none")
        elif header in duplicate_headers:
            strategy = "duplicate"
        else:
            strategy = "none"
        mappings.append(
            ColumnMappingResponse(
                column=index + 1,
                header=header,
                canonical_field=canonical,
                strategy=strategy,
            )
        )
    return mappings


@router.post("/sheets", response_model=SheetListResponse)
def list_sheets(
    file: UploadFile = Depends(get_workbook_upload),
    workbook_service: WorkbookService = Depends(get_workbook_service),
) -> SheetListResponse:
    """
    List the sheets of an uploaded workbook without importing anything.
    """

    try:
        sheets = workbook_service.list_sheets(file.file.read(), filename=file.filename)
    except WorkbookStructureError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    finally:
        file.file.close()

    return SheetListResponse(
        filename=file.filename,
        sheets=[
            SheetInfoResponse(name=sheet.name, row_count=sheet.row_count, columns=sheet.columns)
            for sheet in sheets
        ],
    )


@router.post("/import", response_model=WorkbookImportResponse)
def import_workbook(
    file: UploadFile = Depends(get_workbook_upload),
    sheet_name: str | None = Query(default=None, description="Sheet to import; defaults to the first sheet"),
    workbook_service: WorkbookService = Depends(get_workbook_service),
    store: DatasetStore = Depends(get_dataset_store),
) -> WorkbookImportResponse:
    """
    Parse one sheet and replace the in-memory dataset with its records.
    """

    try:
        sheet, result = workbook_service.import_sheet(
            file.file.read(),
            sheet_name=sheet_name,
            filename=file.filename,
        )
    except WorkbookStructureError as exc:
        logger.warning("Workbook import failed file=%r code=%s", file.filename, exc.code)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    finally:
        file.file.close()

    store.load(
        result.records,
        sheet_name=sheet.name,
        source_filename=file.filename,
        warnings=result.warnings,
    )
    return WorkbookImportResponse(
        sheet_name=sheet.name,
        rows_imported=len(result.records),
        rows_skipped=result.rows_skipped,
        warning_count=result.warning_count,
        warnings=result.warnings,
        missing_required_fields=list(result.resolution.missing_required),
        columns=_column_mappings(result.resolution),
    )
