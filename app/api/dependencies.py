"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, Query, UploadFile, status

from app.domain.buzz_record import BuzzRecord, FilterCriteria
from app.services.dataset_store import DatasetNotLoadedError, DatasetStore, LoadedDataset, get_dataset_store
from app.services.filter_service import filter_records

WORKBOOK_EXTENSIONS = (".xlsx", ".xls", ".csv")
WORKBOOK_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "text/csv",
    "application/csv",
}


def get_workbook_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a spreadsheet by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_workbook_filename = filename.endswith(WORKBOOK_EXTENSIONS)
    is_workbook_content_type = content_type in WORKBOOK_CONTENT_TYPES

    if not is_workbook_filename and not is_workbook_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only .xlsx, .xls or .csv files are allowed.",
        )

    return file


def _split_values(values: list[str] | None) -> frozenset[str]:
    # accepts repeated params and comma-separated lists
    if not values:
        return frozenset()
    parts = (part.strip() for value in values for part in value.split(","))
    return frozenset(part for part in parts if part)


def get_filter_criteria(
    categories: list[str] | None = Query(default=None, description="Category allowlist."),
    year: int | None = Query(default=None, description="Exact year."),
    months: list[str] | None = Query(default=None, description="Months in any supported notation."),
    quadrants: list[str] | None = Query(default=None, description="Quadrant label allowlist."),
    keyword: str | None = Query(default=None, description="Case-insensitive keyword substring."),
) -> FilterCriteria:
    return FilterCriteria(
        categories=_split_values(categories),
        year=year,
        months=_split_values(months),
        quadrants=_split_values(quadrants),
        keyword_substring=keyword,
    )


def get_loaded_dataset(store: DatasetStore = Depends(get_dataset_store)) -> LoadedDataset:
    """
    Resolve the current dataset or answer 409 when nothing has been imported.
    """

    try:
        return store.require()
    except DatasetNotLoadedError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=exc.to_dict(),
        ) from exc


def get_filtered_records(
    dataset: LoadedDataset = Depends(get_loaded_dataset),
    criteria: FilterCriteria = Depends(get_filter_criteria),
) -> list[BuzzRecord]:
    return filter_records(dataset.records, criteria)
