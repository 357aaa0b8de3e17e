"""
app/api/routers/export_router.py

Filtered dataset export endpoint.

GET /export

Query parameters
----------------
format  : "csv" | "xlsx" | "json"   (default: "csv")
columns : column keys to include, repeated or comma-separated
          (default: the standard column set)
plus the shared filter parameters.

Responses
---------
CSV  → StreamingResponse, Content-Type: text/csv (UTF-8 with BOM)
XLSX → Response, one sheet named 数据
JSON → JSONResponse, Body: {"rows": int, "fields": list[str], "data": list[dict]}

All table building lives in ExportService; the router only handles
HTTP plumbing (serialisation, content-type, error mapping).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterator
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, Response, StreamingResponse

from app.api.dependencies import get_filtered_records
from app.domain.buzz_record import BuzzRecord
from app.services.export_service import ExportResult, ExportService, encode_csv, encode_xlsx, get_export_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"])

_VALID_FORMATS = frozenset({"csv", "xlsx", "json"})
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(filename: str) -> str:
    return f"attachment; filename*=UTF-8''{quote(filename)}"


def _to_csv_streaming(result: ExportResult, filename: str) -> StreamingResponse:
    """Stream *result* as a UTF-8 CSV file download."""

    def _generate() -> Iterator[str]:
        # BOM so spreadsheet apps detect UTF-8 for the Chinese labels
        yield "\ufeff"
        yield encode_csv(result)

    return StreamingResponse(
        content=_generate(),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": _attachment(filename),
            "X-Row-Count": str(len(result.rows)),
        },
    )


@router.get("/export", summary="Export the filtered dataset")
def export_dataset(
    output_format: str = Query(
        default="csv",
        alias="format",
        description='Output format: "csv", "xlsx" or "json".',
    ),
    columns: list[str] | None = Query(default=None, description="Column keys to export."),
    records: list[BuzzRecord] = Depends(get_filtered_records),
    service: ExportService = Depends(get_export_service),
) -> Response:
    if output_format not in _VALID_FORMATS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid format {output_format!r}. Must be one of: {sorted(_VALID_FORMATS)}.",
        )

    column_keys = [part.strip() for value in columns or [] for part in value.split(",") if part.strip()]
    try:
        result = service.export(records, column_keys=column_keys or None)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc

    logger.info("Export format=%r rows=%d columns=%d", output_format, len(result.rows), len(result.fields))

    stem = f"buzz_export_{date.today().isoformat()}"
    if output_format == "csv":
        return _to_csv_streaming(result, f"{stem}.csv")
    if output_format == "xlsx":
        return Response(
            content=encode_xlsx(result),
            media_type=XLSX_MEDIA_TYPE,
            headers={
                "Content-Disposition": _attachment(f"{stem}.xlsx"),
                "X-Row-Count": str(len(result.rows)),
            },
        )
    return JSONResponse(
        content={
            "rows": len(result.rows),
            "fields": result.fields,
            "data": result.rows,
        }
    )
