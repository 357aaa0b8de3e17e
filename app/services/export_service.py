"""
app/services/export_service.py

Tabular export of the filtered record set.

Rows are produced in fixed-size chunks. Each chunk carries a progress event
so a host (HTTP handler, CLI, UI worker) can report progress between
batches:

    for chunk in iter_export_chunks(records, columns, chunk_size=100):
        send(chunk.progress)

Columns are keyed by their display label, in the order they were selected.
Metric values are exported as stored (yoy/mom stay ratios).

No HTTP concerns live here; the router only picks the encoding.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

import pandas as pd

from app.config import get_ingestion_settings
from app.domain.buzz_record import BuzzRecord, CanonicalField

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100
XLSX_SHEET_NAME = "数据"


# ---------------------------------------------------------------------------
# Column catalogue
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExportColumn:
    key: str
    label: str
    default_selected: bool = True


EXPORT_COLUMNS: tuple[ExportColumn, ...] = (
    ExportColumn(CanonicalField.YEAR, "年份"),
    ExportColumn(CanonicalField.MONTH, "月份"),
    ExportColumn(CanonicalField.CATEGORY, "品类"),
    ExportColumn(CanonicalField.KEYWORD, "关键词"),
    ExportColumn(CanonicalField.BUZZ_CHANNEL_A, "小红书声量"),
    ExportColumn(CanonicalField.BUZZ_CHANNEL_B, "抖音声量"),
    ExportColumn(CanonicalField.BUZZ_TOTAL, "总声量"),
    ExportColumn(CanonicalField.BUZZ_YOY, "声量同比增速"),
    ExportColumn(CanonicalField.BUZZ_MOM, "声量环比增速", default_selected=False),
    ExportColumn(CanonicalField.SEARCH_CHANNEL_A, "小红书搜索量"),
    ExportColumn(CanonicalField.SEARCH_CHANNEL_A_VS_REF, "小红书搜索vs12月", default_selected=False),
    ExportColumn(CanonicalField.SEARCH_CHANNEL_B, "抖音搜索量"),
    ExportColumn(CanonicalField.SEARCH_CHANNEL_B_VS_REF, "抖音搜索vs12月", default_selected=False),
    ExportColumn(CanonicalField.QUADRANT, "象限分类"),
)

_COLUMNS_BY_KEY: dict[str, ExportColumn] = {column.key: column for column in EXPORT_COLUMNS}


def resolve_columns(keys: Sequence[str] | None = None) -> list[ExportColumn]:
    """
    Map selected column keys to definitions; nothing selected means the defaults.

    Raises ValueError for an unknown key.
    """

    if not keys:
        return [column for column in EXPORT_COLUMNS if column.default_selected]
    unknown = [key for key in keys if key not in _COLUMNS_BY_KEY]
    if unknown:
        raise ValueError(f"Unknown export columns {unknown}; expected any of {sorted(_COLUMNS_BY_KEY)}.")
    # de-duplicate while keeping selection order
    return [_COLUMNS_BY_KEY[key] for key in dict.fromkeys(keys)]


# ---------------------------------------------------------------------------
# Progress and result containers
# ---------------------------------------------------------------------------


class ExportStatus:
    PREPARING = "preparing"
    EXPORTING = "exporting"
    COMPLETED = "completed"


@dataclass(frozen=True)
class ExportProgress:
    status: str
    current: int
    total: int
    percentage: int
    message: str


@dataclass(frozen=True)
class ExportChunk:
    rows: list[dict[str, Any]]
    progress: ExportProgress


@dataclass
class ExportResult:
    """
    Flat tabular data ready for CSV, XLSX or JSON serialisation.

    Attributes
    ----------
    rows:   One dict per record, keyed by column label.
    fields: Ordered column labels.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)


ProgressCallback = Callable[[ExportProgress], None]


# ---------------------------------------------------------------------------
# Chunked export
# ---------------------------------------------------------------------------


def _percentage(current: int, total: int) -> int:
    if total <= 0:
        return 100
    return round(current / total * 100)


def iter_export_chunks(
    records: Sequence[BuzzRecord],
    columns: Sequence[ExportColumn],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[ExportChunk]:
    """
    Yield the export rows in chunks of at most *chunk_size*.

    An empty record set yields nothing.
    """

    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1.")

    total = len(records)
    for start in range(0, total, chunk_size):
        batch = records[start : start + chunk_size]
        rows = [{column.label: getattr(record, column.key) for column in columns} for record in batch]
        current = min(start + chunk_size, total)
        percentage = _percentage(current, total)
        yield ExportChunk(
            rows=rows,
            progress=ExportProgress(
                status=ExportStatus.EXPORTING,
                current=current,
                total=total,
                percentage=percentage,
                message=f"Processing rows... {percentage}%",
            ),
        )


def build_export_table(
    records: Sequence[BuzzRecord],
    columns: Sequence[ExportColumn] | None = None,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_progress: ProgressCallback | None = None,
) -> ExportResult:
    """
    Drive :func:`iter_export_chunks` to completion.

    *on_progress* receives one ``preparing`` event, one ``exporting`` event
    per chunk and a final ``completed`` event.
    """

    selected = list(columns) if columns else resolve_columns()
    total = len(records)
    notify = on_progress or (lambda _progress: None)

    notify(ExportProgress(ExportStatus.PREPARING, 0, total, 0, "Preparing data..."))
    rows: list[dict[str, Any]] = []
    for chunk in iter_export_chunks(records, selected, chunk_size):
        rows.extend(chunk.rows)
        notify(chunk.progress)
    notify(ExportProgress(ExportStatus.COMPLETED, total, total, 100, "Export complete"))

    return ExportResult(rows=rows, fields=[column.label for column in selected])


# ---------------------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------------------


def encode_csv(result: ExportResult) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(
        buf,
        fieldnames=result.fields,
        extrasaction="ignore",
        restval="",
        lineterminator="\r\n",
    )
    writer.writeheader()
    for row in result.rows:
        writer.writerow({key: ("" if value is None else value) for key, value in row.items()})
    return buf.getvalue()


def encode_xlsx(result: ExportResult) -> bytes:
    frame = pd.DataFrame(result.rows, columns=result.fields)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=XLSX_SHEET_NAME, index=False)
        sheet = writer.sheets[XLSX_SHEET_NAME]
        for index, label in enumerate(result.fields):
            letter = sheet.cell(row=1, column=index + 1).column_letter
            sheet.column_dimensions[letter].width = max(len(label) * 2, 12)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ExportService:
    """
    Builds export tables with the configured chunk size.
    """

    def __init__(self, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._chunk_size = max(1, chunk_size)

    def export(
        self,
        records: Sequence[BuzzRecord],
        *,
        column_keys: Sequence[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ExportResult:
        columns = resolve_columns(column_keys)

        def _log_progress(progress: ExportProgress) -> None:
            logger.debug(
                "Export progress status=%s current=%d total=%d percentage=%d",
                progress.status,
                progress.current,
                progress.total,
                progress.percentage,
            )
            if on_progress is not None:
                on_progress(progress)

        return build_export_table(
            records,
            columns,
            chunk_size=self._chunk_size,
            on_progress=_log_progress,
        )


_service: ExportService | None = None


def get_export_service() -> ExportService:
    global _service
    if _service is None:
        _service = ExportService(chunk_size=get_ingestion_settings().export_chunk_size)
    return _service
