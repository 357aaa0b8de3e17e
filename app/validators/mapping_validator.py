"""
app/validators/mapping_validator.py

Validation for header resolution and workbook structure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from app.mappers.schema_mapper import HeaderResolution


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping issue detail.
    """

    code: str
    message: str
    canonical_field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None


class WorkbookStructureError(ValueError):
    """
    Raised when a sheet cannot be imported at all (no usable header row,
    unknown sheet, unreadable source).
    """

    def __init__(
        self,
        *,
        message: str,
        code: str = "invalid_structure",
        errors: Sequence[MappingErrorDetail] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "canonical_field": error.canonical_field,
                    "source_column": error.source_column,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class MappingValidator:
    """
    Turns a header resolution into non-fatal mapping issues.
    """

    def require_header_row(self, header_row: Sequence[Any] | None) -> None:
        """
        Raise WorkbookStructureError when the header row is absent or blank.
        """

        if header_row is None:
            raise WorkbookStructureError(
                message="Sheet has no header row (expected on row 2).",
                code="missing_header_row",
            )
        if all(_is_blank(cell) for cell in header_row):
            raise WorkbookStructureError(
                message="Header row (row 2) is empty; cannot resolve columns.",
                code="empty_header_row",
            )

    def validate(self, resolution: HeaderResolution) -> list[MappingErrorDetail]:
        """
        Collect issues in a stable order: missing required, unresolved, duplicate.
        """

        issues: list[MappingErrorDetail] = []

        for required in resolution.missing_required:
            issues.append(
                MappingErrorDetail(
                    code="required_field_unmapped",
                    message=f"Missing required column: {required}.",
                    canonical_field=required,
                    context={"source_headers": list(resolution.source_headers)},
                )
            )

        for header in resolution.unresolved_headers:
            issues.append(
                MappingErrorDetail(
                    code="unresolved_column",
                    message=f"Column {header!r} was not recognized and is ignored.",
                    source_column=header,
                )
            )

        for header, canonical in resolution.duplicate_headers:
            issues.append(
                MappingErrorDetail(
                    code="duplicate_column",
                    message=(
                        f"Column {header!r} also maps to {canonical}; "
                        "the earlier column is kept."
                    ),
                    canonical_field=canonical,
                    source_column=header,
                )
            )

        return issues


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value != value:
        return True
    return str(value).strip() == ""
