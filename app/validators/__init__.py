"""
app/validators package marker.
"""

from app.validators.mapping_validator import MappingErrorDetail, MappingValidator, WorkbookStructureError
from app.validators.sheet_validator import SheetRowValidator

__all__ = [
    "MappingErrorDetail",
    "MappingValidator",
    "SheetRowValidator",
    "WorkbookStructureError",
]
