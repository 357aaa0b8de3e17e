"""
app/api/routers package marker.
"""

from app.api.routers.analytics_router import router as analytics_router
from app.api.routers.dashboard_router import router as dashboard_router
from app.api.routers.export_router import router as export_router
from app.api.routers.workbook_ingestion import router as workbook_ingestion_router

__all__ = [
    "analytics_router",
    "dashboard_router",
    "export_router",
    "workbook_ingestion_router",
]
