from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from app.config import load_env_files
from app.services.dataset_store import get_dataset_store


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    load_env_files()
    _configure_logging()

    application = FastAPI(
        title="Buzz Insights API",
        version="1.0.0",
    )

    from app.api.routers import (
        analytics_router,
        dashboard_router,
        export_router,
        workbook_ingestion_router,
    )

    application.include_router(workbook_ingestion_router)
    application.include_router(dashboard_router)
    application.include_router(analytics_router)
    application.include_router(export_router)

    @application.get("/health")
    def healthcheck() -> dict[str, object]:
        dataset = get_dataset_store().get()
        return {
            "status": "ok",
            "dataset_loaded": dataset is not None,
            "records": len(dataset.records) if dataset is not None else 0,
        }

    return application


app = create_app()
