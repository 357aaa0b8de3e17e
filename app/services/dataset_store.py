"""
app/services/dataset_store.py

Process-local holder for the one dataset currently loaded.

Importing a sheet replaces the dataset wholesale; readers always see either
the previous or the new dataset, never a mix. Nothing is persisted.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache
from typing import Sequence

from app.domain.buzz_record import BuzzRecord

logger = logging.getLogger(__name__)


class DatasetNotLoadedError(LookupError):
    """
    Raised when an analytics request arrives before any import.
    """

    code = "dataset_not_loaded"

    def __init__(self, message: str = "No dataset loaded. Import a workbook first.") -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class LoadedDataset:
    records: tuple[BuzzRecord, ...]
    sheet_name: str | None = None
    source_filename: str | None = None
    warnings: tuple[str, ...] = ()
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class DatasetStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._dataset: LoadedDataset | None = None

    def load(
        self,
        records: Sequence[BuzzRecord],
        *,
        sheet_name: str | None = None,
        source_filename: str | None = None,
        warnings: Sequence[str] = (),
    ) -> LoadedDataset:
        dataset = LoadedDataset(
            records=tuple(records),
            sheet_name=sheet_name,
            source_filename=source_filename,
            warnings=tuple(warnings),
        )
        with self._lock:
            self._dataset = dataset
        logger.info(
            "Dataset loaded file=%r sheet=%r records=%d",
            source_filename,
            sheet_name,
            len(dataset.records),
        )
        return dataset

    def get(self) -> LoadedDataset | None:
        with self._lock:
            return self._dataset

    def require(self) -> LoadedDataset:
        dataset = self.get()
        if dataset is None:
            raise DatasetNotLoadedError()
        return dataset

    def clear(self) -> None:
        with self._lock:
            self._dataset = None


@lru_cache(maxsize=1)
def get_dataset_store() -> DatasetStore:
    return DatasetStore()
