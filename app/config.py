"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class AnalyticsSettings:
    """
    Tunable thresholds for the statistical analytics layer.
    """

    anomaly_high_sigma: float = 3.0
    anomaly_medium_sigma: float = 2.0
    anomaly_min_yoy_percent: float = 50.0
    anomaly_min_points: int = 3
    log_scale_multiplier: float = 10.0
    correlation_strong: float = 0.7
    correlation_medium: float = 0.4
    trend_min_points: int = 3
    trend_noise_threshold: float = 0.1


@dataclass(frozen=True)
class IngestionSettings:
    """
    Runtime settings for workbook ingestion and export.
    """

    max_warnings: int = 10
    export_chunk_size: int = 100
    log_column_mapping: bool = True


@lru_cache(maxsize=1)
def get_analytics_settings() -> AnalyticsSettings:
    """
    Return cached analytics settings from environment variables.
    """

    high = max(0.0, _get_float_env("ANALYTICS_ANOMALY_HIGH_SIGMA", 3.0))
    medium = max(0.0, _get_float_env("ANALYTICS_ANOMALY_MEDIUM_SIGMA", 2.0))
    strong = max(0.0, min(1.0, _get_float_env("ANALYTICS_CORRELATION_STRONG", 0.7)))
    return AnalyticsSettings(
        anomaly_high_sigma=max(high, medium),
        anomaly_medium_sigma=min(high, medium),
        anomaly_min_yoy_percent=max(0.0, _get_float_env("ANALYTICS_ANOMALY_MIN_YOY_PERCENT", 50.0)),
        anomaly_min_points=max(2, _get_int_env("ANALYTICS_ANOMALY_MIN_POINTS", 3)),
        log_scale_multiplier=max(1.0, _get_float_env("ANALYTICS_LOG_SCALE_MULTIPLIER", 10.0)),
        correlation_strong=strong,
        correlation_medium=max(0.0, min(strong, _get_float_env("ANALYTICS_CORRELATION_MEDIUM", 0.4))),
        trend_min_points=max(3, _get_int_env("ANALYTICS_TREND_MIN_POINTS", 3)),
        trend_noise_threshold=max(0.0, _get_float_env("ANALYTICS_TREND_NOISE_THRESHOLD", 0.1)),
    )


@lru_cache(maxsize=1)
def get_ingestion_settings() -> IngestionSettings:
    """
    Return cached ingestion settings from environment variables.
    """

    return IngestionSettings(
        max_warnings=max(1, _get_int_env("INGEST_MAX_WARNINGS", 10)),
        export_chunk_size=max(1, _get_int_env("INGEST_EXPORT_CHUNK_SIZE", 100)),
        log_column_mapping=_get_bool_env("INGEST_LOG_COLUMN_MAPPING", True),
    )
