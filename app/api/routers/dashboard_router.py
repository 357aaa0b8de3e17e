"""
app/api/routers/dashboard_router.py

Dashboard read endpoints over the loaded dataset.

Every endpoint takes the shared filter query parameters (categories, year,
months, quadrants, keyword). All computation lives in the services.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from analytics.scaling import should_use_log_scale
from app.api.dependencies import get_filtered_records, get_loaded_dataset
from app.config import AnalyticsSettings, get_analytics_settings
from app.domain.buzz_record import BuzzRecord, ChartDataPoint
from app.schemas.dashboard import (
    ChartPointListResponse,
    ChartPointResponse,
    FilterOptionsResponse,
    InsightListResponse,
    InsightResponse,
    RecommendationListResponse,
    RecommendationResponse,
    SummaryStatsResponse,
    TrendPointResponse,
    TrendResponse,
)
from app.services.aggregation_service import (
    SUPPORTED_METRICS,
    TrendMetric,
    aggregate_trend,
    quadrant_points,
    summary_stats,
    top_keywords,
)
from app.services.dataset_store import LoadedDataset
from app.services.filter_service import available_options
from app.services.insight_service import generate_insights, recommend_keywords

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _require_metric(metric: str) -> None:
    if metric not in SUPPORTED_METRICS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid metric {metric!r}. Must be one of: {list(SUPPORTED_METRICS)}.",
        )


def _chart_response(points: list[ChartDataPoint], settings: AnalyticsSettings) -> ChartPointListResponse:
    return ChartPointListResponse(
        points=[
            ChartPointResponse(
                keyword=point.keyword,
                buzz=point.buzz,
                yoy=point.yoy,
                search=point.search,
                quadrant=point.quadrant,
                category=point.category,
            )
            for point in points
        ],
        use_log_scale=should_use_log_scale([point.buzz for point in points], settings=settings),
    )


@router.get("/stats", response_model=SummaryStatsResponse)
def get_stats(records: list[BuzzRecord] = Depends(get_filtered_records)) -> SummaryStatsResponse:
    stats = summary_stats(records)
    return SummaryStatsResponse(
        total_buzz=stats.total_buzz,
        avg_yoy=stats.avg_yoy,
        total_search=stats.total_search,
        keyword_count=stats.keyword_count,
        top_keywords=stats.top_keywords,
    )


@router.get("/trend", response_model=TrendResponse)
def get_trend(
    metric: str = Query(default=TrendMetric.BUZZ, description='"buzz", "search" or "yoy".'),
    records: list[BuzzRecord] = Depends(get_filtered_records),
    categories: list[str] | None = Query(default=None),
) -> TrendResponse:
    """
    Per-period, per-category trend series. When categories are given they
    also fix the order of series within each period.
    """

    _require_metric(metric)
    allowlist = [part.strip() for value in categories or [] for part in value.split(",") if part.strip()]
    points = aggregate_trend(records, metric, allowlist or None)
    return TrendResponse(
        metric=metric,
        points=[
            TrendPointResponse(
                period=point.period,
                year=point.year,
                month=point.month,
                category=point.category,
                value=point.value,
                count=point.count,
            )
            for point in points
        ],
    )


@router.get("/top-keywords", response_model=ChartPointListResponse)
def get_top_keywords(
    limit: int = Query(default=10, ge=1, le=500),
    sort_by: str = Query(default=TrendMetric.BUZZ, description='"buzz", "search" or "yoy".'),
    records: list[BuzzRecord] = Depends(get_filtered_records),
    settings: AnalyticsSettings = Depends(get_analytics_settings),
) -> ChartPointListResponse:
    _require_metric(sort_by)
    return _chart_response(top_keywords(records, limit=limit, sort_by=sort_by), settings)


@router.get("/quadrant", response_model=ChartPointListResponse)
def get_quadrant(
    records: list[BuzzRecord] = Depends(get_filtered_records),
    settings: AnalyticsSettings = Depends(get_analytics_settings),
) -> ChartPointListResponse:
    return _chart_response(quadrant_points(records), settings)


@router.get("/filter-options", response_model=FilterOptionsResponse)
def get_filter_options(dataset: LoadedDataset = Depends(get_loaded_dataset)) -> FilterOptionsResponse:
    """
    Distinct values over the whole dataset, ignoring any filter.
    """

    options = available_options(dataset.records)
    return FilterOptionsResponse(
        categories=options.categories,
        quadrants=options.quadrants,
        years=options.years,
        periods=options.periods,
    )


@router.get("/insights", response_model=InsightListResponse)
def get_insights(records: list[BuzzRecord] = Depends(get_filtered_records)) -> InsightListResponse:
    return InsightListResponse(
        insights=[
            InsightResponse(kind=item.kind, message=item.message, keyword=item.keyword, value=item.value)
            for item in generate_insights(records)
        ]
    )


@router.get("/recommendations", response_model=RecommendationListResponse)
def get_recommendations(
    limit: int = Query(default=10, ge=1, le=100),
    records: list[BuzzRecord] = Depends(get_filtered_records),
) -> RecommendationListResponse:
    return RecommendationListResponse(
        recommendations=[
            RecommendationResponse(keyword=item.keyword, reason=item.reason, score=item.score)
            for item in recommend_keywords(records, limit=limit)
        ]
    )
