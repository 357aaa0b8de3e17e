"""
app/api/routers/analytics_router.py

Statistical analytics endpoints over the filtered dataset.

Insufficient data never errors: empty lists, identity matrices and a null
prediction are valid answers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from analytics.anomaly import detect_keyword_anomalies
from analytics.correlation import classify_correlation, correlation_matrix
from analytics.rollups import analyze_categories, analyze_subcategories, has_subcategories
from analytics.scaling import should_use_log_scale
from analytics.seasonality import analyze_seasonality
from analytics.trend import period_series, predict_trend
from app.api.dependencies import get_filtered_records
from app.config import AnalyticsSettings, get_analytics_settings
from app.domain.buzz_record import BuzzRecord
from app.schemas.analytics import (
    AnomalyListResponse,
    AnomalyResponse,
    CategoryListResponse,
    CategoryMetricsResponse,
    CorrelationPairResponse,
    CorrelationResponse,
    DimensionAnalysisResponse,
    DimensionComparisonResponse,
    DimensionDetailResponse,
    DimensionKeywordResponse,
    DimensionPeriodChangeResponse,
    KeywordBuzzResponse,
    SeasonalityPointResponse,
    SeasonalityResponse,
    SeriesPointResponse,
    SubcategoryListResponse,
    SubcategoryMetricsResponse,
    TrendAnalysisResponse,
    TrendPredictionResponse,
)
from app.services.aggregation_service import SUPPORTED_METRICS, TrendMetric
from dimensions.service import (
    DimensionKeyword,
    PeriodScope,
    compare_dimension_periods,
    dimension_detail_stats,
    dimension_stats,
    keywords_by_dimension,
)
from dimensions.vocabulary import ALL_DIMENSIONS, DIMENSION_ORDER

router = APIRouter(prefix="/analytics", tags=["analytics"])

_VALID_DIMENSIONS = frozenset({ALL_DIMENSIONS, *DIMENSION_ORDER})


def _keyword_response(entry: DimensionKeyword) -> DimensionKeywordResponse:
    return DimensionKeywordResponse(
        keyword=entry.keyword,
        heat=entry.heat,
        growth=entry.growth,
        dimension=entry.dimension,
        months=entry.months,
    )


def _month_list(values: list[str] | None) -> tuple[str, ...]:
    return tuple(part.strip() for value in values or [] for part in value.split(",") if part.strip())


@router.get("/correlation", response_model=CorrelationResponse)
def get_correlation(
    records: list[BuzzRecord] = Depends(get_filtered_records),
    settings: AnalyticsSettings = Depends(get_analytics_settings),
) -> CorrelationResponse:
    result = correlation_matrix(records)
    pairs: list[CorrelationPairResponse] = []
    for i, first in enumerate(result.labels):
        for j in range(i + 1, len(result.labels)):
            r = result.matrix[i][j]
            strength = classify_correlation(r, settings=settings)
            pairs.append(
                CorrelationPairResponse(
                    first=first,
                    second=result.labels[j],
                    r=r,
                    strength=strength.strength,
                    direction=strength.direction,
                )
            )
    return CorrelationResponse(labels=result.labels, matrix=result.matrix, pairs=pairs)


@router.get("/anomalies", response_model=AnomalyListResponse)
def get_anomalies(
    limit: int = Query(default=50, ge=1, le=1000),
    records: list[BuzzRecord] = Depends(get_filtered_records),
    settings: AnalyticsSettings = Depends(get_analytics_settings),
) -> AnomalyListResponse:
    anomalies = detect_keyword_anomalies(records, settings=settings)[:limit]
    return AnomalyListResponse(
        anomalies=[
            AnomalyResponse(
                keyword=item.keyword,
                period=item.period,
                year=item.year,
                month=item.month,
                metric=item.metric,
                value=item.value,
                expected_value=item.expected_value,
                deviation=item.deviation,
                severity=item.severity,
            )
            for item in anomalies
        ]
    )


@router.get("/categories", response_model=CategoryListResponse)
def get_categories(records: list[BuzzRecord] = Depends(get_filtered_records)) -> CategoryListResponse:
    return CategoryListResponse(
        categories=[
            CategoryMetricsResponse(
                category=item.category,
                total_buzz=item.total_buzz,
                avg_yoy=item.avg_yoy,
                keyword_count=item.keyword_count,
                share_of_voice=item.share_of_voice,
                growth_momentum=item.growth_momentum,
            )
            for item in analyze_categories(records)
        ]
    )


@router.get("/subcategories/{category}", response_model=SubcategoryListResponse)
def get_subcategories(
    category: str,
    records: list[BuzzRecord] = Depends(get_filtered_records),
) -> SubcategoryListResponse:
    return SubcategoryListResponse(
        category=category,
        supported=has_subcategories(category),
        subcategories=[
            SubcategoryMetricsResponse(
                category=item.category,
                subcategory=item.subcategory,
                total_buzz=item.total_buzz,
                avg_yoy=item.avg_yoy,
                keyword_count=item.keyword_count,
                share_in_category=item.share_in_category,
                growth_momentum=item.growth_momentum,
                top_keywords=[
                    KeywordBuzzResponse(keyword=top.keyword, buzz=top.buzz, yoy=top.yoy)
                    for top in item.top_keywords
                ],
            )
            for item in analyze_subcategories(records, category)
        ],
    )


@router.get("/seasonality", response_model=SeasonalityResponse)
def get_seasonality(records: list[BuzzRecord] = Depends(get_filtered_records)) -> SeasonalityResponse:
    return SeasonalityResponse(
        months=[
            SeasonalityPointResponse(
                month=item.month,
                label=item.label,
                avg_buzz=item.avg_buzz,
                avg_yoy=item.avg_yoy,
                data_points=item.data_points,
            )
            for item in analyze_seasonality(records)
        ]
    )


@router.get("/trend", response_model=TrendAnalysisResponse)
def get_trend_analysis(
    metric: str = Query(default=TrendMetric.BUZZ, description='"buzz", "search" or "yoy".'),
    keyword: str | None = Query(default=None, description="Exact keyword; omit for the whole filtered set."),
    records: list[BuzzRecord] = Depends(get_filtered_records),
    settings: AnalyticsSettings = Depends(get_analytics_settings),
) -> TrendAnalysisResponse:
    """
    Chronological series plus a linear trend classification.

    Note that ``keyword`` here selects one keyword exactly and is applied on
    top of the substring filter of the same name.
    """

    if metric not in SUPPORTED_METRICS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid metric {metric!r}. Must be one of: {list(SUPPORTED_METRICS)}.",
        )
    series = period_series(records, metric, keyword=keyword)
    values = [point.value for point in series]
    prediction = predict_trend(values, settings=settings)
    return TrendAnalysisResponse(
        metric=metric,
        keyword=keyword,
        series=[SeriesPointResponse(period=point.period, value=point.value) for point in series],
        prediction=(
            TrendPredictionResponse(
                slope=prediction.slope,
                intercept=prediction.intercept,
                r_squared=prediction.r_squared,
                next_value=prediction.next_value,
                trend=prediction.trend,
                confidence=prediction.confidence,
            )
            if prediction is not None
            else None
        ),
        use_log_scale=should_use_log_scale(values, settings=settings),
    )


@router.get("/dimensions/{category}", response_model=DimensionAnalysisResponse)
def get_dimensions(
    category: str,
    dimension: str = Query(default=ALL_DIMENSIONS, description="Dimension to list, or \"all\"."),
    records: list[BuzzRecord] = Depends(get_filtered_records),
) -> DimensionAnalysisResponse:
    if dimension not in _VALID_DIMENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid dimension {dimension!r}. Must be one of: {sorted(_VALID_DIMENSIONS)}.",
        )
    detail = dimension_detail_stats(records, category, dimension)
    return DimensionAnalysisResponse(
        category=category,
        dimension=dimension,
        counts=dimension_stats(records, category),
        keywords=[_keyword_response(entry) for entry in keywords_by_dimension(records, category, dimension)],
        detail=DimensionDetailResponse(
            keyword_count=detail.keyword_count,
            total_buzz=detail.total_buzz,
            avg_growth=detail.avg_growth,
            top_keywords=[_keyword_response(entry) for entry in detail.top_keywords],
        ),
    )


@router.get("/dimensions/{category}/compare", response_model=DimensionComparisonResponse)
def compare_dimensions(
    category: str,
    year1: int = Query(..., description="Year of the first period."),
    year2: int = Query(..., description="Year of the second period."),
    months1: list[str] | None = Query(default=None),
    months2: list[str] | None = Query(default=None),
    records: list[BuzzRecord] = Depends(get_filtered_records),
) -> DimensionComparisonResponse:
    changes = compare_dimension_periods(
        records,
        category,
        PeriodScope(year=year1, months=_month_list(months1)),
        PeriodScope(year=year2, months=_month_list(months2)),
    )
    return DimensionComparisonResponse(
        category=category,
        changes=[
            DimensionPeriodChangeResponse(
                dimension=change.dimension,
                period1_buzz=change.period1_buzz,
                period2_buzz=change.period2_buzz,
                buzz_change=change.buzz_change,
                period1_keywords=change.period1_keywords,
                period2_keywords=change.period2_keywords,
                keyword_change=change.keyword_change,
            )
            for change in changes
        ],
    )
