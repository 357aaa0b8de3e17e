"""
app/schemas/analytics.py

Response schemas for statistical analytics endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CorrelationPairResponse(BaseModel):
    first: str
    second: str
    r: float = Field(..., ge=-1.0, le=1.0)
    strength: str
    direction: str


class CorrelationResponse(BaseModel):
    labels: list[str] = Field(default_factory=list)
    matrix: list[list[float]] = Field(default_factory=list)
    pairs: list[CorrelationPairResponse] = Field(default_factory=list)


class AnomalyResponse(BaseModel):
    keyword: str
    period: str
    year: int
    month: str
    metric: str
    value: float
    expected_value: float
    deviation: float
    severity: str


class AnomalyListResponse(BaseModel):
    anomalies: list[AnomalyResponse] = Field(default_factory=list)


class CategoryMetricsResponse(BaseModel):
    category: str
    total_buzz: float
    avg_yoy: float
    keyword_count: int = Field(..., ge=0)
    share_of_voice: float
    growth_momentum: float


class CategoryListResponse(BaseModel):
    categories: list[CategoryMetricsResponse] = Field(default_factory=list)


class KeywordBuzzResponse(BaseModel):
    keyword: str
    buzz: float
    yoy: float


class SubcategoryMetricsResponse(BaseModel):
    category: str
    subcategory: str
    total_buzz: float
    avg_yoy: float
    keyword_count: int = Field(..., ge=0)
    share_in_category: float
    growth_momentum: float
    top_keywords: list[KeywordBuzzResponse] = Field(default_factory=list)


class SubcategoryListResponse(BaseModel):
    category: str
    supported: bool
    subcategories: list[SubcategoryMetricsResponse] = Field(default_factory=list)


class SeasonalityPointResponse(BaseModel):
    month: int = Field(..., ge=1, le=12)
    label: str
    avg_buzz: float
    avg_yoy: float
    data_points: int = Field(..., ge=0)


class SeasonalityResponse(BaseModel):
    months: list[SeasonalityPointResponse] = Field(default_factory=list)


class SeriesPointResponse(BaseModel):
    period: str
    value: float


class TrendPredictionResponse(BaseModel):
    slope: float
    intercept: float
    r_squared: float
    next_value: float
    trend: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class TrendAnalysisResponse(BaseModel):
    """
    ``prediction`` is null when the series is too short to classify.
    """

    metric: str
    keyword: str | None = None
    series: list[SeriesPointResponse] = Field(default_factory=list)
    prediction: TrendPredictionResponse | None = None
    use_log_scale: bool = False


class DimensionKeywordResponse(BaseModel):
    keyword: str
    heat: float
    growth: float
    dimension: str
    months: list[str] = Field(default_factory=list)


class DimensionDetailResponse(BaseModel):
    keyword_count: int = Field(..., ge=0)
    total_buzz: float
    avg_growth: float
    top_keywords: list[DimensionKeywordResponse] = Field(default_factory=list)


class DimensionAnalysisResponse(BaseModel):
    category: str
    dimension: str
    counts: dict[str, int] = Field(default_factory=dict)
    keywords: list[DimensionKeywordResponse] = Field(default_factory=list)
    detail: DimensionDetailResponse


class DimensionPeriodChangeResponse(BaseModel):
    dimension: str
    period1_buzz: float
    period2_buzz: float
    buzz_change: float
    period1_keywords: int = Field(..., ge=0)
    period2_keywords: int = Field(..., ge=0)
    keyword_change: float


class DimensionComparisonResponse(BaseModel):
    category: str
    changes: list[DimensionPeriodChangeResponse] = Field(default_factory=list)
